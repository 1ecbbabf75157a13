"""Scoring rules that guess which account is active in a repository."""

from __future__ import annotations

import math
from typing import Iterable, Optional, Tuple

from .models import Account, AuthMethod, GitUser, RemoteInfo

MATCH_RATIO = 0.5


def score_account(
   account: Account, git_user: Optional[GitUser], remote: Optional[RemoteInfo]
) -> Tuple[int, int]:
   """
   Return (matches, total_checks) for one account.

   Each check applies only when both sides have data: user.name and
   user.email need the account field set, the remote check needs a readable
   origin URL.
   """
   matches = 0
   total = 0

   if git_user is not None:
      if account.git_user_name:
         total += 1
         if git_user.user_name == account.git_user_name:
            matches += 1
      if account.git_email:
         total += 1
         if git_user.user_email == account.git_email:
            matches += 1

   if remote is not None:
      total += 1
      if remote.auth_type is AuthMethod.SSH and account.ssh is not None:
         matches += 1
      elif remote.auth_type is AuthMethod.TOKEN and account.token is not None:
         matches += 1

   return matches, total


def is_match(matches: int, total: int) -> bool:
   return matches > 0 and matches >= math.ceil(total * MATCH_RATIO)


def match_account(
   accounts: Iterable[Account], git_user: Optional[GitUser], remote: Optional[RemoteInfo]
) -> Optional[str]:
   """First account (in list order) whose score passes the threshold."""
   if git_user is None and remote is None:
      return None

   for account in accounts:
      if is_match(*score_account(account, git_user, remote)):
         return account.name
   return None
