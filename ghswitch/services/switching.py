"""Repository and global identity switching orchestration."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, List, Optional, Union

from ..constants import DEFAULT_REMOTE, GITHUB_HOST, console
from ..core.errors import (
   MethodRequired,
   NoAccountsConfigured,
   NoAuthMethod,
   NotAGitRepository,
   OperationAborted,
)
from ..core.matching import match_account
from ..core.models import Account, AppConfig, AuthMethod, SwitchResult
from ..data.credential_store import GitCredentialsFile
from ..data.ssh_config import SshConfigFile
from ..infrastructure import git
from ..infrastructure.ssh import ensure_key_permissions, generate_ssh_key
from ..utils import expand_home

PathLike = Union[str, Path]
AskRepoPath = Callable[[], Optional[str]]
ConfirmKeyGeneration = Callable[[str], bool]

_REPO_PATH_RE = re.compile(r".+/.+")


def is_valid_repo_path(value: Optional[str]) -> bool:
   return bool(value) and bool(_REPO_PATH_RE.search(value))


def _never_generate(_key_path: str) -> bool:
   return False


class SwitchingService:
   """
   Rewrites remotes, local identity, SSH config and git credentials.

   Responsibilities:
   - Advisory detection of the active account in a repository
   - Per-repository switch over SSH or HTTPS token
   - Global `Host github.com` switch

   No step is rolled back when a later one fails; every step is safe to re-run.
   """

   def __init__(self, ssh_config: SshConfigFile, credentials: GitCredentialsFile):
      self.ssh_config = ssh_config
      self.credentials = credentials

   def detect_active_account(self, accounts: List[Account], cwd: PathLike) -> Optional[str]:
      """Guess the active account for UI highlighting only."""
      if not git.is_git_repo(cwd):
         return None
      git_user = git.get_current_git_user(cwd)
      remote = git.get_current_remote_info(cwd)
      return match_account(accounts, git_user, remote)

   @staticmethod
   def resolve_method(account: Account, requested: Optional[AuthMethod] = None) -> AuthMethod:
      """
      Pick the auth method for a switch.

      Raises:
         NoAuthMethod: If the account has no method configured
         MethodRequired: If both are configured and none was requested
      """
      methods = account.methods
      if not methods:
         raise NoAuthMethod("Selected account has no methods configured.")
      if requested is not None:
         if requested not in methods:
            raise NoAuthMethod(f"Account '{account.name}' has no {requested.label} configured.")
         return requested
      if len(methods) == 1:
         return methods[0]
      raise MethodRequired(f"Account '{account.name}' has both SSH and token; choose a method.")

   @staticmethod
   def check_preconditions(config: AppConfig, cwd: PathLike):
      if not git.is_git_repo(cwd):
         raise NotAGitRepository("Not a git repository. cd into a repo and try again.")
      if not config.accounts:
         raise NoAccountsConfigured("No accounts configured yet.")

   @staticmethod
   def resolve_repo_path(cwd: PathLike, ask_repo_path: Optional[AskRepoPath] = None) -> str:
      """`owner/repo.git` from origin, falling back to asking the user."""
      repo_path = git.parse_repo_from_url(git.get_remote_url(DEFAULT_REMOTE, cwd))
      if not repo_path:
         answer = ask_repo_path() if ask_repo_path is not None else None
         if not answer:
            raise OperationAborted("No repository path given.")
         answer = answer.strip()
         if not is_valid_repo_path(answer):
            raise OperationAborted(f"Invalid repository path: {answer} (use owner/repo)")
         repo_path = answer
      return git.with_git_suffix(repo_path)

   def ensure_key(self, account: Account, confirm_key_generation: ConfirmKeyGeneration) -> str:
      """Expanded key path for the account, generating the key when confirmed."""
      if account.ssh is None or not account.ssh.key_path:
         raise NoAuthMethod(f"Account '{account.name}' has no SSH key path configured.")

      key_path = expand_home(account.ssh.key_path)
      if not Path(key_path).exists():
         if not confirm_key_generation(key_path):
            raise OperationAborted("Operation cancelled.")
         generate_ssh_key(key_path, account.key_comment)
         console.print(f"[green]✓[/green] Generated SSH key: {key_path}")
      return key_path

   def switch_repo(
      self,
      config: AppConfig,
      account: Account,
      cwd: PathLike,
      method: Optional[AuthMethod] = None,
      ask_repo_path: Optional[AskRepoPath] = None,
      confirm_key_generation: ConfirmKeyGeneration = _never_generate,
   ) -> SwitchResult:
      """
      Point the current repository at `account`.

      Args:
         config: Loaded config (only checked for being non-empty)
         account: Target account
         cwd: Repository directory
         method: Requested method; required when the account has both
         ask_repo_path: Called when origin cannot be parsed
         confirm_key_generation: Called with the key path when the key is missing

      Raises:
         NotAGitRepository, NoAccountsConfigured, NoAuthMethod, MethodRequired,
         OperationAborted, CommandFailed
      """
      self.check_preconditions(config, cwd)
      chosen = self.resolve_method(account, method)
      repo_path = self.resolve_repo_path(cwd, ask_repo_path)

      if chosen is AuthMethod.SSH:
         key_path = self.ensure_key(account, confirm_key_generation)
         ensure_key_permissions(key_path)
         # Plain Host github.com keeps git@github.com URLs working without aliases
         self.ssh_config.ensure_block(GITHUB_HOST, key_path)
         remote_url = f"git@{GITHUB_HOST}:{repo_path}"
         git.set_remote_url(remote_url, DEFAULT_REMOTE, cwd)
         git.set_local_git_identity(account.git_user_name, account.git_email, cwd)
         return SwitchResult(account.name, chosen, remote_url)

      remote_url = f"https://{GITHUB_HOST}/{repo_path}"
      git.set_remote_url(remote_url, DEFAULT_REMOTE, cwd)
      git.set_local_git_identity(account.git_user_name, account.git_email, cwd)
      if not git.ensure_credential_store(
         account.token.username, account.token.token, self.credentials, cwd
      ):
         console.print("[yellow]Warning: could not set credential.helper=store for this repository[/yellow]")
      return SwitchResult(account.name, chosen, remote_url)

   def switch_global_ssh(
      self, account: Account, confirm_key_generation: ConfirmKeyGeneration = _never_generate
   ) -> str:
      """Make `Host github.com` use the account's key. Returns the key path."""
      if account.ssh is None:
         raise NoAuthMethod("Selected account has no SSH configured.")
      key_path = self.ensure_key(account, confirm_key_generation)
      ensure_key_permissions(key_path)
      self.ssh_config.ensure_block(GITHUB_HOST, key_path)
      return key_path
