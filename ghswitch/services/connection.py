"""Connectivity checks for configured accounts."""

from __future__ import annotations

from typing import Optional

from ..constants import GITHUB_HOST
from ..core.models import Account, AuthMethod, CheckResult
from ..data.ssh_config import SshConfigFile
from ..infrastructure.github_api import GitHubAPI
from ..infrastructure.ssh import check_ssh_connection
from .switching import SwitchingService


class ConnectionService:
   """Runs single-shot SSH and token probes. Probes never raise."""

   def __init__(self, ssh_config: SshConfigFile):
      self.ssh_config = ssh_config

   def ssh_host_for(self, account: Account) -> str:
      """The account's alias when a block exists for it, else github.com."""
      alias = account.ssh.host_alias if account.ssh is not None else None
      if alias and self.ssh_config.has_block(alias):
         return alias
      return GITHUB_HOST

   def check_ssh(self, host: str = GITHUB_HOST) -> CheckResult:
      return check_ssh_connection(host)

   def check_token(self, username: str, token: str) -> CheckResult:
      return GitHubAPI.check_token(username, token)

   def check_account(self, account: Account, method: Optional[AuthMethod] = None) -> CheckResult:
      chosen = SwitchingService.resolve_method(account, method)
      if chosen is AuthMethod.SSH:
         return self.check_ssh(self.ssh_host_for(account))
      return self.check_token(account.token.username, account.token.token)
