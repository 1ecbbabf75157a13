"""Domain-specific exceptions for ghswitch."""

from __future__ import annotations

from typing import Optional, Sequence


class GithubSwitchError(Exception):
   """Base exception for all ghswitch domain errors."""
   pass


class CommandFailed(GithubSwitchError):
   """External command exited non-zero or could not be started."""

   def __init__(self, cmd: Sequence[str], code: int, output: str = ""):
      self.cmd = list(cmd)
      self.code = code
      self.output = output.strip()
      message = self.output or f"{' '.join(self.cmd)} exited with status {code}"
      super().__init__(message)


class NotAGitRepository(GithubSwitchError):
   """Operation requires a git work tree."""
   pass


class NoAccountsConfigured(GithubSwitchError):
   """Config holds no accounts."""
   pass


class NoAuthMethod(GithubSwitchError):
   """Account has neither SSH nor token configured."""
   pass


class MethodRequired(GithubSwitchError):
   """Account has both methods configured and none was chosen."""
   pass


class OperationAborted(GithubSwitchError):
   """User declined a required step."""

   def __init__(self, message: Optional[str] = None):
      super().__init__(message or "Operation aborted")


class AccountNotFound(GithubSwitchError):
   """Identifier does not match any configured account."""
   pass


class KeyImportError(GithubSwitchError):
   """Private key could not be imported."""
   pass
