"""Core domain models for ghswitch."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class AuthMethod(str, Enum):
   SSH = "ssh"
   TOKEN = "token"

   @property
   def label(self) -> str:
      return "SSH" if self is AuthMethod.SSH else "Token (HTTPS)"


@dataclass
class SshConfig:
   """SSH key settings. `host_alias` is only persisted when explicitly set."""

   key_path: str
   host_alias: Optional[str] = None

   @classmethod
   def from_dict(cls, data: Dict[str, Any]) -> SshConfig:
      return cls(key_path=str(data.get("keyPath") or ""), host_alias=data.get("hostAlias") or None)

   def to_dict(self) -> Dict[str, Any]:
      result: Dict[str, Any] = {"keyPath": self.key_path}
      if self.host_alias:
         result["hostAlias"] = self.host_alias
      return result


@dataclass
class TokenConfig:
   """HTTPS credentials. The token is stored in plaintext."""

   username: str
   token: str

   @classmethod
   def from_dict(cls, data: Dict[str, Any]) -> TokenConfig:
      return cls(username=str(data.get("username") or ""), token=str(data.get("token") or ""))

   def to_dict(self) -> Dict[str, Any]:
      return {"username": self.username, "token": self.token}


@dataclass
class Account:
   """
   A named GitHub identity.

   Mutable on purpose: the edit flow updates fields in place on the AppConfig
   owned by the caller, which then saves.
   """

   name: str
   git_user_name: Optional[str] = None
   git_email: Optional[str] = None
   ssh: Optional[SshConfig] = None
   token: Optional[TokenConfig] = None

   @classmethod
   def from_dict(cls, data: Dict[str, Any]) -> Account:
      """Build from the camelCase JSON record. Unknown keys are ignored."""
      if not isinstance(data, dict) or not data.get("name"):
         raise ValueError("account record requires a name")

      ssh = data.get("ssh")
      token = data.get("token")
      return cls(
         name=str(data["name"]),
         git_user_name=data.get("gitUserName") or None,
         git_email=data.get("gitEmail") or None,
         ssh=SshConfig.from_dict(ssh) if isinstance(ssh, dict) else None,
         token=TokenConfig.from_dict(token) if isinstance(token, dict) else None,
      )

   def to_dict(self) -> Dict[str, Any]:
      result: Dict[str, Any] = {"name": self.name}
      if self.git_user_name:
         result["gitUserName"] = self.git_user_name
      if self.git_email:
         result["gitEmail"] = self.git_email
      if self.ssh is not None:
         result["ssh"] = self.ssh.to_dict()
      if self.token is not None:
         result["token"] = self.token.to_dict()
      return result

   @property
   def methods(self) -> List[AuthMethod]:
      """Configured methods, SSH first."""
      available = []
      if self.ssh is not None:
         available.append(AuthMethod.SSH)
      if self.token is not None:
         available.append(AuthMethod.TOKEN)
      return available

   @property
   def default_host_alias(self) -> str:
      return f"github-{self.name}"

   @property
   def host_alias(self) -> str:
      if self.ssh is not None and self.ssh.host_alias:
         return self.ssh.host_alias
      return self.default_host_alias

   @property
   def key_comment(self) -> str:
      """Comment embedded in generated SSH keys."""
      return self.git_email or self.git_user_name or f"{self.name}@github"

   def identity_label(self) -> str:
      return self.git_email or self.git_user_name or "No git identity"


@dataclass
class AppConfig:
   accounts: List[Account] = field(default_factory=list)

   @classmethod
   def from_dict(cls, data: Any) -> AppConfig:
      """Build from the JSON document, skipping unusable account records one by one."""
      if not isinstance(data, dict) or not isinstance(data.get("accounts"), list):
         return cls()

      accounts = []
      for item in data["accounts"]:
         try:
            accounts.append(Account.from_dict(item))
         except (ValueError, TypeError, AttributeError):
            continue
      return cls(accounts=accounts)

   def to_dict(self) -> Dict[str, Any]:
      return {"accounts": [account.to_dict() for account in self.accounts]}


@dataclass(frozen=True)
class GitUser:
   user_name: Optional[str] = None
   user_email: Optional[str] = None


@dataclass(frozen=True)
class RemoteInfo:
   remote_url: str
   repo_path: Optional[str]
   auth_type: Optional[AuthMethod]


@dataclass(frozen=True)
class CheckResult:
   """Outcome of a connectivity probe."""

   ok: bool
   message: str


@dataclass(frozen=True)
class SwitchResult:
   account_name: str
   method: AuthMethod
   remote_url: str
