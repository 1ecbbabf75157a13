"""SSH key generation and import for accounts."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..constants import GITHUB_HOST
from ..core.errors import KeyImportError, NoAuthMethod
from ..core.models import Account, AppConfig, SshConfig
from ..data.ssh_config import SshConfigFile
from ..infrastructure.ssh import (
   ensure_key_permissions,
   ensure_public_key,
   generate_ssh_key,
   import_private_key,
)
from ..utils import expand_home
from .accounts import AccountService


@dataclass(frozen=True)
class ImportResult:
   key_path: Path
   public_key_path: Path
   default_host_written: bool
   alias_written: Optional[str]


class KeyService:
   """
   Manages key material referenced by accounts.

   Responsibilities:
   - Generate ed25519 keys at an account's configured path
   - Import existing private keys into the SSH directory
   - Write `Host` blocks for imported keys on request
   """

   def __init__(self, account_service: AccountService, ssh_config: SshConfigFile, ssh_dir: Path):
      self.account_service = account_service
      self.ssh_config = ssh_config
      self.ssh_dir = Path(ssh_dir)

   def generate_for_account(self, account: Account, overwrite: bool = False) -> Path:
      """Generate the account's key; an existing pair is replaced only when `overwrite` is set."""
      if account.ssh is None or not account.ssh.key_path:
         raise NoAuthMethod("Selected account has no SSH configured.")
      return generate_ssh_key(account.ssh.key_path, account.key_comment, overwrite=overwrite)

   def destination_for(self, dest_name: str) -> Path:
      """Path inside the SSH directory for a bare file name."""
      name = (dest_name or "").strip()
      if not name or "/" in name or "\\" in name:
         raise KeyImportError("Enter a file name only, without a path")
      return self.ssh_dir / name

   def import_key(
      self,
      config: AppConfig,
      account: Account,
      src_path: str,
      dest_name: str,
      make_default: bool = True,
      alias: Optional[str] = None,
   ) -> ImportResult:
      """
      Copy a private key into the SSH directory and attach it to `account`.

      The account's ssh settings are replaced and the config is saved.
      `alias`, when given, also gets its own `Host` block.
      """
      dest = self.destination_for(dest_name)
      if Path(expand_home(src_path)).resolve() == dest.resolve():
         imported = dest
         ensure_key_permissions(dest)
      else:
         imported = import_private_key(src_path, dest)
      public_key = ensure_public_key(imported)

      account.ssh = SshConfig(key_path=str(imported), host_alias=alias or None)

      if make_default:
         self.ssh_config.ensure_block(GITHUB_HOST, str(imported))
      if alias:
         self.ssh_config.ensure_block(alias, str(imported))

      self.account_service.save(config)
      return ImportResult(
         key_path=imported,
         public_key_path=public_key,
         default_host_written=make_default,
         alias_written=alias or None,
      )
