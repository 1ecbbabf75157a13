"""Account management service layer."""

from __future__ import annotations

from typing import Optional

from ..core.errors import AccountNotFound, NoAccountsConfigured
from ..core.models import Account, AppConfig
from ..data.config_store import ConfigStore


class AccountService:
   """
   Orchestrates account CRUD over an explicitly passed AppConfig.

   Responsibilities:
   - Load the config once for the caller to own
   - Add/update/remove accounts, saving right after each mutation
   - Resolve accounts by index or name
   """

   def __init__(self, config_store: ConfigStore):
      self.config_store = config_store

   def load(self) -> AppConfig:
      return self.config_store.load()

   def save(self, config: AppConfig):
      self.config_store.save(config)

   def add(self, config: AppConfig, account: Account) -> Account:
      """Append an account. Names are not checked for uniqueness."""
      config.accounts.append(account)
      self.save(config)
      return account

   def update(self, config: AppConfig, index: int, account: Account) -> Account:
      """Replace the account at `index` (0-based)."""
      self._check_index(config, index)
      config.accounts[index] = account
      self.save(config)
      return account

   def remove(self, config: AppConfig, index: int) -> Account:
      """Remove and return the account at `index` (0-based)."""
      self._check_index(config, index)
      removed = config.accounts.pop(index)
      self.save(config)
      return removed

   def find_index(self, config: AppConfig, identifier: str) -> int:
      """
      Resolve an identifier to a 0-based index.

      Args:
         identifier: 1-based index as shown in listings, or account name

      Raises:
         NoAccountsConfigured: If the config is empty
         AccountNotFound: If nothing matches
      """
      if not config.accounts:
         raise NoAccountsConfigured("No accounts configured yet.")

      identifier = identifier.strip()
      if identifier.isdigit():
         position = int(identifier)
         if 1 <= position <= len(config.accounts):
            return position - 1

      # Names are unique by convention only; the last record with a name wins.
      found: Optional[int] = None
      for idx, account in enumerate(config.accounts):
         if account.name == identifier:
            found = idx
      if found is None:
         raise AccountNotFound(f"No account found for: {identifier}")
      return found

   def find(self, config: AppConfig, identifier: str) -> Account:
      return config.accounts[self.find_index(config, identifier)]

   @staticmethod
   def _check_index(config: AppConfig, index: int):
      if not 0 <= index < len(config.accounts):
         raise AccountNotFound(f"No account at position {index + 1}")
