"""Service factory for dependency injection."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..constants import config_path, git_credentials_path, ssh_config_path
from ..data.config_store import ConfigStore
from ..data.credential_store import GitCredentialsFile
from ..data.ssh_config import SshConfigFile
from ..services.accounts import AccountService
from ..services.connection import ConnectionService
from ..services.keys import KeyService
from ..services.switching import SwitchingService


class ServiceFactory:
    """Factory for creating service instances with dependencies.

    Paths default to the environment at construction time, so HOME,
    XDG_CONFIG_HOME and APPDATA changes are honored per run.
    """

    def __init__(
        self,
        config_file: Optional[Path] = None,
        ssh_config_file: Optional[Path] = None,
        credentials_file: Optional[Path] = None,
    ):
        self.config_file = Path(config_file) if config_file else config_path()
        self.ssh_config_file = Path(ssh_config_file) if ssh_config_file else ssh_config_path()
        self.credentials_file = Path(credentials_file) if credentials_file else git_credentials_path()
        self._config_store: Optional[ConfigStore] = None
        self._ssh_config: Optional[SshConfigFile] = None
        self._credentials: Optional[GitCredentialsFile] = None

    @property
    def ssh_dir(self) -> Path:
        return self.ssh_config_file.parent

    def get_config_store(self) -> ConfigStore:
        """Get or create ConfigStore instance."""
        if self._config_store is None:
            self._config_store = ConfigStore(self.config_file)
        return self._config_store

    def get_ssh_config(self) -> SshConfigFile:
        """Get or create SshConfigFile instance."""
        if self._ssh_config is None:
            self._ssh_config = SshConfigFile(self.ssh_config_file)
        return self._ssh_config

    def get_credentials(self) -> GitCredentialsFile:
        """Get or create GitCredentialsFile instance."""
        if self._credentials is None:
            self._credentials = GitCredentialsFile(self.credentials_file)
        return self._credentials

    def get_account_service(self) -> AccountService:
        return AccountService(config_store=self.get_config_store())

    def get_switching_service(self) -> SwitchingService:
        return SwitchingService(
            ssh_config=self.get_ssh_config(),
            credentials=self.get_credentials(),
        )

    def get_key_service(self) -> KeyService:
        return KeyService(
            account_service=self.get_account_service(),
            ssh_config=self.get_ssh_config(),
            ssh_dir=self.ssh_dir,
        )

    def get_connection_service(self) -> ConnectionService:
        return ConnectionService(ssh_config=self.get_ssh_config())
