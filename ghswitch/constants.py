"""Shared constants for the ghswitch package."""

from pathlib import Path

from .config import resolve_config_dir, resolve_config_path
from .presentation.console import console

GITHUB_HOST = "github.com"
GITHUB_API_USER_URL = "https://api.github.com/user"
DEFAULT_REMOTE = "origin"


def ssh_dir() -> Path:
    return Path.home() / ".ssh"


def ssh_config_path() -> Path:
    return ssh_dir() / "config"


def git_credentials_path() -> Path:
    return Path.home() / ".git-credentials"


def config_dir() -> Path:
    return resolve_config_dir()


def config_path() -> Path:
    return resolve_config_path()


# SSH connectivity check tuning
SSH_CONNECT_TIMEOUT = 10  # passed to ssh -o ConnectTimeout
SSH_TEST_TIMEOUT = 20  # hard cap on the whole ssh -T process, seconds
TOKEN_PROBE_TIMEOUT = (5, 15)  # requests (connect, read) timeout

# Permission modes applied where POSIX permissions exist
SSH_DIR_MODE = 0o700
PRIVATE_FILE_MODE = 0o600
PUBLIC_KEY_MODE = 0o644
