"""Git remote and identity adapter."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Union

from ..constants import DEFAULT_REMOTE
from ..core.errors import CommandFailed
from ..core.models import AuthMethod, GitUser, RemoteInfo
from ..data.credential_store import GitCredentialsFile
from .shell import exec_command, run_command

PathLike = Union[str, Path]

_SCP_LIKE_RE = re.compile(r"^git@[^:]+:(\S+)$")
_SSH_URL_RE = re.compile(r"^ssh://[^/]+/(.+)$")
_HTTP_URL_RE = re.compile(r"^https?://[^/]+/(.+)$")


def is_git_repo(cwd: PathLike) -> bool:
    result = exec_command(["git", "rev-parse", "--is-inside-work-tree"], cwd=cwd)
    return result.ok


def get_git_root(cwd: PathLike) -> Optional[str]:
    result = exec_command(["git", "rev-parse", "--show-toplevel"], cwd=cwd)
    return result.stdout.strip() if result.ok else None


def get_remote_url(remote: str = DEFAULT_REMOTE, cwd: Optional[PathLike] = None) -> Optional[str]:
    result = exec_command(["git", "remote", "get-url", remote], cwd=cwd)
    if not result.ok:
        return None
    return result.stdout.strip() or None


def parse_repo_from_url(url: Optional[str]) -> Optional[str]:
    """
    Extract `owner/repo[.git]` from a remote URL.

    Handles `git@host:owner/repo`, `ssh://user@host/owner/repo` and
    `http(s)://host/owner/repo`; any other shape yields None.
    """
    if not url:
        return None

    match = _SCP_LIKE_RE.match(url)
    if match:
        return match.group(1).lstrip("/") or None

    for pattern in (_SSH_URL_RE, _HTTP_URL_RE):
        match = pattern.match(url)
        if match:
            return match.group(1)
    return None


def with_git_suffix(repo: str) -> str:
    return repo if repo.endswith(".git") else f"{repo}.git"


def strip_git_suffix(repo: str) -> str:
    return repo[: -len(".git")] if repo.endswith(".git") else repo


def classify_remote(url: Optional[str]) -> Optional[AuthMethod]:
    if not url:
        return None
    if url.startswith("git@") or url.startswith("ssh://"):
        return AuthMethod.SSH
    if url.startswith("https://") or url.startswith("http://"):
        return AuthMethod.TOKEN
    return None


def set_remote_url(url: str, remote: str = DEFAULT_REMOTE, cwd: Optional[PathLike] = None):
    run_command(["git", "remote", "set-url", remote, url], cwd=cwd)


def set_local_git_identity(
    user_name: Optional[str], email: Optional[str], cwd: Optional[PathLike] = None
):
    """Write user.name / user.email into the repo config, skipping blank values."""
    if user_name:
        run_command(["git", "config", "user.name", user_name], cwd=cwd)
    if email:
        run_command(["git", "config", "user.email", email], cwd=cwd)


def get_config_value(key: str, cwd: Optional[PathLike] = None) -> Optional[str]:
    result = exec_command(["git", "config", key], cwd=cwd)
    if not result.ok:
        return None
    return result.stdout.strip() or None


def enable_credential_store(cwd: Optional[PathLike] = None) -> bool:
    """Set credential.helper=store for the repository. Returns False on failure."""
    try:
        run_command(["git", "config", "credential.helper", "store"], cwd=cwd)
        return True
    except CommandFailed:
        return False


def ensure_credential_store(
    username: str,
    token: str,
    credentials: GitCredentialsFile,
    cwd: Optional[PathLike] = None,
) -> bool:
    """
    Enable the store helper and rewrite the github.com credentials entry.

    Returns whether the helper could be enabled; the credentials file is
    rewritten either way.
    """
    helper_enabled = enable_credential_store(cwd)
    credentials.upsert_github(username, token)
    return helper_enabled


def get_current_git_user(cwd: Optional[PathLike] = None) -> Optional[GitUser]:
    user_name = get_config_value("user.name", cwd)
    user_email = get_config_value("user.email", cwd)
    if user_name is None and user_email is None:
        return None
    return GitUser(user_name=user_name, user_email=user_email)


def get_current_remote_info(cwd: Optional[PathLike] = None) -> Optional[RemoteInfo]:
    remote_url = get_remote_url(DEFAULT_REMOTE, cwd)
    if remote_url is None:
        return None
    repo_path = parse_repo_from_url(remote_url)
    return RemoteInfo(
        remote_url=remote_url,
        repo_path=strip_git_suffix(repo_path) if repo_path else None,
        auth_type=classify_remote(remote_url),
    )
