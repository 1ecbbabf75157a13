"""Wrappers over ssh-keygen and ssh plus key file housekeeping."""

from __future__ import annotations

import os
import re
import shutil
from pathlib import Path
from typing import List, Optional, Union

from ..constants import (
    PRIVATE_FILE_MODE,
    PUBLIC_KEY_MODE,
    SSH_CONNECT_TIMEOUT,
    SSH_DIR_MODE,
    SSH_TEST_TIMEOUT,
)
from ..core.errors import KeyImportError
from ..core.models import CheckResult
from ..utils import chmod_best_effort, ensure_private_dir, expand_home
from .shell import exec_command, run_command

PathLike = Union[str, Path]

_AUTH_OK_RE = re.compile(r"successfully authenticated|Hi\s+.+! You")
_NOT_KEY_FILES = {"config", "known_hosts", "known_hosts.old", "authorized_keys", "environment"}
_SANITIZE_RE = re.compile(r"[^a-z0-9._-]+")


def ensure_key_permissions(key_path: PathLike):
    """Private key 0600, public key 0644, where the files exist."""
    private = Path(key_path)
    if private.exists():
        chmod_best_effort(private, PRIVATE_FILE_MODE)
    public = Path(f"{private}.pub")
    if public.exists():
        chmod_best_effort(public, PUBLIC_KEY_MODE)


def _remove_key_pair(private: Path):
    for candidate in (private, Path(f"{private}.pub")):
        candidate.unlink(missing_ok=True)


def generate_ssh_key(key_path: PathLike, comment: str, overwrite: bool = False) -> Path:
    """
    Create an ed25519 key pair without passphrase at `key_path`.

    With `overwrite`, the pair is generated next to the existing key and only
    moved over it once ssh-keygen succeeded; on failure the old pair is untouched.
    """
    path = Path(expand_home(key_path))
    ensure_private_dir(path.parent, SSH_DIR_MODE)

    if not (overwrite and path.exists()):
        run_command(["ssh-keygen", "-t", "ed25519", "-f", str(path), "-C", comment, "-N", ""])
        ensure_key_permissions(path)
        return path

    staged = path.with_name(f".{path.name}.new")
    _remove_key_pair(staged)
    try:
        run_command(["ssh-keygen", "-t", "ed25519", "-f", str(staged), "-C", comment, "-N", ""])
        os.replace(staged, path)
        staged_pub = Path(f"{staged}.pub")
        if staged_pub.exists():
            os.replace(staged_pub, f"{path}.pub")
        else:
            Path(f"{path}.pub").unlink(missing_ok=True)
    finally:
        _remove_key_pair(staged)
    ensure_key_permissions(path)
    return path


def ensure_public_key(private_key_path: PathLike) -> Path:
    """Return the `.pub` next to a private key, deriving it with `ssh-keygen -y` if absent."""
    pub_path = Path(f"{private_key_path}.pub")
    if pub_path.exists():
        return pub_path
    public_key = run_command(["ssh-keygen", "-y", "-f", str(private_key_path)])
    pub_path.write_text(public_key.strip() + "\n", encoding="utf-8")
    chmod_best_effort(pub_path, PUBLIC_KEY_MODE)
    return pub_path


def import_private_key(src_path: PathLike, dest_path: PathLike) -> Path:
    """Copy a private key into place with 0600 permissions."""
    source = Path(expand_home(src_path))
    dest = Path(expand_home(dest_path))
    if not source.is_file():
        raise KeyImportError(f"Source key not found: {source}")
    ensure_private_dir(dest.parent, SSH_DIR_MODE)
    try:
        shutil.copyfile(source, dest)
    except OSError as exc:
        raise KeyImportError(f"Could not copy {source} to {dest}: {exc}") from exc
    chmod_best_effort(dest, PRIVATE_FILE_MODE)
    return dest


def _looks_like_private_key(path: Path) -> bool:
    try:
        with open(path, "r", encoding="utf-8", errors="ignore") as handle:
            head = handle.read(128)
    except OSError:
        return False
    return "PRIVATE KEY" in head


def list_ssh_private_keys(ssh_dir: PathLike) -> List[str]:
    """Private key files directly inside `ssh_dir`, sorted by name."""
    directory = Path(ssh_dir)
    if not directory.is_dir():
        return []

    keys = []
    for entry in sorted(directory.iterdir()):
        if not entry.is_file() or entry.suffix == ".pub" or entry.name in _NOT_KEY_FILES:
            continue
        if _looks_like_private_key(entry):
            keys.append(str(entry))
    return keys


def _sanitize(value: Optional[str]) -> str:
    return _SANITIZE_RE.sub("_", (value or "").strip().lower()).strip("_")


def suggest_dest_filenames(username: Optional[str], account_name: Optional[str]) -> List[str]:
    """Candidate key filenames, most specific first, without duplicates."""
    user = _sanitize(username)
    name = _sanitize(account_name)

    candidates = []
    if user:
        candidates += [f"id_ed25519_{user}", f"id_ed25519_github_{user}"]
    if name:
        candidates += [f"id_ed25519_{name}", f"id_ed25519_github_{name}"]
    if user and name and user != name:
        candidates.append(f"id_ed25519_{name}_{user}")
    if not candidates:
        candidates.append("id_ed25519_github")

    seen = set()
    unique = []
    for candidate in candidates:
        if candidate not in seen:
            seen.add(candidate)
            unique.append(candidate)
    return unique


def check_ssh_connection(host: str) -> CheckResult:
    """`ssh -T git@<host>`; GitHub answers with a greeting and exit status 1 on success."""
    result = exec_command(
        [
            "ssh",
            "-T",
            "-o", "StrictHostKeyChecking=accept-new",
            "-o", f"ConnectTimeout={SSH_CONNECT_TIMEOUT}",
            "-o", "BatchMode=yes",
            f"git@{host}",
        ],
        timeout=SSH_TEST_TIMEOUT,
    )
    output = result.output
    ok = bool(_AUTH_OK_RE.search(output))
    hint = "SSH authentication ok" if ok else f"ssh exit {result.code}"
    return CheckResult(ok=ok, message=output or hint)
