"""Shared utility functions."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Union

_HOME_PREFIX_RE = re.compile(r"^~(?=$|[/\\]+)")


def expand_home(path: Union[str, Path, None]) -> str:
    """Expand a leading `~` or `~/` to the home directory (not `~user`)."""
    if not path:
        return ""
    return _HOME_PREFIX_RE.sub(lambda _: str(Path.home()), str(path), count=1)


def mask_secret(secret: str, visible: int = 4) -> str:
    """Mask a token, keeping only its last few characters."""
    if not secret:
        return ""
    if len(secret) <= visible * 2:
        return "*" * len(secret)
    return f"{'*' * 12}{secret[-visible:]}"


def supports_posix_permissions() -> bool:
    return os.name != "nt"


def chmod_best_effort(path: Union[str, Path], mode: int) -> bool:
    """Apply a permission mode where the platform supports it. Returns True on success."""
    if not supports_posix_permissions():
        return False
    try:
        os.chmod(path, mode)
        return True
    except OSError:
        return False


def ensure_private_dir(path: Union[str, Path], mode: int = 0o700) -> Path:
    """Create a directory recursively and restrict it to the owner."""
    directory = Path(path)
    directory.mkdir(mode=mode, parents=True, exist_ok=True)
    chmod_best_effort(directory, mode)
    return directory
