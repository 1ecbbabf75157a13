"""Per-OS configuration path resolution."""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import Mapping, Optional

APP_NAME = "github-switch"
CONFIG_FILENAME = "config.json"


def resolve_config_dir(
    environ: Optional[Mapping[str, str]] = None,
    system: Optional[str] = None,
    home: Optional[Path] = None,
) -> Path:
    """
    Resolve the config directory for the current (or given) platform.

    Windows uses %APPDATA%, Linux and macOS honor XDG_CONFIG_HOME and fall back
    to ~/.config, anything else gets a dotdir in the home directory.
    """
    environ = os.environ if environ is None else environ
    system = (system or platform.system()).lower()
    home = Path(home) if home is not None else Path.home()

    if system == "windows":
        app_data = environ.get("APPDATA")
        base = Path(app_data) if app_data else home / "AppData" / "Roaming"
        return base / APP_NAME

    if system in ("linux", "darwin"):
        xdg = environ.get("XDG_CONFIG_HOME")
        base = Path(xdg) if xdg else home / ".config"
        return base / APP_NAME

    return home / f".{APP_NAME}"


def resolve_config_path(
    environ: Optional[Mapping[str, str]] = None,
    system: Optional[str] = None,
    home: Optional[Path] = None,
) -> Path:
    """Full path of config.json inside the resolved config directory."""
    return resolve_config_dir(environ, system, home) / CONFIG_FILENAME
