"""JSON persistence for the account list."""

from __future__ import annotations

import json
from pathlib import Path

from ..core.models import AppConfig


class ConfigStore:
    """
    Loads and saves the AppConfig document.

    Responsibilities:
    - Read config.json, recovering to an empty account list on any failure
    - Write pretty-printed JSON after every mutation
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> AppConfig:
        """Load config; missing, unreadable or malformed files yield no accounts."""
        try:
            with open(self.path, 'r', encoding='utf-8') as handle:
                data = json.load(handle)
            return AppConfig.from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError):
            return AppConfig()

    def save(self, config: AppConfig):
        """Overwrite config.json with 2-space indented JSON and a trailing newline."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(config.to_dict(), indent=2, ensure_ascii=False) + '\n'
        with open(self.path, 'w', encoding='utf-8') as handle:
            handle.write(payload)
