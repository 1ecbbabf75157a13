"""Git credential store file (~/.git-credentials) synchronization."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List
from urllib.parse import quote, unquote

from ..constants import GITHUB_HOST, PRIVATE_FILE_MODE
from ..utils import chmod_best_effort

# Characters encodeURIComponent leaves untouched besides the unreserved set
_URI_COMPONENT_SAFE = "!*'()"


def build_credential_line(username: str, token: str, host: str = GITHUB_HOST) -> str:
    user = quote(username, safe=_URI_COMPONENT_SAFE)
    secret = quote(token, safe=_URI_COMPONENT_SAFE)
    return f'https://{user}:{secret}@{host}'


class GitCredentialsFile:
    """
    Manages the `@github.com` entry of git's plaintext credential store.

    Responsibilities:
    - Drop every existing line mentioning `@github.com`
    - Append one freshly encoded line for the selected account
    - Preserve all other lines and their order
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def read_lines(self) -> List[str]:
        try:
            content = self.path.read_text(encoding='utf-8')
        except FileNotFoundError:
            return []
        return [line for line in re.split(r'\r?\n', content) if line]

    def upsert_github(self, username: str, token: str):
        marker = f'@{GITHUB_HOST}'
        lines = [line for line in self.read_lines() if marker not in line]
        lines.append(build_credential_line(username, token))

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text('\n'.join(lines) + '\n', encoding='utf-8')
        chmod_best_effort(self.path, PRIVATE_FILE_MODE)

    def github_username(self) -> str:
        """Username of the current github.com entry, or empty string."""
        marker = f'@{GITHUB_HOST}'
        for line in self.read_lines():
            if marker in line:
                match = re.match(r'^https?://([^:@/]+)(?::[^@]*)?@', line)
                if match:
                    return unquote(match.group(1))
        return ''
