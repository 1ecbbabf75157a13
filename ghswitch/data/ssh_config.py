"""Idempotent management of `Host` blocks in the SSH client config."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

from ..constants import GITHUB_HOST, PRIVATE_FILE_MODE, SSH_DIR_MODE
from ..utils import chmod_best_effort, ensure_private_dir

_HOST_LINE_RE = re.compile(r'^Host\s+')
_LINE_SPLIT_RE = re.compile(r'\r?\n')


def render_block(alias: str, key_path: str) -> List[str]:
    """Canonical stanza written for an alias."""
    return [
        f'Host {alias}',
        f'  HostName {GITHUB_HOST}',
        '  User git',
        f'  IdentityFile {key_path}',
        '  IdentitiesOnly yes',
    ]


def upsert_block(content: str, alias: str, key_path: str) -> str:
    """
    Return `content` with the `Host <alias>` stanza replaced or appended.

    Only a line equal to `Host <alias>` after trimming is matched. The stanza
    runs until the next line starting with `Host` followed by whitespace.

    Lines are split on `\\r?\\n` and re-joined with `\\n`, so replacing a stanza
    also normalizes CRLF endings in the rest of the file to LF. Appending keeps
    the existing content byte for byte.
    """
    header = f'Host {alias}'
    block = render_block(alias, key_path)
    lines = _LINE_SPLIT_RE.split(content) if content else []

    if not any(line.strip() == header for line in lines):
        if not content or content.endswith('\n\n'):
            sep = ''
        elif content.endswith('\n'):
            sep = '\n'
        else:
            sep = '\n\n'
        return content + sep + '\n'.join(block) + '\n'

    out: List[str] = []
    i = 0
    while i < len(lines):
        if lines[i].strip() != header:
            out.append(lines[i])
            i += 1
            continue

        out.extend(block)
        i += 1
        skipped_blank = False
        while i < len(lines) and not _HOST_LINE_RE.match(lines[i]):
            skipped_blank = lines[i].strip() == ''
            i += 1
        if i < len(lines) and skipped_blank:
            out.append('')

    return '\n'.join(out).rstrip() + '\n'


class SshConfigFile:
    """
    Owns the `Host` blocks this tool writes into ~/.ssh/config.

    Other stanzas are passed through untouched.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def read(self) -> str:
        try:
            return self.path.read_text(encoding='utf-8')
        except FileNotFoundError:
            return ''

    def ensure_block(self, alias: str, key_path: str):
        """Insert or replace the stanza for `alias`, enforcing 0700 dir / 0600 file."""
        ensure_private_dir(self.path.parent, SSH_DIR_MODE)
        updated = upsert_block(self.read(), alias, key_path)
        self.path.write_text(updated, encoding='utf-8')
        chmod_best_effort(self.path, PRIVATE_FILE_MODE)

    def find_block(self, alias: str) -> Optional[List[str]]:
        """Lines of the `Host <alias>` stanza (header included), or None."""
        header = f'Host {alias}'
        lines = _LINE_SPLIT_RE.split(self.read())
        for idx, line in enumerate(lines):
            if line.strip() != header:
                continue
            end = idx + 1
            while end < len(lines) and not _HOST_LINE_RE.match(lines[end]):
                end += 1
            return [entry for entry in lines[idx:end] if entry.strip()]
        return None

    def has_block(self, alias: str) -> bool:
        return self.find_block(alias) is not None

    def identity_file(self, alias: str) -> Optional[str]:
        """IdentityFile configured for `alias`, if any."""
        block = self.find_block(alias) or []
        for line in block[1:]:
            parts = line.strip().split(None, 1)
            if len(parts) == 2 and parts[0].lower() == 'identityfile':
                return parts[1]
        return None
