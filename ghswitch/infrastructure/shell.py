"""Synchronous subprocess helpers returning structured results."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

from ..core.errors import CommandFailed

PathLike = Union[str, Path]


@dataclass(frozen=True)
class CommandResult:
    cmd: Sequence[str]
    code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.code == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr, stripped."""
        return "\n".join(part for part in (self.stdout.strip(), self.stderr.strip()) if part)


def exec_command(
    cmd: Sequence[str],
    cwd: Optional[PathLike] = None,
    timeout: Optional[float] = None,
) -> CommandResult:
    """
    Run a command to completion and capture its output. Never raises.

    A missing executable maps to exit status 127, a timeout to 124.
    """
    try:
        proc = subprocess.run(
            list(cmd),
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        return CommandResult(cmd, 127, "", str(exc))
    except subprocess.TimeoutExpired:
        return CommandResult(cmd, 124, "", f"{cmd[0]} timed out after {timeout}s")
    except OSError as exc:
        return CommandResult(cmd, 126, "", str(exc))

    return CommandResult(cmd, proc.returncode, proc.stdout or "", proc.stderr or "")


def run_command(
    cmd: Sequence[str],
    cwd: Optional[PathLike] = None,
    timeout: Optional[float] = None,
) -> str:
    """Run a command and return stripped stdout; raise CommandFailed on non-zero exit."""
    result = exec_command(cmd, cwd=cwd, timeout=timeout)
    if not result.ok:
        raise CommandFailed(cmd, result.code, result.output)
    return result.stdout.strip()
