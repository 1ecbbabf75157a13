"""Shared console instance for ghswitch output.

This module provides a single Rich Console instance configured to write to stderr.
Using stderr keeps stdout free for `--json` output and shell integrations.
"""

from rich.console import Console

console = Console(stderr=True)
