"""Error handling shared by the click commands."""

from __future__ import annotations

from typing import Callable

import click

from ...constants import console
from ...core.errors import GithubSwitchError, OperationAborted
from ...infrastructure.factory import ServiceFactory


def run_flow(flow: Callable, **kwargs):
   """Load config, run one flow, print any failure as a single line."""
   factory = ServiceFactory()
   config = factory.get_account_service().load()

   try:
      flow(factory, config, **kwargs)
   except OperationAborted as exc:
      console.print(f"[yellow]{exc}[/yellow]")
   except click.Abort:
      console.print("\n[yellow]Cancelled[/yellow]")
   except GithubSwitchError as exc:
      console.print(f"[red]Error: {exc}[/red]")
   except Exception as exc:
      console.print(f"[red]Error: {exc}[/red]")
