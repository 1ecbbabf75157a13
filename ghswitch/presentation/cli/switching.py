"""Identity switching and connection test commands."""

from __future__ import annotations

from typing import Optional

import click

from ...core.models import AuthMethod
from .. import flows
from .common import run_flow

METHOD_CHOICE = click.Choice([m.value for m in AuthMethod])


@click.command()
@click.argument("identifier", required=False)
@click.option("--method", "-m", type=METHOD_CHOICE, help="Authentication method (asked when the account has both)")
def switch(identifier: Optional[str], method: Optional[str]):
   """Switch the current repository to an account (index or name)."""
   run_flow(
      flows.switch_repo_flow,
      identifier=identifier,
      method=AuthMethod(method) if method else None,
   )


@click.command(name="global-ssh")
@click.argument("identifier", required=False)
def global_ssh(identifier: Optional[str]):
   """Point Host github.com in ~/.ssh/config at an account's key."""
   run_flow(flows.switch_global_ssh_flow, identifier=identifier)


@click.command(name="test")
@click.argument("identifier", required=False)
@click.option("--method", "-m", type=METHOD_CHOICE, help="Authentication method to test")
def check(identifier: Optional[str], method: Optional[str]):
   """Test SSH or token authentication for an account."""
   run_flow(
      flows.check_connection_flow,
      identifier=identifier,
      method=AuthMethod(method) if method else None,
   )
