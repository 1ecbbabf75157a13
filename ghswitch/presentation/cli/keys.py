"""SSH key commands."""

from __future__ import annotations

from typing import Optional

import click

from .. import flows
from .common import run_flow


@click.command()
@click.argument("identifier", required=False)
def genkey(identifier: Optional[str]):
   """Generate an ed25519 key at an account's configured path."""
   run_flow(flows.generate_key_flow, identifier=identifier)


@click.command(name="import-key")
@click.argument("identifier", required=False)
def import_key(identifier: Optional[str]):
   """Import an existing private key into ~/.ssh for an account."""
   run_flow(flows.import_key_flow, identifier=identifier)
