"""Account management commands."""

from __future__ import annotations

import json
import os
from typing import Optional

import click

from ...infrastructure.factory import ServiceFactory
from ...utils import mask_secret
from .. import flows
from .common import run_flow


@click.command(name="ls")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON (tokens masked)")
def list_accounts_cmd(output_json: bool):
   """List all accounts and the current repository status."""
   if not output_json:
      run_flow(flows.list_accounts_flow)
      return

   factory = ServiceFactory()
   config = factory.get_account_service().load()
   active = factory.get_switching_service().detect_active_account(config.accounts, os.getcwd())

   result = []
   for idx, acc in enumerate(config.accounts, start=1):
      record = acc.to_dict()
      if acc.token is not None:
         record["token"] = {"username": acc.token.username, "token": mask_secret(acc.token.token)}
      record["index"] = idx
      record["active"] = acc.name == active
      record["methods"] = [m.value for m in acc.methods]
      result.append(record)
   print(json.dumps(result, indent=2))


@click.command()
def add():
   """Add a new account interactively."""
   run_flow(flows.add_account_flow)


@click.command()
@click.argument("identifier", required=False)
def edit(identifier: Optional[str]):
   """Edit an account by index or name."""
   run_flow(flows.edit_account_flow, identifier=identifier)


@click.command(name="rm")
@click.argument("identifier", required=False)
def remove(identifier: Optional[str]):
   """Remove an account by index or name."""
   run_flow(flows.remove_account_flow, identifier=identifier)
