"""Interactive main menu."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict

import click

from ..constants import console
from ..core.errors import GithubSwitchError, OperationAborted
from ..core.models import AppConfig
from ..infrastructure.factory import ServiceFactory
from . import flows, prompts

Handler = Callable[[ServiceFactory, AppConfig], None]


class MenuAction(Enum):
   SWITCH = "Switch account for current repo"
   LIST = "List accounts"
   ADD = "Add account"
   EDIT = "Edit account"
   REMOVE = "Remove account"
   GENERATE_KEY = "Generate SSH key for an account"
   IMPORT_KEY = "Import SSH private key"
   GLOBAL_SSH = "Switch SSH globally (Host github.com)"
   TEST = "Test connection"
   EXIT = "Exit"


HANDLERS: Dict[MenuAction, Handler] = {
   MenuAction.SWITCH: flows.switch_repo_flow,
   MenuAction.LIST: flows.list_accounts_flow,
   MenuAction.ADD: flows.add_account_flow,
   MenuAction.EDIT: flows.edit_account_flow,
   MenuAction.REMOVE: flows.remove_account_flow,
   MenuAction.GENERATE_KEY: flows.generate_key_flow,
   MenuAction.IMPORT_KEY: flows.import_key_flow,
   MenuAction.GLOBAL_SSH: flows.switch_global_ssh_flow,
   MenuAction.TEST: flows.check_connection_flow,
}


def run_action(action: MenuAction, factory: ServiceFactory, config: AppConfig) -> bool:
   """
   Run one menu action to completion.

   Returns False when the loop should stop. Failures are printed and never
   propagate, so the menu always comes back.
   """
   if action is MenuAction.EXIT:
      return False

   try:
      HANDLERS[action](factory, config)
   except OperationAborted as exc:
      console.print(f"[yellow]{exc}[/yellow]")
   except click.Abort:
      console.print("\n[yellow]Cancelled[/yellow]")
   except GithubSwitchError as exc:
      console.print(f"[red]Error: {exc}[/red]")
   except Exception as exc:
      console.print(f"[red]Error: {exc}[/red]")
   return True


def run_menu(factory: ServiceFactory):
   """Load the config once and loop until Exit or Ctrl-C at the top prompt."""
   config = factory.get_account_service().load()

   while True:
      console.print()
      try:
         action = prompts.select(
            "GitHub Switch: choose an action",
            [(item.value, item) for item in MenuAction],
         )
      except click.Abort:
         console.print()
         break

      if not run_action(action, factory, config):
         break
