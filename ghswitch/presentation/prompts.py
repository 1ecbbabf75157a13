"""Interactive prompt helpers built on click."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple, TypeVar

import click

from ..constants import console
from ..core.models import Account, AuthMethod
from ..services.switching import is_valid_repo_path
from .renderers import render_account_choices

T = TypeVar("T")


def select(title: str, options: Sequence[Tuple[str, T]], default: int = 1) -> T:
   """Numbered single choice; returns the value of the picked option."""
   console.print(f"[bold]{title}[/bold]")
   for idx, (label, _) in enumerate(options, start=1):
      console.print(f"  [cyan]{idx})[/cyan] {label}")
   choice = click.prompt("Select", type=click.IntRange(1, len(options)), default=default)
   return options[choice - 1][1]


def select_account(accounts: List[Account], active_name: Optional[str] = None) -> int:
   """Pick an account and return its 0-based index."""
   console.print("[bold]Choose account[/bold]")
   console.print(render_account_choices(accounts, active_name))
   default = 1
   for idx, acc in enumerate(accounts, start=1):
      if acc.name == active_name:
         default = idx
   return click.prompt("Account", type=click.IntRange(1, len(accounts)), default=default) - 1


def choose_method(account: Account, message: str = "Choose method") -> AuthMethod:
   """Forced when the account has a single method, asked otherwise."""
   methods = account.methods
   if len(methods) == 1:
      return methods[0]
   return select(message, [(m.label, m) for m in methods])


def ask_repo_path() -> Optional[str]:
   """Ask for owner/repo until the answer has the right shape."""
   while True:
      answer = click.prompt("owner/repo (current repository)", default="", show_default=False).strip()
      if not answer:
         return None
      if is_valid_repo_path(answer):
         return answer
      console.print("[yellow]Use owner/repo[/yellow]")


def confirm_key_generation(key_path: str) -> bool:
   return click.confirm(f"SSH key not found at {key_path}. Generate now?", default=False)


def ask_text(message: str, default: Optional[str] = None, required: bool = False) -> str:
   while True:
      value = click.prompt(message, default=default or "", show_default=bool(default)).strip()
      if value or not required:
         return value
      console.print("[yellow]Required[/yellow]")


def ask_secret(message: str) -> str:
   return click.prompt(message, default="", hide_input=True, show_default=False).strip()


def ask_methods(initial: Sequence[AuthMethod] = ()) -> List[AuthMethod]:
   """Ask which methods to enable; at least one is required."""
   while True:
      use_ssh = click.confirm("Enable SSH?", default=AuthMethod.SSH in initial or not initial)
      use_token = click.confirm("Enable Token (HTTPS)?", default=AuthMethod.TOKEN in initial)
      chosen = [m for m, on in ((AuthMethod.SSH, use_ssh), (AuthMethod.TOKEN, use_token)) if on]
      if chosen:
         return chosen
      console.print("[yellow]Enable at least one method[/yellow]")
