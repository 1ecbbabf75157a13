"""Rich formatting helpers for the ghswitch presentation layer."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from rich import box
from rich.panel import Panel
from rich.table import Table

from ..core.models import Account, AuthMethod, GitUser, RemoteInfo, SwitchResult
from ..utils import expand_home, mask_secret


def format_methods(account: Account) -> str:
   labels = []
   if account.ssh is not None:
      labels.append("[cyan]SSH[/cyan]")
   if account.token is not None:
      labels.append("[magenta]Token[/magenta]")
   return ", ".join(labels) if labels else "[dim]--[/dim]"


def format_key_status(account: Account) -> str:
   if account.ssh is None:
      return "[dim]--[/dim]"
   if account.ssh.key_path and Path(expand_home(account.ssh.key_path)).exists():
      return "[green]✓ exists[/green]"
   return "[red]✗ missing[/red]"


def active_marker(account: Account, active_name: Optional[str]) -> str:
   return "[green]●[/green]" if account.name == active_name else "[dim]○[/dim]"


def render_accounts_table(accounts: List[Account], active_name: Optional[str] = None) -> Table:
   """Render accounts list as Rich table."""
   table = Table(title="GitHub Accounts", box=box.ROUNDED)
   table.add_column("#", style="cyan", justify="center")
   table.add_column("", justify="center")
   table.add_column("Name", style="bold")
   table.add_column("Git Identity", style="green")
   table.add_column("Methods", justify="center")
   table.add_column("SSH Key")
   table.add_column("Host Alias", style="blue")
   table.add_column("Token User", style="magenta")
   table.add_column("Token")

   for idx, acc in enumerate(accounts, start=1):
      identity = " ".join(
         part for part in (acc.git_user_name, f"<{acc.git_email}>" if acc.git_email else None) if part
      )
      key_cell = "[dim]--[/dim]"
      if acc.ssh is not None:
         key_cell = f"{acc.ssh.key_path or '[dim](unset)[/dim]'}\n{format_key_status(acc)}"

      table.add_row(
         str(idx),
         active_marker(acc, active_name),
         acc.name + (" [green](ACTIVE)[/green]" if acc.name == active_name else ""),
         identity or "[dim]--[/dim]",
         format_methods(acc),
         key_cell,
         acc.host_alias if acc.ssh is not None else "[dim]--[/dim]",
         acc.token.username if acc.token is not None else "[dim]--[/dim]",
         mask_secret(acc.token.token) if acc.token is not None else "[dim]--[/dim]",
      )

   return table


def render_account_choices(accounts: List[Account], active_name: Optional[str] = None) -> Table:
   """Compact numbered list used by selection prompts."""
   table = Table(box=None, show_header=False, padding=(0, 1))
   table.add_column(style="cyan", justify="right")
   table.add_column()
   table.add_column(style="dim")

   for idx, acc in enumerate(accounts, start=1):
      status = " [green](ACTIVE)[/green]" if acc.name == active_name else ""
      methods = ", ".join("SSH" if m is AuthMethod.SSH else "Token" for m in acc.methods)
      detail = acc.identity_label() + (f" • {methods}" if methods else "")
      table.add_row(f"{idx})", f"{active_marker(acc, active_name)} {acc.name}{status}", detail)

   return table


def render_repo_status(
   remote: Optional[RemoteInfo],
   git_user: Optional[GitUser],
   active_name: Optional[str],
   default_key: Optional[str] = None,
   credential_user: Optional[str] = None,
   root: Optional[str] = None,
) -> Panel:
   """Current repository status panel."""
   lines = []
   if root:
      lines.append(f"Path: [dim]{root}[/dim]")
   if remote is not None:
      lines.append(f"Repository: [cyan]{remote.repo_path or 'Unknown'}[/cyan]")
      auth = remote.auth_type.value.upper() if remote.auth_type is not None else "Unknown"
      lines.append(f"Auth Type: [magenta]{auth}[/magenta]")
   if git_user is not None:
      lines.append(f"Git User: {git_user.user_name or '[dim]Not set[/dim]'}")
      lines.append(f"Git Email: {git_user.user_email or '[dim]Not set[/dim]'}")
   if default_key:
      lines.append(f"Host github.com key: [dim]{default_key}[/dim]")
   if credential_user:
      lines.append(f"Stored HTTPS user: [dim]{credential_user}[/dim]")
   if active_name:
      lines.append(f"Active Account: [green]{active_name}[/green]")
   else:
      lines.append("[yellow]No active account detected[/yellow]")

   return Panel(
      "\n".join(lines),
      title="Current Repository Status",
      border_style="green" if active_name else "yellow",
   )


def render_switch_result(result: SwitchResult) -> Panel:
   if result.method is AuthMethod.SSH:
      body = (
         "[green]Repository switched to SSH authentication[/green]\n\n"
         f"Remote: [bold]{result.remote_url}[/bold]\n"
         f"Account: [bold]{result.account_name}[/bold]"
      )
      title = "SSH Configuration Applied"
   else:
      body = (
         "[green]Repository switched to HTTPS token authentication[/green]\n\n"
         f"Remote: [bold]{result.remote_url}[/bold]\n"
         f"Account: [bold]{result.account_name}[/bold]\n\n"
         "[dim]Token stored in ~/.git-credentials (plaintext).\n"
         "Consider using SSH for stronger local security.[/dim]"
      )
      title = "Token Configuration Applied"
   return Panel(body, title=title, border_style="green")
