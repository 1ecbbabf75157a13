"""Interactive flows shared by the menu and the click commands.

Every flow takes the ServiceFactory and the AppConfig owned by the caller.
Flows that mutate accounts save through AccountService before returning.
Domain errors propagate to the caller, which prints them.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.panel import Panel

from ..constants import GITHUB_HOST, console
from ..core.errors import NoAccountsConfigured, NoAuthMethod, OperationAborted
from ..core.models import Account, AppConfig, AuthMethod, SshConfig, TokenConfig
from ..infrastructure import git
from ..infrastructure.factory import ServiceFactory
from ..infrastructure.ssh import ensure_key_permissions, list_ssh_private_keys, suggest_dest_filenames
from ..utils import expand_home
from . import prompts
from .renderers import render_accounts_table, render_repo_status, render_switch_result


def _require_accounts(config: AppConfig, hint: str = "Add one first."):
   if not config.accounts:
      raise NoAccountsConfigured(f"No accounts configured. {hint}")


def _pick_account(
   factory: ServiceFactory, config: AppConfig, identifier: Optional[str] = None
) -> Tuple[int, Account]:
   """Resolve an identifier, or prompt with the detected active account preselected."""
   if identifier:
      index = factory.get_account_service().find_index(config, identifier)
   else:
      active = factory.get_switching_service().detect_active_account(config.accounts, os.getcwd())
      index = prompts.select_account(config.accounts, active)
   return index, config.accounts[index]


def _pick_key_path(account_name: str, ssh_dir: Path, current: Optional[str] = None) -> str:
   existing = list_ssh_private_keys(ssh_dir)
   if existing and not current:
      options = [(path, path) for path in existing] + [("Enter key path manually…", None)]
      picked = prompts.select("Select an SSH key in ~/.ssh or enter one manually", options)
      if picked:
         return picked
   default = current or f"~/.ssh/id_ed25519_{account_name}"
   return expand_home(prompts.ask_text("SSH key path", default=default, required=True))


def _configure_ssh(factory: ServiceFactory, account: Account, current: Optional[SshConfig] = None):
   key_path = _pick_key_path(account.name, factory.ssh_dir, current.key_path if current else None)
   alias_default = (current.host_alias if current else None) or account.default_host_alias
   alias = prompts.ask_text("SSH host alias (optional)", default=alias_default)
   account.ssh = SshConfig(key_path=key_path, host_alias=alias or None)

   if Path(key_path).exists():
      ensure_key_permissions(key_path)
   elif click.confirm("Key not found. Generate a new ed25519 key?", default=True):
      factory.get_key_service().generate_for_account(account)
      console.print(f"[green]✓[/green] Generated SSH key: {key_path}")
      if Path(f"{key_path}.pub").exists():
         console.print(f"[cyan]ℹ[/cyan] Public key: {key_path}.pub")


def _configure_token(account: Account, current: Optional[TokenConfig] = None):
   username = prompts.ask_text(
      "GitHub username", default=current.username if current else None, required=True
   )
   secret = prompts.ask_secret(
      "GitHub token (leave blank to keep)" if current else "GitHub Personal Access Token"
   )
   account.token = TokenConfig(username=username, token=secret or (current.token if current else ""))


def list_accounts_flow(factory: ServiceFactory, config: AppConfig):
   if not config.accounts:
      console.print("[yellow]No accounts configured. Please add an account first.[/yellow]")
      return

   cwd = os.getcwd()
   switching_service = factory.get_switching_service()
   active = switching_service.detect_active_account(config.accounts, cwd)

   if git.is_git_repo(cwd):
      remote = git.get_current_remote_info(cwd)
      git_user = git.get_current_git_user(cwd)
      if remote is not None or git_user is not None:
         console.print(
            render_repo_status(
               remote,
               git_user,
               active,
               default_key=factory.get_ssh_config().identity_file(GITHUB_HOST),
               credential_user=factory.get_credentials().github_username() or None,
               root=git.get_git_root(cwd),
            )
         )

   console.print(render_accounts_table(config.accounts, active))
   console.print(f"[cyan]ℹ[/cyan] Total accounts: {len(config.accounts)}")


def add_account_flow(factory: ServiceFactory, config: AppConfig):
   name = prompts.ask_text("Account label (e.g., work, personal)", required=True)
   account = Account(
      name=name,
      git_user_name=prompts.ask_text("Git user.name (optional)") or None,
      git_email=prompts.ask_text("Git user.email (optional)") or None,
   )
   methods = prompts.ask_methods()

   if AuthMethod.SSH in methods:
      _configure_ssh(factory, account)
   if AuthMethod.TOKEN in methods:
      _configure_token(account)

   factory.get_account_service().add(config, account)
   console.print(f"[green]✓[/green] Account saved: {account.name}")


def edit_account_flow(factory: ServiceFactory, config: AppConfig, identifier: Optional[str] = None):
   _require_accounts(config, "Nothing to edit.")
   account_service = factory.get_account_service()
   index, account = _pick_account(factory, config, identifier)

   edited = Account(
      name=prompts.ask_text("Account label", default=account.name, required=True),
      git_user_name=prompts.ask_text("Git user.name", default=account.git_user_name) or None,
      git_email=prompts.ask_text("Git user.email", default=account.git_email) or None,
   )
   methods = prompts.ask_methods(account.methods)

   if AuthMethod.SSH in methods:
      _configure_ssh(factory, edited, account.ssh or SshConfig(key_path=""))
   if AuthMethod.TOKEN in methods:
      _configure_token(edited, account.token)

   account_service.update(config, index, edited)
   console.print(f"[green]✓[/green] Updated account: {edited.name}")


def remove_account_flow(factory: ServiceFactory, config: AppConfig, identifier: Optional[str] = None):
   if not config.accounts:
      console.print("[yellow]No accounts to remove.[/yellow]")
      return
   index, account = _pick_account(factory, config, identifier)
   if not click.confirm(f"Remove account '{account.name}'?", default=False):
      raise OperationAborted("Operation cancelled.")
   removed = factory.get_account_service().remove(config, index)
   console.print(f"[green]✓[/green] Removed account: {removed.name}")


def switch_repo_flow(
   factory: ServiceFactory,
   config: AppConfig,
   identifier: Optional[str] = None,
   method: Optional[AuthMethod] = None,
):
   cwd = os.getcwd()
   switching_service = factory.get_switching_service()
   switching_service.check_preconditions(config, cwd)

   _, account = _pick_account(factory, config, identifier)
   if not account.methods:
      raise NoAuthMethod("Selected account has no methods configured.")
   chosen = method or prompts.choose_method(account)

   result = switching_service.switch_repo(
      config,
      account,
      cwd,
      method=chosen,
      ask_repo_path=prompts.ask_repo_path,
      confirm_key_generation=prompts.confirm_key_generation,
   )
   console.print(render_switch_result(result))


def _report_check(label: str, ok: bool, message: str):
   if ok:
      console.print(f"[green]✓[/green] {label} passed")
   else:
      console.print(f"[red]✗[/red] {label} failed")
   if message:
      console.print(f"[dim]{message}[/dim]")


def switch_global_ssh_flow(factory: ServiceFactory, config: AppConfig, identifier: Optional[str] = None):
   _require_accounts(config)
   _, account = _pick_account(factory, config, identifier)
   key_path = factory.get_switching_service().switch_global_ssh(
      account, confirm_key_generation=prompts.confirm_key_generation
   )
   console.print(f"[green]✓[/green] Updated ~/.ssh/config → Host {GITHUB_HOST} using: {key_path}")

   if click.confirm("Test SSH connection now?", default=True):
      with console.status(f"Testing SSH connection to {GITHUB_HOST}..."):
         res = factory.get_connection_service().check_ssh(GITHUB_HOST)
      _report_check("SSH test", res.ok, res.message)


def generate_key_flow(factory: ServiceFactory, config: AppConfig, identifier: Optional[str] = None):
   _require_accounts(config)
   _, account = _pick_account(factory, config, identifier)
   if account.ssh is None:
      raise NoAuthMethod("Selected account has no SSH configured.")
   key_path = Path(expand_home(account.ssh.key_path))
   overwrite = key_path.exists()
   if overwrite and not click.confirm(f"{key_path} already exists. Overwrite?", default=False):
      raise OperationAborted("Operation cancelled.")
   generated = factory.get_key_service().generate_for_account(account, overwrite=overwrite)
   console.print(f"[green]✓[/green] Generated SSH key: {generated}")


def import_key_flow(factory: ServiceFactory, config: AppConfig, identifier: Optional[str] = None):
   _require_accounts(config)
   key_service = factory.get_key_service()
   _, account = _pick_account(factory, config, identifier)

   username = prompts.ask_text(
      "GitHub username for this key", default=account.token.username if account.token else None
   )
   existing = list_ssh_private_keys(factory.ssh_dir)
   if existing:
      src = prompts.select(
         "Private key to import", [(path, path) for path in existing] + [("Enter path manually…", "")]
      )
   else:
      src = ""
   if not src:
      src = prompts.ask_text("Path of the existing private key", required=True)

   suggestions = suggest_dest_filenames(username or None, account.name)
   dest_name = prompts.ask_text("Destination file name in ~/.ssh", default=suggestions[0], required=True)
   dest = key_service.destination_for(dest_name)
   if dest.exists() and Path(expand_home(src)).resolve() != dest.resolve():
      if not click.confirm(f"{dest} already exists. Overwrite?", default=False):
         raise OperationAborted("Operation cancelled.")

   make_default = click.confirm(f"Make it the default (Host {GITHUB_HOST}) now?", default=True)
   alias = None
   if click.confirm("Also add a dedicated Host alias?", default=False):
      alias = prompts.ask_text("Host alias name", default=f"github-{username or account.name}", required=True)
   run_test = click.confirm("Test SSH connection after import?", default=True)

   result = key_service.import_key(config, account, src, dest_name, make_default=make_default, alias=alias)
   if result.default_host_written:
      console.print(f"[green]✓[/green] Set as default Host {GITHUB_HOST}")
   if result.alias_written:
      console.print(f"[green]✓[/green] Alias Host added: {result.alias_written}")
   console.print(f"[green]✓[/green] Imported SSH key: {result.key_path}")
   console.print(f"[cyan]ℹ[/cyan] Public key: {result.public_key_path}")

   if run_test:
      host = GITHUB_HOST if make_default else (alias or GITHUB_HOST)
      with console.status(f"Testing SSH connection to {host}..."):
         res = factory.get_connection_service().check_ssh(host)
      _report_check(f"SSH test ({host})", res.ok, res.message)


def check_connection_flow(
   factory: ServiceFactory,
   config: AppConfig,
   identifier: Optional[str] = None,
   method: Optional[AuthMethod] = None,
):
   _require_accounts(config, "Please add an account first.")
   console.print(Panel("Test Connection", border_style="cyan", expand=False))
   _, account = _pick_account(factory, config, identifier)
   if not account.methods:
      raise NoAuthMethod("Selected account has no authentication methods configured.")
   chosen = method or prompts.choose_method(account, "Test which authentication method?")

   label = "SSH connection test" if chosen is AuthMethod.SSH else "Token authentication test"
   with console.status(f"Running {label.lower()}..."):
      res = factory.get_connection_service().check_account(account, chosen)
   _report_check(label, res.ok, res.message)
