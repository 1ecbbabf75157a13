"""Command-line interface for ghswitch."""

import click

from ... import __version__
from ...infrastructure.factory import ServiceFactory
from ..menu import run_menu
from .accounts import add, edit, list_accounts_cmd, remove
from .keys import genkey, import_key
from .switching import check, global_ssh, switch


@click.group(invoke_without_command=True)
@click.version_option(__version__, prog_name="ghswitch")
@click.pass_context
def cli(ctx):
   """GitHub Account Switcher - Manage multiple GitHub identities per repository.

   Run without a command to open the interactive menu.
   """
   if ctx.invoked_subcommand is None:
      run_menu(ServiceFactory())


# Register commands
cli.add_command(list_accounts_cmd)
cli.add_command(add)
cli.add_command(edit)
cli.add_command(remove)

cli.add_command(switch)
cli.add_command(global_ssh)
cli.add_command(check)

cli.add_command(genkey)
cli.add_command(import_key)


# Aliases
@cli.command(name='list', hidden=True)
@click.pass_context
def list_alias(ctx):
   """Alias for 'ls'."""
   ctx.forward(list_accounts_cmd)


@cli.command(name='use', hidden=True)
@click.argument("identifier", required=False)
@click.option("--method", "-m", type=click.Choice(["ssh", "token"]), help="Authentication method")
@click.pass_context
def use(ctx, identifier, method):
   """Alias for 'switch'."""
   ctx.forward(switch)


__all__ = ['cli']
