"""builtins: list every registered builtin."""

from __future__ import annotations

import click

from minish.commands._base import MinishCommand
from minish.commands._context import AppContext


@click.command(
    "builtins",
    cls=MinishCommand,
    examples="""\
  # Show core and plugin builtins
  minish builtins

  # Names only
  minish builtins --names""",
)
@click.option("--names", "names_only", is_flag=True, help="Print names only.")
@click.pass_obj
def builtins_cmd(app: AppContext, names_only: bool) -> None:
    """List registered builtins with their usage."""
    for item in app.registry:
        if names_only:
            click.echo(item.name)
        else:
            click.echo(f"{item.usage:<28} {item.summary}")
