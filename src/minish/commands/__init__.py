"""Subcommand modules for minish.

Provides register_commands() which uses deferred imports so starting the
interactive shell does not load every subcommand.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register standalone commands on the root CLI group."""
    from minish.commands.builtins_cmd import builtins_cmd
    from minish.commands.run import run

    cli.add_command(run)
    cli.add_command(builtins_cmd)
