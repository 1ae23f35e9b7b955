"""run: execute a single command line and exit."""

from __future__ import annotations

import click

from minish.commands._base import MinishCommand
from minish.commands._context import AppContext


@click.command(
    cls=MinishCommand,
    context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False},
    examples="""\
  # List the current directory
  minish run ls -l

  # Quote lines that use shell operators so the outer shell leaves them alone
  minish run "echo hello >> notes.txt"
  minish run "ls | cat"

  # Start from another directory
  minish -C /tmp run pwd""",
)
@click.argument("line", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_obj
def run(app: AppContext, line: tuple[str, ...]) -> None:
    """Execute LINE as one shell line (exit status 1 on error)."""
    result = app.build_executor().run_line(" ".join(line))
    app.emit(result)
