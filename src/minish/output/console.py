"""Rich Console factory and theme for minish's own messages.

Only the banner and error reports go through Rich. Builtin output is written
verbatim by the REPL so redirected and piped text stays byte-identical.
In non-TTY environments (tests, pipes) Rich disables color codes itself.
"""

from __future__ import annotations

import sys
from io import StringIO
from typing import TextIO

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

MINISH_THEME = Theme(
    {
        "minish.banner": "bold cyan",
        "minish.hint": "dim",
        "minish.error": "bold red",
        "minish.name": "bold",
    }
)


def create_console(
    *,
    stderr: bool = False,
    file: TextIO | None = None,
    no_color: bool = False,
    width: int | None = None,
) -> Console:
    """Create a themed Console writing to *file*, stderr, or stdout.

    Args:
        stderr: Write to ``sys.stderr`` when no *file* is given.
        file: Explicit target stream (a StringIO in tests).
        no_color: Disable ANSI escape codes.
        width: Override terminal width.
    """
    target = file if file is not None else (sys.stderr if stderr else sys.stdout)
    return Console(
        file=target,
        theme=MINISH_THEME,
        no_color=no_color,
        highlight=False,
        soft_wrap=True,
        width=width,
    )


def buffer_console(*, no_color: bool = True, width: int | None = 120) -> Console:
    """Create a Console rendering into a StringIO buffer."""
    return create_console(file=StringIO(), no_color=no_color, width=width)


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def print_banner(console: Console, version: str) -> None:
    console.print(Text(f"minish {version}", style="minish.banner"))
    console.print(
        Text("Type 'help' for available commands, 'exit' to quit", style="minish.hint"),
        end="\n\n",
    )


def print_error(console: Console, message: str) -> None:
    """Render ``Error: <message>``; *message* is never parsed as markup."""
    console.print(Text.assemble(("Error:", "minish.error"), " ", message))
