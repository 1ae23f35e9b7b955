"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to subcommands via
``@click.pass_obj``. Builds the builtin registry lazily (plugins included)
and wires executors and REPLs to the real terminal streams.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from minish.output.console import create_console, print_error

if TYPE_CHECKING:
    from minish.builtins.registry import BuiltinRegistry
    from minish.config.settings import MinishSettings
    from minish.services.executor import Executor
    from minish.services.repl import Repl
    from minish.services.result import CommandResult


def write_stdout(text: str) -> None:
    """Terminal sink: write *text* verbatim to stdout."""
    if text:
        click.echo(text, nl=False)


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: MinishSettings) -> None:
        self.settings = settings
        self._registry: BuiltinRegistry | None = None

        from minish.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def registry(self) -> BuiltinRegistry:
        """Core builtins plus plugin builtins (built on first access)."""
        if self._registry is None:
            from minish.builtins.registry import default_registry

            registry = default_registry()
            if self.settings.plugins.enabled:
                from minish.plugins.manager import PluginManager

                manager = PluginManager()
                manager.discover_and_load(disabled=self.settings.plugins.disabled)
                for warning in manager.install_builtins(registry):
                    click.echo(f"WARNING: {warning}", err=True)
            self._registry = registry
        return self._registry

    def build_executor(self) -> Executor:
        from minish.builtins.context import ShellContext
        from minish.services.executor import Executor

        context = ShellContext(cwd=self.settings.start_dir, stdin=sys.stdin)
        return Executor(self.registry, context, write_stdout)

    def build_repl(self) -> Repl:
        from minish.services.repl import Repl

        return Repl(
            self.build_executor(),
            self.settings.shell,
            stdin=sys.stdin,
            write=write_stdout,
            err_console=create_console(stderr=True, no_color=self.settings.no_color),
        )

    def emit(self, result: CommandResult) -> None:
        """Report a one-shot result; failures go to stderr with exit code 1.

        Successful output has already been delivered to its sink.
        """
        if result.ok:
            return
        message = result.error.message if result.error else "Unknown error"
        print_error(create_console(stderr=True, no_color=self.settings.no_color), message)
        raise SystemExit(1)
