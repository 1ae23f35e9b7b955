"""Root CLI group for minish with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from minish import __version__
from minish.commands import register_commands
from minish.commands._context import AppContext
from minish.config.settings import MinishSettings
from minish.output.console import create_console, print_banner


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="minish")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--no-banner", is_flag=True, help="Skip the startup banner.")
@click.option("--no-color", is_flag=True, help="Disable colored messages.")
@click.option(
    "-C",
    "--directory",
    "start_dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Start in this directory.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    no_banner: bool,
    no_color: bool,
    start_dir: Path | None,
) -> None:
    """minish: a minimal shell with redirection and pipes.

    Without a subcommand, starts the interactive shell.
    """
    settings = MinishSettings.from_cli(
        config_path=config_path,
        start_dir=start_dir.resolve() if start_dir else None,
        verbose=verbose,
        log_json=log_json,
        no_banner=no_banner,
        no_color=no_color,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        if settings.show_banner:
            print_banner(create_console(no_color=settings.no_color), __version__)
        ctx.exit(ctx.obj.build_repl().run())


register_commands(cli)
