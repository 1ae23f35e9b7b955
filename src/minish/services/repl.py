"""Repl: the read-eval-print loop around an :class:`Executor`.

Each turn prints ``<cwd>> ``, reads one line, and hands it to the executor.
Errors are reported as ``Error: <message>`` on the error console and never
end the loop. Only the exit sentinel, end of input, or a failure to read
input stop it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TextIO

from minish.domain.types import ReplState
from minish.output.console import print_error

if TYPE_CHECKING:
    from rich.console import Console

    from minish.config.models import ShellConfig
    from minish.services.executor import Executor, Writer

logger = logging.getLogger(__name__)

EXIT_SENTINELS = frozenset({"exit", "quit"})


class Repl:
    """Drives one interactive session.

    Args:
        executor: Runs each non-blank, non-sentinel line.
        config: Prompt suffix and farewell text.
        stdin: Line source.
        write: Terminal sink for prompts, output, and the farewell.
        err_console: Rich console receiving error reports.
    """

    def __init__(
        self,
        executor: Executor,
        config: ShellConfig,
        *,
        stdin: TextIO,
        write: Writer,
        err_console: Console,
    ) -> None:
        self.executor = executor
        self.config = config
        self.state = ReplState.RUNNING
        self._stdin = stdin
        self._write = write
        self._err_console = err_console

    def prompt(self) -> str:
        return f"{self.executor.context.cwd}{self.config.prompt_suffix}"

    def handle_line(self, line: str) -> ReplState:
        """Process one raw input line and return the resulting state."""
        text = line.strip()
        if not text:
            return self.state
        if text in EXIT_SENTINELS:
            self._write(f"{self.config.farewell}\n")
            self.state = ReplState.EXITING
            return self.state

        result = self.executor.run_line(text)
        if not result.ok and result.error is not None:
            print_error(self._err_console, result.error.message)
        return self.state

    def run(self) -> int:
        """Loop until exit. Returns the process exit status."""
        while self.state is ReplState.RUNNING:
            self._write(self.prompt())
            try:
                line = self._stdin.readline()
            except OSError as exc:
                logger.warning("Failed to read input: %s", exc)
                print_error(self._err_console, f"Failed to read input: {exc}")
                return 1
            if not line:
                self._write("\n")
                logger.debug("End of input")
                break
            self.handle_line(line)
        return 0
