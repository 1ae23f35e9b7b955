"""Executor: runs parsed lines through the builtin registry.

Two modes:

- **Single-stage**: one command, optionally redirected to a file.
- **Piped**: each stage runs in order. Only ``cat`` with zero arguments
  consumes the previous stage's text (the pass-through case); every other
  stage runs against its own arguments and the previous text is dropped.
  ``ls | echo hi`` therefore prints ``hi``.

Any stage error aborts the rest of the line. Side effects already committed
by earlier stages are not rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

import structlog

from minish.domain.errors import (
    BuiltinError,
    RedirectionError,
    ShellError,
    ShellSyntaxError,
)
from minish.domain.parsing import (
    ParsedCommand,
    Redirection,
    has_pipe,
    parse_pipeline,
    parse_redirection,
    tokenize,
)
from minish.infrastructure.filesystem import write_redirect
from minish.services.result import CommandError, CommandResult

if TYPE_CHECKING:
    from minish.builtins.context import ShellContext
    from minish.builtins.registry import BuiltinRegistry

logger = logging.getLogger(__name__)

PASS_THROUGH_COMMAND = "cat"

Writer = Callable[[str], None]


class Executor:
    """Interprets command lines against a registry and a shell context.

    Args:
        registry: Builtins available to this shell.
        context: Working directory and input stream shared with builtins.
        write: Terminal sink; receives text exactly as builtins return it.
    """

    def __init__(self, registry: BuiltinRegistry, context: ShellContext, write: Writer) -> None:
        self.registry = registry
        self.context = context
        self._write = write

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def dispatch(self, command: ParsedCommand) -> str:
        """Run *command* once. Stray ``OSError``s become :class:`BuiltinError`."""
        try:
            return self.registry.dispatch(self.context, command.name, command.args)
        except OSError as exc:
            raise BuiltinError(f"{command.name}: {exc.strerror or exc}") from exc

    def execute_single(self, command_text: str, redirection: Redirection | None = None) -> str:
        """Run one command and deliver its text to the terminal or a file.

        Blank command text produces empty output without dispatching, so
        ``> out.txt`` truncates ``out.txt``.
        """
        if redirection is not None and not redirection.target:
            raise ShellSyntaxError("Missing redirection target")

        output = self.dispatch(tokenize(command_text)) if command_text.strip() else ""

        if redirection is None:
            self._write(output)
        else:
            self._write_redirect(output, redirection)
        return output

    def execute_with_input(self, segment: ParsedCommand, input_text: str) -> str:
        """Run a later pipeline stage given the previous stage's text."""
        if segment.name == PASS_THROUGH_COMMAND and not segment.args:
            return input_text
        return self.dispatch(segment)

    def execute_pipeline(self, line: str) -> str:
        """Run every stage of a piped line and print the final text."""
        pipeline = parse_pipeline(line)
        first, *rest = pipeline.stages
        output = self.dispatch(first)
        for stage in rest:
            output = self.execute_with_input(stage, output)
        self._write(output)
        return output

    # ------------------------------------------------------------------
    # Lines
    # ------------------------------------------------------------------

    def process_line(self, line: str) -> str:
        """Execute *line*, raising :class:`ShellError` on failure."""
        if has_pipe(line):
            return self.execute_pipeline(line)
        command_text, redirection = parse_redirection(line)
        return self.execute_single(command_text, redirection)

    def run_line(self, line: str) -> CommandResult:
        """Execute *line* and report the outcome as a :class:`CommandResult`."""
        op = _classify(line)
        try:
            with structlog.contextvars.bound_contextvars(op=op):
                output = self.process_line(line)
        except ShellError as exc:
            logger.debug("Line failed: %r (%s: %s)", line, exc.code, exc.message)
            return CommandResult(
                ok=False,
                op=op,
                error=CommandError(code=exc.code, message=exc.message),
            )
        return CommandResult(ok=True, op=op, output=output)

    # ------------------------------------------------------------------
    # Sinks
    # ------------------------------------------------------------------

    def _write_redirect(self, output: str, redirection: Redirection) -> None:
        path = self.context.resolve(redirection.target)
        try:
            write_redirect(path, output, redirection.mode)
        except UnicodeEncodeError as exc:
            raise RedirectionError(
                f"{redirection.target}: output is not representable as UTF-8"
            ) from exc
        except OSError as exc:
            reason = exc.strerror or str(exc)
            raise RedirectionError(f"{redirection.target}: {reason}") from exc
        logger.debug("Wrote %d chars to %s (%s)", len(output), path, redirection.mode)


def _classify(line: str) -> str:
    if has_pipe(line):
        return "pipeline"
    _command_text, redirection = parse_redirection(line)
    return "redirect" if redirection is not None else "command"
