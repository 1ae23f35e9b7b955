"""Classification enums for command lines and errors."""

from __future__ import annotations

from enum import StrEnum


class RedirectMode(StrEnum):
    """How a redirection target is opened."""

    OVERWRITE = "overwrite"
    APPEND = "append"


class ErrorCode(StrEnum):
    """Error kinds recovered at the REPL boundary."""

    SYNTAX_ERROR = "SYNTAX_ERROR"
    COMMAND_NOT_FOUND = "COMMAND_NOT_FOUND"
    BUILTIN_ERROR = "BUILTIN_ERROR"
    IO_ERROR = "IO_ERROR"


class ReplState(StrEnum):
    """Read-eval-print loop states. ``EXITING`` is terminal."""

    RUNNING = "running"
    EXITING = "exiting"
