"""Shell error hierarchy.

Every error raised while interpreting a line derives from :class:`ShellError`
and carries an :class:`~minish.domain.types.ErrorCode`. The REPL recovers all
of them; none is fatal to the process.
"""

from __future__ import annotations

from minish.domain.types import ErrorCode


class ShellError(Exception):
    """Base class for recoverable shell errors."""

    code: ErrorCode = ErrorCode.BUILTIN_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ShellSyntaxError(ShellError):
    """Malformed pipe or redirection syntax."""

    code = ErrorCode.SYNTAX_ERROR


class CommandNotFound(ShellError):
    """No builtin is registered under the requested name."""

    code = ErrorCode.COMMAND_NOT_FOUND

    def __init__(self, name: str) -> None:
        super().__init__(f"Command not found: {name}")
        self.name = name


class BuiltinError(ShellError):
    """A builtin failed, typically on a filesystem call."""

    code = ErrorCode.BUILTIN_ERROR

    @classmethod
    def from_os_error(cls, command: str, operand: str, exc: OSError) -> BuiltinError:
        """Build ``"<command>: <operand>: <reason>"`` from an ``OSError``.

        *operand* is the argument as the user typed it, not the resolved path.
        """
        reason = exc.strerror or str(exc)
        return cls(f"{command}: {operand}: {reason}")


class RedirectionError(ShellError):
    """A redirection target could not be opened or written."""

    code = ErrorCode.IO_ERROR
