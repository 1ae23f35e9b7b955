"""CommandResult and CommandError: the outcome of one shell line.

INVARIANT: ``Executor.run_line`` never raises a ShellError; it returns a
CommandResult. The REPL and the one-shot ``run`` command both consume it.
"""

from __future__ import annotations

from pydantic import BaseModel

from minish.domain.types import ErrorCode


class CommandError(BaseModel):
    """Structured error payload within a CommandResult."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str


class CommandResult(BaseModel):
    """Result of executing one command line.

    Attributes:
        ok: Whether every stage succeeded.
        op: ``"pipeline"``, ``"redirect"``, or ``"command"``.
        output: Text of the final stage (also already delivered to its sink).
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    output: str = ""
    error: CommandError | None = None
