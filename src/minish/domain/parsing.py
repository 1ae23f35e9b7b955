"""Command-line parsing: redirection, pipelines, and tokenization.

Pure string functions with no filesystem access. The grammar is deliberately
small: no quoting, no escaping, at most one kind of operator per line.

- ``>>`` / ``>`` split a line into command text and a redirection target.
- ``|`` splits a line into pipeline segments.
- Whitespace splits a segment into a command name and its arguments.

A line containing ``|`` is always a pipeline. Redirection is only extracted
from non-piped lines, so ``ls | cat > out`` yields a final segment of
``cat > out`` whose ``>`` is ordinary argument text.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from minish.domain.errors import ShellSyntaxError
from minish.domain.types import RedirectMode

PIPE = "|"
APPEND_OPERATOR = ">>"
OVERWRITE_OPERATOR = ">"


class ParsedCommand(BaseModel):
    """One command name plus its ordered arguments."""

    model_config = {"frozen": True}

    name: str
    args: tuple[str, ...] = ()

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "command name must not be empty"
            raise ValueError(msg)
        return value


class Redirection(BaseModel):
    """Output sink for a non-piped line."""

    model_config = {"frozen": True}

    target: str
    mode: RedirectMode = RedirectMode.OVERWRITE


class Pipeline(BaseModel):
    """Two or more commands joined by ``|``."""

    model_config = {"frozen": True}

    stages: tuple[ParsedCommand, ...] = Field(min_length=2)


def tokenize(segment: str) -> ParsedCommand:
    """Split *segment* on whitespace into a :class:`ParsedCommand`.

    Raises:
        ShellSyntaxError: If the segment is blank.
    """
    parts = segment.split()
    if not parts:
        raise ShellSyntaxError("Empty command")
    return ParsedCommand(name=parts[0], args=tuple(parts[1:]))


def parse_redirection(line: str) -> tuple[str, Redirection | None]:
    """Split *line* into ``(command_text, redirection)``.

    ``>>`` is searched first so it is never read as ``>`` followed by a
    stray ``>``. Without either operator the line is returned unchanged.
    """
    for operator, mode in (
        (APPEND_OPERATOR, RedirectMode.APPEND),
        (OVERWRITE_OPERATOR, RedirectMode.OVERWRITE),
    ):
        pos = line.find(operator)
        if pos == -1:
            continue
        command_text = line[:pos].strip()
        target = line[pos + len(operator) :].strip()
        return command_text, Redirection(target=target, mode=mode)
    return line, None


def has_pipe(line: str) -> bool:
    """Return True when *line* contains the pipe delimiter."""
    return PIPE in line


def split_pipeline(line: str) -> list[str]:
    """Split *line* on ``|`` into trimmed, non-empty segments.

    Raises:
        ShellSyntaxError: If any segment is empty or fewer than two result.
    """
    segments = [segment.strip() for segment in line.split(PIPE)]
    if len(segments) < 2:
        raise ShellSyntaxError("Invalid pipe syntax: expected at least two commands")
    if any(not segment for segment in segments):
        raise ShellSyntaxError("Invalid pipe syntax: empty command in pipeline")
    return segments


def parse_pipeline(line: str) -> Pipeline:
    """Parse a piped line into a :class:`Pipeline` of tokenized stages."""
    return Pipeline(stages=tuple(tokenize(segment) for segment in split_pipeline(line)))
