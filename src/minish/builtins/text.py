"""Text builtins: cat, echo, and help."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from minish.builtins.context import ShellContext
from minish.builtins.registry import builtin
from minish.domain.errors import BuiltinError
from minish.infrastructure.filesystem import read_text

if TYPE_CHECKING:
    from minish.builtins.registry import BuiltinRegistry

STDIN_OPERAND = "-"

_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
    "a": "\x07",
    "b": "\x08",
    "f": "\x0c",
    "v": "\x0b",
    "0": "\0",
}


# ---------------------------------------------------------------------------
# cat
# ---------------------------------------------------------------------------


class _LineFormatter:
    """Applies cat's numbering and squeezing across every input in one call."""

    def __init__(self, *, number: bool, nonblank: bool, squeeze: bool) -> None:
        self.number = number or nonblank
        self.nonblank = nonblank
        self.squeeze = squeeze
        self._line_number = 0
        self._last_was_blank = False

    @property
    def active(self) -> bool:
        return self.number or self.squeeze

    def format(self, text: str) -> str:
        lines = text.split("\n")
        tail = lines.pop()
        out: list[str] = []
        for line in lines:
            self._emit(out, line, "\n")
        if tail:
            self._emit(out, tail, "")
        return "".join(out)

    def _emit(self, out: list[str], line: str, ending: str) -> None:
        blank = not line
        if self.squeeze and blank:
            if self._last_was_blank:
                return
            self._last_was_blank = True
        else:
            self._last_was_blank = False

        if self.number:
            if self.nonblank and blank:
                out.append(" " * 6 + "\t")
            else:
                self._line_number += 1
                out.append(f"{self._line_number:6}\t")
        out.append(line + ending)


@builtin("cat", usage="cat [-n] [-b] [-s] <file...>", summary="Concatenate and display files")
def cat(ctx: ShellContext, args: Sequence[str]) -> str:
    """Concatenate files; with no file operands read ``ctx.stdin`` to EOF."""
    flags = {arg for arg in args if arg.startswith("-") and arg != STDIN_OPERAND}
    operands = [arg for arg in args if arg not in flags]
    formatter = _LineFormatter(number="-n" in flags, nonblank="-b" in flags, squeeze="-s" in flags)

    chunks: list[str] = []
    for operand in operands or [STDIN_OPERAND]:
        if operand == STDIN_OPERAND:
            chunks.append(ctx.stdin.read())
            continue
        try:
            chunks.append(read_text(ctx.resolve(operand)))
        except OSError as exc:
            raise BuiltinError.from_os_error("cat", operand, exc) from exc
        except UnicodeDecodeError as exc:
            raise BuiltinError(f"cat: {operand}: not a UTF-8 text file") from exc

    if not formatter.active:
        return "".join(chunks)
    return "".join(formatter.format(chunk) for chunk in chunks)


# ---------------------------------------------------------------------------
# echo
# ---------------------------------------------------------------------------


def interpret_escapes(text: str) -> str:
    """Expand backslash escapes; unknown sequences are kept verbatim."""
    out: list[str] = []
    chars = iter(text)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, None)
        if nxt is None:
            out.append("\\")
        elif nxt in _ESCAPES:
            out.append(_ESCAPES[nxt])
        else:
            out.append("\\" + nxt)
    return "".join(out)


def _is_echo_flag(arg: str) -> bool:
    return len(arg) > 1 and arg[0] == "-" and all(c in "neE" for c in arg[1:])


@builtin("echo", usage="echo [-n] [-e] <text...>", summary="Display text")
def echo(ctx: ShellContext, args: Sequence[str]) -> str:
    """Join arguments with single spaces; ``-E`` wins over ``-e``."""
    newline = True
    escapes = False
    no_escapes = False
    index = 0
    while index < len(args) and _is_echo_flag(args[index]):
        letters = args[index][1:]
        newline = newline and "n" not in letters
        escapes = escapes or "e" in letters
        no_escapes = no_escapes or "E" in letters
        index += 1

    text = " ".join(args[index:])
    if escapes and not no_escapes:
        text = interpret_escapes(text)
    return text + "\n" if newline else text


# ---------------------------------------------------------------------------
# help
# ---------------------------------------------------------------------------

_SPECIAL_SYNTAX = """\
Special Syntax:
  >                    - Redirect output to file (overwrite)
  >>                   - Redirect output to file (append)
  |                    - Pipe output to another command

Examples:
  ls -l
  cat file.txt
  echo Hello > output.txt
  ls | cat
  mkdir -p path/to/directory
"""


class HelpBuiltin:
    """Lists every builtin in *registry*, so plugin builtins appear too."""

    name = "help"
    usage = "help"
    summary = "Show this help message"

    def __init__(self, registry: BuiltinRegistry) -> None:
        self._registry = registry

    def __call__(self, ctx: ShellContext, args: Sequence[str]) -> str:
        lines = ["", "Available Commands:", "===================", ""]
        entries = [(item.usage, item.summary) for item in self._registry]
        entries.append(("exit", "Exit the shell"))
        lines.extend(f"  {usage:<28} - {summary}" for usage, summary in entries)
        lines.append("")
        return "\n".join(lines) + "\n" + _SPECIAL_SYNTAX + "\n"


TEXT_BUILTINS = [cat, echo]
