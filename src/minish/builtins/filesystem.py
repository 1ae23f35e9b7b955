"""File and directory builtins: pwd, cd, ls, mkdir, rmdir, touch, rm, mv.

Every path argument resolves against ``ctx.cwd``. Arguments starting with
``-`` are flags and never treated as paths; unknown flags are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import PurePath

from minish.builtins.context import ShellContext
from minish.builtins.registry import builtin
from minish.domain.errors import BuiltinError
from minish.infrastructure.filesystem import list_directory, remove_path, touch_path

logger = logging.getLogger(__name__)


def split_flags(args: Sequence[str]) -> tuple[set[str], list[str]]:
    """Partition *args* into ``(flags, operands)``.

    Short-flag clusters are expanded, so ``-rf`` yields ``-r`` and ``-f``.
    """
    flags: set[str] = set()
    operands: list[str] = []
    for arg in args:
        if not arg.startswith("-"):
            operands.append(arg)
        elif arg.startswith("--") or len(arg) <= 2:
            flags.add(arg)
        else:
            flags.update(f"-{letter}" for letter in arg[1:])
    return flags, operands


def _require_operands(command: str, operands: list[str]) -> None:
    if not operands:
        raise BuiltinError(f"{command}: missing operand")


@builtin("pwd", usage="pwd", summary="Print working directory")
def pwd(ctx: ShellContext, args: Sequence[str]) -> str:
    return f"{ctx.cwd}\n"


@builtin("cd", usage="cd <directory>", summary="Change directory")
def cd(ctx: ShellContext, args: Sequence[str]) -> str:
    if not args:
        ctx.change_directory(ctx.home)
        return ""
    operand = args[0]
    target = ctx.resolve(operand)
    if not target.exists():
        raise BuiltinError(f"cd: {operand}: No such file or directory")
    if not target.is_dir():
        raise BuiltinError(f"cd: {operand}: Not a directory")
    ctx.change_directory(target)
    return ""


@builtin("ls", usage="ls [-l] [-a] [-t] [-r] [path]", summary="List directory contents")
def ls(ctx: ShellContext, args: Sequence[str]) -> str:
    flags, operands = split_flags(args)
    show_all = "-a" in flags
    long_format = "-l" in flags
    operand = operands[0] if operands else "."

    try:
        entries = list_directory(ctx.resolve(operand))
    except OSError as exc:
        raise BuiltinError.from_os_error("ls", operand, exc) from exc

    if "-t" in flags:
        # newest first; the name sort underneath keeps ties stable
        entries.sort(key=lambda e: e.mtime, reverse=True)
    if "-r" in flags:
        entries.reverse()

    lines: list[str] = []
    for entry in entries:
        if not show_all and entry.name.startswith("."):
            continue
        if long_format:
            kind = "d" if entry.is_dir else "-"
            lines.append(f"{kind} {entry.size:>10} {entry.name}\n")
        else:
            lines.append(f"{entry.name}\n")
    return "".join(lines)


@builtin("mkdir", usage="mkdir [-p] <dir...>", summary="Create directories")
def mkdir(ctx: ShellContext, args: Sequence[str]) -> str:
    flags, operands = split_flags(args)
    _require_operands("mkdir", operands)
    parents = "-p" in flags
    for operand in operands:
        try:
            ctx.resolve(operand).mkdir(parents=parents, exist_ok=parents)
        except OSError as exc:
            raise BuiltinError.from_os_error("mkdir", operand, exc) from exc
    return ""


@builtin("rmdir", usage="rmdir [-p] <dir...>", summary="Remove empty directories")
def rmdir(ctx: ShellContext, args: Sequence[str]) -> str:
    flags, operands = split_flags(args)
    _require_operands("rmdir", operands)
    parents = "-p" in flags
    for operand in operands:
        try:
            ctx.resolve(operand).rmdir()
        except OSError as exc:
            raise BuiltinError.from_os_error("rmdir", operand, exc) from exc
        if parents:
            _remove_parents(ctx, operand)
    return ""


def _remove_parents(ctx: ShellContext, operand: str) -> None:
    """Remove the now-empty ancestors named in *operand*, stopping at the first failure."""
    for parent in PurePath(operand).parents:
        if parent == PurePath("."):
            break
        try:
            ctx.resolve(parent).rmdir()
        except OSError:
            logger.debug("rmdir -p stopped at %s", parent)
            break


@builtin("touch", usage="touch [-c] <file...>", summary="Create empty files or update timestamps")
def touch(ctx: ShellContext, args: Sequence[str]) -> str:
    flags, operands = split_flags(args)
    _require_operands("touch", operands)
    create = "-c" not in flags
    for operand in operands:
        try:
            touch_path(ctx.resolve(operand), create=create)
        except OSError as exc:
            raise BuiltinError.from_os_error("touch", operand, exc) from exc
    return ""


@builtin("rm", usage="rm [-r] [-f] <file...>", summary="Remove files or directories")
def rm(ctx: ShellContext, args: Sequence[str]) -> str:
    flags, operands = split_flags(args)
    force = "-f" in flags
    if not force:
        _require_operands("rm", operands)
    recursive = bool(flags & {"-r", "-R"})
    for operand in operands:
        try:
            remove_path(ctx.resolve(operand), recursive=recursive)
        except FileNotFoundError as exc:
            if force:
                continue
            raise BuiltinError.from_os_error("rm", operand, exc) from exc
        except OSError as exc:
            raise BuiltinError.from_os_error("rm", operand, exc) from exc
    return ""


@builtin("mv", usage="mv [-n] <source> <dest>", summary="Move or rename files")
def mv(ctx: ShellContext, args: Sequence[str]) -> str:
    flags, operands = split_flags(args)
    if len(operands) < 2:
        raise BuiltinError("mv: missing destination file operand")
    source, dest = operands[0], operands[1]
    source_path = ctx.resolve(source)
    dest_path = ctx.resolve(dest)
    if dest_path.is_dir() and not source_path.is_dir():
        dest_path = dest_path / source_path.name
    if "-n" in flags and dest_path.exists() and source_path.exists():
        return ""
    try:
        source_path.rename(dest_path)
    except OSError as exc:
        raise BuiltinError.from_os_error("mv", source, exc) from exc
    return ""


FILESYSTEM_BUILTINS = [pwd, cd, ls, mkdir, rmdir, touch, rm, mv]
