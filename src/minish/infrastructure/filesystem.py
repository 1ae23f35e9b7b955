"""Filesystem operations used by builtins and the redirection sink.

Functions here raise plain ``OSError``; callers translate failures into
shell errors with the operand the user actually typed.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import NamedTuple

from minish.domain.types import RedirectMode


class DirEntry(NamedTuple):
    """One directory listing row."""

    name: str
    is_dir: bool
    size: int
    mtime: float


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


def list_directory(path: Path) -> list[DirEntry]:
    """Return the entries of *path* sorted by name.

    Raises:
        OSError: If *path* is missing, unreadable, or not a directory.
    """
    entries: list[DirEntry] = []
    with os.scandir(path) as it:
        for entry in it:
            stat = entry.stat(follow_symlinks=False)
            entries.append(DirEntry(entry.name, entry.is_dir(), stat.st_size, stat.st_mtime))
    entries.sort(key=lambda e: e.name)
    return entries


def read_text(path: Path) -> str:
    """Read a whole file as UTF-8 text with line endings left as stored."""
    with path.open(encoding="utf-8", newline="") as fh:
        return fh.read()


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


def write_redirect(path: Path, content: str, mode: RedirectMode) -> None:
    """Write *content* to *path*, creating it if absent.

    ``OVERWRITE`` truncates an existing file; ``APPEND`` adds to its end.
    Content is encoded before the file is opened, so an encoding failure
    leaves the target untouched. Undecodable filename bytes that reached the
    text as surrogate escapes are written back as the original bytes.

    Raises:
        UnicodeEncodeError: If *content* holds a character UTF-8 cannot carry.
        OSError: If the target cannot be opened or written.
    """
    data = content.encode("utf-8", errors="surrogateescape")
    file_mode = "ab" if mode is RedirectMode.APPEND else "wb"
    with path.open(file_mode) as fh:
        fh.write(data)


def touch_path(path: Path, *, create: bool = True) -> None:
    """Update *path*'s modification time, creating it when *create* is set."""
    if path.exists():
        os.utime(path)
    elif create:
        path.touch()


def remove_path(path: Path, *, recursive: bool = False) -> None:
    """Remove a file, or a directory tree when *recursive* is set.

    Raises:
        IsADirectoryError: If *path* is a directory and *recursive* is False.
    """
    if path.is_dir() and not path.is_symlink():
        if not recursive:
            raise IsADirectoryError(21, "is a directory", str(path))
        shutil.rmtree(path)
    else:
        path.unlink()
