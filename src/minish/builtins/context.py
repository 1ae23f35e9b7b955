"""ShellContext: explicit per-shell state threaded through builtin calls.

The working directory lives here instead of in process state, so builtins
never call ``os.chdir`` and tests can run many shells side by side.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO


@dataclass
class ShellContext:
    """Mutable state shared by the executor and every builtin.

    Attributes:
        cwd: Absolute working directory; relative paths resolve against it.
        home: Target of a bare ``cd``.
        stdin: Stream read by ``cat`` when it has no file arguments.
    """

    cwd: Path = field(default_factory=Path.cwd)
    home: Path = field(default_factory=Path.home)
    stdin: TextIO = field(default_factory=lambda: sys.stdin)

    def __post_init__(self) -> None:
        self.cwd = Path(self.cwd).resolve()

    def resolve(self, path: str | Path) -> Path:
        """Resolve *path* against :attr:`cwd` (absolute paths pass through)."""
        return self.cwd / Path(path).expanduser()

    def change_directory(self, path: Path) -> None:
        """Set :attr:`cwd` to the normalized absolute form of *path*."""
        self.cwd = path.resolve()
