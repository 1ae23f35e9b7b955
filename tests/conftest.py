"""Shared pytest fixtures for minish tests."""

from __future__ import annotations

from io import StringIO
from pathlib import Path

import pytest
from click.testing import CliRunner

from minish.builtins.context import ShellContext
from minish.builtins.registry import BuiltinRegistry, default_registry
from minish.services.executor import Executor


class Sink:
    """Collects everything an executor writes to the terminal."""

    def __init__(self) -> None:
        self.chunks: list[str] = []

    def __call__(self, text: str) -> None:
        self.chunks.append(text)

    @property
    def text(self) -> str:
        return "".join(self.chunks)


@pytest.fixture(autouse=True)
def _no_user_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own minish config and env out of every test."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path_factory.mktemp("xdg")))
    for var in ("MINISH_CONFIG", "MINISH_VERBOSE", "MINISH_NO_BANNER", "MINISH_START_DIR"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def shell_root(tmp_path: Path) -> Path:
    """Working directory with a home dir, two files, and a subdirectory."""
    (tmp_path / "home").mkdir()
    (tmp_path / "docs").mkdir()
    (tmp_path / "a.txt").write_text("alpha\n")
    (tmp_path / "b.txt").write_text("beta\n")
    return tmp_path


@pytest.fixture
def context(shell_root: Path) -> ShellContext:
    return ShellContext(cwd=shell_root, home=shell_root / "home", stdin=StringIO(""))


@pytest.fixture
def registry() -> BuiltinRegistry:
    return default_registry()


@pytest.fixture
def sink() -> Sink:
    return Sink()


@pytest.fixture
def executor(registry: BuiltinRegistry, context: ShellContext, sink: Sink) -> Executor:
    return Executor(registry, context, sink)
