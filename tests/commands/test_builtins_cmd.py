"""Tests for ``minish builtins``."""

from __future__ import annotations

from click.testing import CliRunner

from minish.cli import cli


class TestBuiltinsCommand:
    def test_lists_usage_and_summary(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["builtins"])
        assert result.exit_code == 0
        assert "mkdir [-p] <dir...>" in result.output
        assert "Create directories" in result.output

    def test_names_only(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["builtins", "--names"])
        names = result.output.split()
        assert "help" in names
        assert "mv" in names
        assert "exit" not in names
