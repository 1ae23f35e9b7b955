"""Tests for the Executor: single-stage, redirection, and pipelines."""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

import pytest

from minish.builtins.context import ShellContext
from minish.builtins.registry import BuiltinRegistry, FunctionBuiltin
from minish.domain.errors import (
    BuiltinError,
    CommandNotFound,
    RedirectionError,
    ShellSyntaxError,
)
from minish.domain.parsing import ParsedCommand, Redirection
from minish.domain.types import ErrorCode, RedirectMode
from minish.services.executor import Executor


class _Spy:
    """Fake builtin recording every call."""

    def __init__(self, name: str, output: str = "") -> None:
        self.name = name
        self.usage = name
        self.summary = ""
        self.output = output
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, ctx: ShellContext, args: Sequence[str]) -> str:
        self.calls.append(tuple(args))
        return self.output


@pytest.fixture
def spy_executor(context: ShellContext, sink) -> tuple[Executor, dict[str, _Spy]]:
    spies = {
        "ls": _Spy("ls", "a\nb\n"),
        "echo": _Spy("echo", "hi\n"),
        "cat": _Spy("cat", "from-cat\n"),
    }
    return Executor(BuiltinRegistry(list(spies.values())), context, sink), spies


class TestExecuteSingle:
    def test_plain_line_dispatches_once(self, spy_executor, sink) -> None:
        executor, spies = spy_executor
        executor.process_line("ls -a docs")
        assert spies["ls"].calls == [("-a", "docs")]
        assert sink.text == "a\nb\n"

    def test_unknown_command(self, executor: Executor) -> None:
        with pytest.raises(CommandNotFound, match="Command not found: nope"):
            executor.process_line("nope arg")

    def test_blank_command_text_does_not_dispatch(self, spy_executor, sink) -> None:
        executor, spies = spy_executor
        assert executor.execute_single("   ") == ""
        assert all(not spy.calls for spy in spies.values())

    def test_returns_output(self, executor: Executor) -> None:
        assert executor.execute_single("echo hello") == "hello\n"


class TestRedirection:
    def test_overwrite_creates_file(self, executor: Executor, sink, shell_root: Path) -> None:
        executor.process_line("echo hi > out.txt")
        assert (shell_root / "out.txt").read_text() == "hi\n"
        assert sink.text == ""

    def test_append_twice_accumulates(self, executor: Executor, shell_root: Path) -> None:
        executor.process_line("echo first >> log.txt")
        executor.process_line("echo second >> log.txt")
        assert (shell_root / "log.txt").read_text() == "first\nsecond\n"

    def test_overwrite_twice_keeps_last(self, executor: Executor, shell_root: Path) -> None:
        executor.process_line("echo first > out.txt")
        executor.process_line("echo second > out.txt")
        assert (shell_root / "out.txt").read_text() == "second\n"

    def test_target_resolves_against_shell_cwd(self, executor: Executor, shell_root: Path) -> None:
        executor.process_line("cd docs")
        executor.process_line("pwd > where")
        assert (shell_root / "docs" / "where").read_text() == f"{(shell_root / 'docs').resolve()}\n"

    def test_bare_redirect_truncates(self, executor: Executor, shell_root: Path) -> None:
        executor.process_line("> a.txt")
        assert (shell_root / "a.txt").read_text() == ""

    def test_missing_target_is_syntax_error(self, spy_executor) -> None:
        executor, spies = spy_executor
        with pytest.raises(ShellSyntaxError):
            executor.process_line("echo hi >")
        assert spies["echo"].calls == []

    def test_unwritable_target(self, executor: Executor) -> None:
        with pytest.raises(RedirectionError) as excinfo:
            executor.execute_single(
                "echo hi", Redirection(target="nope/out.txt", mode=RedirectMode.OVERWRITE)
            )
        assert excinfo.value.code == ErrorCode.IO_ERROR
        assert "nope/out.txt" in excinfo.value.message

    def test_failed_command_leaves_target_untouched(self, executor: Executor, shell_root: Path) -> None:
        with pytest.raises(CommandNotFound):
            executor.process_line("bogus > out.txt")
        assert not (shell_root / "out.txt").exists()

    def test_undecodable_filename_bytes_survive_redirect(
        self, executor: Executor, shell_root: Path
    ) -> None:
        try:
            (shell_root / os.fsdecode(b"bad\xff.txt")).touch()
        except (OSError, UnicodeError):
            pytest.skip("filesystem rejects non-UTF-8 names")
        result = executor.run_line("ls > out.txt")
        assert result.ok is True
        assert b"bad\xff.txt\n" in (shell_root / "out.txt").read_bytes()

    def test_unencodable_output_is_redirection_error(
        self, context: ShellContext, sink, shell_root: Path
    ) -> None:
        (shell_root / "out.txt").write_text("keep\n")

        def lone_surrogate(ctx: ShellContext, args: Sequence[str]) -> str:
            return "\ud800\n"

        executor = Executor(BuiltinRegistry([FunctionBuiltin("odd", lone_surrogate)]), context, sink)
        result = executor.run_line("odd > out.txt")
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == ErrorCode.IO_ERROR
        assert result.error.message.startswith("out.txt: ")
        assert (shell_root / "out.txt").read_text() == "keep\n"


class TestPipeline:
    def test_cat_passes_through(self, executor: Executor, sink) -> None:
        executor.process_line("ls | cat")
        assert sink.text == "a.txt\nb.txt\ndocs\nhome\n"

    def test_non_cat_stage_discards_input(self, executor: Executor, sink) -> None:
        executor.process_line("ls | echo hi")
        assert sink.text == "hi\n"

    def test_cat_with_args_runs_normally(self, executor: Executor, sink) -> None:
        executor.process_line("echo ignored | cat a.txt")
        assert sink.text == "alpha\n"

    def test_pass_through_does_not_dispatch_cat(self, spy_executor, sink) -> None:
        executor, spies = spy_executor
        executor.process_line("ls | cat | cat")
        assert spies["cat"].calls == []
        assert spies["ls"].calls == [()]
        assert sink.text == "a\nb\n"

    def test_only_final_stage_printed(self, spy_executor, sink) -> None:
        executor, _spies = spy_executor
        executor.process_line("echo | ls")
        assert sink.chunks == ["a\nb\n"]

    def test_execute_with_input(self, executor: Executor) -> None:
        assert executor.execute_with_input(ParsedCommand(name="cat"), "piped\n") == "piped\n"
        assert executor.execute_with_input(ParsedCommand(name="echo", args=("x",)), "piped\n") == "x\n"

    def test_redirect_is_not_recognised(self, executor: Executor, shell_root: Path) -> None:
        # "cat > out.txt" runs cat with the operands ">" and "out.txt"
        with pytest.raises(BuiltinError, match="cat: >: No such file or directory"):
            executor.process_line("ls | cat > out.txt")
        assert not (shell_root / "out.txt").exists()

    def test_unknown_command_aborts_remaining_stages(
        self, context: ShellContext, sink, shell_root: Path
    ) -> None:
        def mk(ctx: ShellContext, args: Sequence[str]) -> str:
            ctx.resolve("made").mkdir()
            return "made\n"

        after = _Spy("after", "after\n")
        registry = BuiltinRegistry([FunctionBuiltin("mk", mk), after])
        executor = Executor(registry, context, sink)
        with pytest.raises(CommandNotFound, match="ghost"):
            executor.process_line("mk | ghost | after")
        assert after.calls == []
        assert sink.text == ""
        assert (shell_root / "made").is_dir()

    def test_empty_segment_is_syntax_error(self, spy_executor) -> None:
        executor, spies = spy_executor
        with pytest.raises(ShellSyntaxError):
            executor.process_line("ls || cat")
        assert spies["ls"].calls == []


class TestRunLine:
    def test_success_result(self, executor: Executor) -> None:
        result = executor.run_line("echo hi")
        assert result.ok is True
        assert result.op == "command"
        assert result.output == "hi\n"
        assert result.error is None

    def test_op_classification(self, executor: Executor) -> None:
        assert executor.run_line("echo hi > x").op == "redirect"
        assert executor.run_line("ls | cat").op == "pipeline"

    def test_failure_result(self, executor: Executor) -> None:
        result = executor.run_line("nope")
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == ErrorCode.COMMAND_NOT_FOUND
        assert result.error.message == "Command not found: nope"

    def test_builtin_error_result(self, executor: Executor) -> None:
        result = executor.run_line("cat ghost")
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == ErrorCode.BUILTIN_ERROR

    def test_stray_os_error_becomes_builtin_error(self, context: ShellContext, sink) -> None:
        def boom(ctx: ShellContext, args: Sequence[str]) -> str:
            raise PermissionError(13, "Permission denied")

        executor = Executor(BuiltinRegistry([FunctionBuiltin("boom", boom)]), context, sink)
        result = executor.run_line("boom")
        assert result.error is not None
        assert result.error.code == ErrorCode.BUILTIN_ERROR
        assert result.error.message == "boom: Permission denied"

    def test_programming_errors_propagate(self, context: ShellContext, sink) -> None:
        def broken(ctx: ShellContext, args: Sequence[str]) -> str:
            raise RuntimeError("bug")

        executor = Executor(BuiltinRegistry([FunctionBuiltin("broken", broken)]), context, sink)
        with pytest.raises(RuntimeError):
            executor.run_line("broken")
