"""Tests for services/bump/hooks.py."""

from __future__ import annotations

import shlex
import sys
from pathlib import Path

import pytest

from cogbump.core.result import Err, Ok
from cogbump.core.template import BumpContext, ShellHook, StructuredHook
from cogbump.output.console import MockConsole
from cogbump.services.bump.errors import HookFailed, UnresolvedToken
from cogbump.services.bump.hooks import HookRunner, SubprocessHookExecutor, render_hooks
from cogbump.test.services.bump.fakes import RecordingExecutor

CONTEXT = BumpContext(version="1.2.0", latest_version="1.1.0")


def _runner(executor: RecordingExecutor, tmp_path: Path) -> tuple[HookRunner, MockConsole]:
    console = MockConsole()
    return HookRunner(executor=executor, cwd=tmp_path, console=console), console


def _hooks(*commands: str) -> tuple[ShellHook, ...]:
    return tuple(ShellHook(c) for c in commands)


class TestHookRunner:
    def test_empty_list_runs_nothing(self, tmp_path: Path) -> None:
        executor = RecordingExecutor()
        runner, console = _runner(executor, tmp_path)

        result = runner.run((), CONTEXT)

        assert isinstance(result, Ok)
        assert result.value.executed == ()
        assert executor.calls == []
        assert console.outputs == []

    def test_runs_in_declared_order_with_tokens_substituted(self, tmp_path: Path) -> None:
        executor = RecordingExecutor()
        runner, _ = _runner(executor, tmp_path)

        result = runner.run(
            _hooks("git checkout release/{{latest_version}}", "cargo bump {{version}}", "git push origin {{version}}"),
            CONTEXT,
        )

        assert isinstance(result, Ok)
        assert executor.calls == [
            "git checkout release/1.1.0",
            "cargo bump 1.2.0",
            "git push origin 1.2.0",
        ]
        assert result.value.executed == tuple(executor.calls)
        assert executor.cwds == [tmp_path] * 3

    def test_stops_at_first_failure(self, tmp_path: Path) -> None:
        executor = RecordingExecutor(statuses={"B": 2})
        runner, _ = _runner(executor, tmp_path)

        result = runner.run(_hooks("A", "B", "C"), CONTEXT, phase="post")

        assert result == Err(HookFailed(index=1, command="B", exit_status=2, phase="post"))
        assert executor.calls == ["A", "B"]

    def test_failure_reports_rendered_command(self, tmp_path: Path) -> None:
        executor = RecordingExecutor(statuses={"git push origin 1.2.0": 128})
        runner, _ = _runner(executor, tmp_path)

        result = runner.run(_hooks("git push origin {{version}}"), CONTEXT)

        assert isinstance(result, Err)
        assert isinstance(result.error, HookFailed)
        assert result.error.command == "git push origin 1.2.0"
        assert result.error.exit_status == 128

    def test_unknown_token_runs_nothing(self, tmp_path: Path) -> None:
        executor = RecordingExecutor()
        runner, _ = _runner(executor, tmp_path)

        result = runner.run(_hooks("git push", "echo {{foo}}"), CONTEXT)

        assert result == Err(UnresolvedToken(identifier="foo", index=1, command="echo {{foo}}", phase="pre"))
        assert executor.calls == []

    def test_interrupt_aborts_remaining_hooks(self, tmp_path: Path) -> None:
        executor = RecordingExecutor(interrupt_on="cargo publish")
        runner, _ = _runner(executor, tmp_path)

        result = runner.run(_hooks("cargo package", "cargo publish", "git push"), CONTEXT)

        assert isinstance(result, Err)
        error = result.error
        assert isinstance(error, HookFailed)
        assert error.index == 1
        assert error.interrupted is True
        assert error.exit_status == 130
        assert executor.calls == ["cargo package", "cargo publish"]

    def test_echoes_each_hook_before_running(self, tmp_path: Path) -> None:
        executor = RecordingExecutor()
        runner, console = _runner(executor, tmp_path)

        runner.run(_hooks("git push", "git push origin {{version}}"), CONTEXT, phase="post")

        assert console.commands == [
            "[post 1/2] git push",
            "[post 2/2] git push origin 1.2.0",
        ]


class TestRenderHooks:
    def test_renders_all(self) -> None:
        result = render_hooks(_hooks("a {{version}}", "b {{latest_version}}"), CONTEXT, "pre")
        assert result == Ok(_hooks("a 1.2.0", "b 1.1.0"))

    def test_reports_index_of_first_unknown(self) -> None:
        result = render_hooks(_hooks("ok", "{{x}}", "{{y}}"), CONTEXT, "post")
        assert result == Err(UnresolvedToken(identifier="x", index=1, command="{{x}}", phase="post"))


class TestSubprocessHookExecutor:
    def test_shell_hook_exit_status(self, tmp_path: Path) -> None:
        command = f"{shlex.quote(sys.executable)} -c {shlex.quote('import sys; sys.exit(5)')}"
        assert SubprocessHookExecutor()(ShellHook(command), tmp_path) == 5

    def test_shell_hook_success(self, tmp_path: Path) -> None:
        command = f"{shlex.quote(sys.executable)} -c pass"
        assert SubprocessHookExecutor()(ShellHook(command), tmp_path) == 0

    def test_structured_hook_runs_without_shell(self, tmp_path: Path) -> None:
        hook = StructuredHook(
            program=sys.executable,
            args=("-c", "import pathlib, sys; pathlib.Path(sys.argv[1]).write_text('ok')", "$HOME"),
        )

        status = SubprocessHookExecutor()(hook, tmp_path)

        assert status == 0
        assert (tmp_path / "$HOME").read_text() == "ok"

    def test_structured_hook_missing_program(self, tmp_path: Path) -> None:
        hook = StructuredHook(program="nonexistent_command_12345")
        assert SubprocessHookExecutor()(hook, tmp_path) == -1

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell syntax")
    def test_shell_hooks_share_working_directory(self, tmp_path: Path) -> None:
        runner = HookRunner(executor=SubprocessHookExecutor(), cwd=tmp_path, console=MockConsole())

        result = runner.run(_hooks("echo {{version}} > VERSION", "test -f VERSION"), CONTEXT)

        assert isinstance(result, Ok)
        assert (tmp_path / "VERSION").read_text().strip() == "1.2.0"
