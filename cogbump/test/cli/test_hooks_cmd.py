from __future__ import annotations

from pathlib import Path

import pytest
import typer

from cogbump.cli.context import CLIContext
from cogbump.core.config import parse_config
from cogbump.core.errors import ErrorCode
from cogbump.core.result import Ok
from cogbump.output.console import MockConsole
from cogbump.test.samples import COG_TOML


def _ctx(tmp_path: Path) -> tuple[CLIContext, MockConsole]:
    parsed = parse_config(COG_TOML)
    assert isinstance(parsed, Ok)
    console = MockConsole()
    return CLIContext(config=parsed.value, config_path=tmp_path / "cog.toml", console=console), console


def test_hooks_lists_profile_templates(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import cogbump.cli.commands.hooks_cmd as hooks_cmd

    ctx, console = _ctx(tmp_path)
    monkeypatch.setattr(hooks_cmd, "build_context", lambda: ctx)

    hooks_cmd.hooks(profile="alpha")

    assert console.commands[:2] == [
        "  1. git checkout release/{{latest_version}}",
        "  2. cargo bump {{version}}",
    ]
    assert len(console.commands) == 8
    assert console.find("profile: alpha")


def test_hooks_default(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import cogbump.cli.commands.hooks_cmd as hooks_cmd

    ctx, console = _ctx(tmp_path)
    monkeypatch.setattr(hooks_cmd, "build_context", lambda: ctx)

    hooks_cmd.hooks(profile=None)

    assert console.commands[0] == "  1. cargo bump {{version}}"
    assert console.find("profile: default")


def test_hooks_unknown_profile(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import cogbump.cli.commands.hooks_cmd as hooks_cmd

    ctx, _ = _ctx(tmp_path)
    monkeypatch.setattr(hooks_cmd, "build_context", lambda: ctx)

    with pytest.raises(typer.Exit) as exc:
        hooks_cmd.hooks(profile="beta")

    assert exc.value.exit_code == ErrorCode.UNKNOWN_PROFILE


def test_config_summary(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import cogbump.cli.commands.config_cmd as config_cmd

    ctx, console = _ctx(tmp_path)
    monkeypatch.setattr(config_cmd, "build_context", lambda: ctx)

    config_cmd.show_config(author=None)

    assert "alpha: overrides pre, post" in console.messages
    assert "remote: https://codeberg.org/theoparis/dyadikos" in console.messages
    assert "author: theoparis -> Theo Paris" in console.messages


def test_config_author_signature(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import cogbump.cli.commands.config_cmd as config_cmd

    ctx, console = _ctx(tmp_path)
    monkeypatch.setattr(config_cmd, "build_context", lambda: ctx)

    config_cmd.show_config(author="theoparis")

    assert console.messages == ["Theo Paris"]


def test_config_unknown_author(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import cogbump.cli.commands.config_cmd as config_cmd

    ctx, console = _ctx(tmp_path)
    monkeypatch.setattr(config_cmd, "build_context", lambda: ctx)

    with pytest.raises(typer.Exit) as exc:
        config_cmd.show_config(author="someone")

    assert exc.value.exit_code == ErrorCode.USER_ERROR
    assert console.has_error()
