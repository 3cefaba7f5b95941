from __future__ import annotations

from pathlib import Path

import pytest
import typer

from cogbump.cli.context import CONFIG_ENV_VAR, build_context, locate_config
from cogbump.core.errors import ErrorCode
from cogbump.output.console import MockConsole
from cogbump.test.samples import COG_TOML


def test_locate_config_searches_upward(tmp_path: Path) -> None:
    (tmp_path / "cog.toml").write_text(COG_TOML, encoding="utf-8")
    nested = tmp_path / "crates" / "core"
    nested.mkdir(parents=True)

    assert locate_config(start_dir=nested) == (tmp_path / "cog.toml").resolve()


def test_locate_config_prefers_env_var(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "cog.toml").write_text(COG_TOML, encoding="utf-8")
    other = tmp_path / "other.toml"
    other.write_text("", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(other))

    assert locate_config(start_dir=tmp_path) == other.resolve()


def test_build_context_loads_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "cog.toml").write_text(COG_TOML, encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    ctx = build_context(MockConsole())

    assert ctx.root == tmp_path.resolve()
    assert "alpha" in ctx.config.profiles


def test_build_context_without_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("cogbump.cli.context.find_config_file", lambda _start: None)
    console = MockConsole()

    with pytest.raises(typer.Exit) as exc:
        build_context(console)

    assert exc.value.exit_code == ErrorCode.USER_ERROR
    assert "no cog.toml found" in console.text


def test_build_context_malformed_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "cog.toml").write_text("pre_bump_hooks = 3\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    console = MockConsole()

    with pytest.raises(typer.Exit) as exc:
        build_context(console)

    assert exc.value.exit_code == ErrorCode.CONFIG_ERROR
    assert console.messages[0].startswith("error: pre_bump_hooks:")


def test_build_context_env_var_pointing_nowhere(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.toml"))
    console = MockConsole()

    with pytest.raises(typer.Exit) as exc:
        build_context(console)

    assert exc.value.exit_code == ErrorCode.USER_ERROR
    assert "config file not found" in console.text
