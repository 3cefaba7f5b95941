from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from cogbump.core.config import CONFIG_FILE_NAME, Config, find_config_file, load_config
from cogbump.core.errors import ErrorCode
from cogbump.core.result import Err
from cogbump.output.console import ConsoleProtocol, RichConsole, Style
from cogbump.output.errors import print_config_error

CONFIG_ENV_VAR = "COGBUMP_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    config_path: Path
    console: ConsoleProtocol

    @property
    def root(self) -> Path:
        """Repository root: the directory holding the config file. Hooks run here."""
        return self.config_path.parent


def locate_config(*, start_dir: Path | None = None) -> Path | None:
    """Find the config file.

    Detection order:
    1. COGBUMP_CONFIG environment variable (set by ``--config``)
    2. cog.toml in start_dir (or cwd) or any parent
    """
    env_value = os.environ.get(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value).expanduser().resolve()
    return find_config_file((start_dir or Path.cwd()).resolve())


def build_context(console: ConsoleProtocol | None = None) -> CLIContext:
    console = console or RichConsole()

    path = locate_config()
    if path is None:
        console.error(f"no {CONFIG_FILE_NAME} found in this directory or any parent")
        console.print("hint: pass --config PATH", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    if not path.is_file():
        console.error(f"config file not found: {path}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    result = load_config(path)
    if isinstance(result, Err):
        print_config_error(result.error, console)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    return CLIContext(config=result.value, config_path=path, console=console)
