"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from cogbump.core.template import Hook
from cogbump.output.console import ConsoleProtocol, Style
from cogbump.output.errors import bump_error_exit_code, print_bump_error
from cogbump.services.bump.errors import BumpError


def exit_on_bump_error(error: BumpError, console: ConsoleProtocol) -> NoReturn:
    """Print a bump error and exit with its code."""
    print_bump_error(error, console)
    raise typer.Exit(code=bump_error_exit_code(error))


def print_hook_list(console: ConsoleProtocol, title: str, hooks: tuple[Hook, ...]) -> None:
    console.print(f"{title}:", Style.BOLD)
    if not hooks:
        console.print("  (none)", Style.DIM)
        return
    for index, hook in enumerate(hooks, start=1):
        console.command(f"  {index}.", hook.display)
