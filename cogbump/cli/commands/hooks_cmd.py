from __future__ import annotations

import typer

from cogbump.cli.commands._helpers import exit_on_bump_error, print_hook_list
from cogbump.cli.context import build_context
from cogbump.core.result import Err
from cogbump.output.console import Style
from cogbump.services.bump.profiles import resolve_profile


def hooks(
    profile: str | None = typer.Option(
        None,
        "--profile",
        "-p",
        help="Show the hooks of [bump_profiles.<name>].",
    ),
) -> None:
    """List the hooks a bump would run, tokens not yet substituted."""
    ctx = build_context()

    resolved = resolve_profile(ctx.config, profile)
    if isinstance(resolved, Err):
        exit_on_bump_error(resolved.error, ctx.console)

    ctx.console.print(f"config: {ctx.config_path}", Style.DIM)
    ctx.console.print(f"profile: {resolved.value.profile or 'default'}", Style.DIM)
    print_hook_list(ctx.console, "pre-bump hooks", resolved.value.pre)
    print_hook_list(ctx.console, "post-bump hooks", resolved.value.post)
