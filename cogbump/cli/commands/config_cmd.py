from __future__ import annotations

import typer

from cogbump.cli.context import build_context
from cogbump.core.errors import ErrorCode
from cogbump.output.console import Style


def show_config(
    author: str | None = typer.Option(
        None,
        "--author",
        "-a",
        help="Print the changelog signature mapped to this username and exit.",
    ),
) -> None:
    """Show profiles and changelog settings from cog.toml."""
    ctx = build_context()
    console = ctx.console
    config = ctx.config
    changelog = config.changelog

    if author is not None:
        signature = changelog.signature_for(author)
        if signature is None:
            console.error(f"No changelog author with username: {author}")
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        console.print(signature)
        return

    console.print(f"config: {ctx.config_path}", Style.DIM)
    console.print(f"tag prefix: {config.tag_prefix or '(none)'}")

    console.header("Bump profiles")
    if not config.profiles:
        console.print("(none)", Style.DIM)
    for name, profile in sorted(config.profiles.items()):
        overrides = [
            label
            for label, value in (("pre", profile.pre_bump_hooks), ("post", profile.post_bump_hooks))
            if value is not None
        ]
        console.print(f"{name}: overrides {', '.join(overrides) or 'nothing'}")

    console.header("Changelog")
    console.print(f"path: {changelog.path}")
    console.print(f"template: {changelog.template}")
    if changelog.remote_url:
        console.print(f"remote: {changelog.remote_url}")
    elif changelog.remote:
        console.print(f"remote: {changelog.remote}")
    for mapping in changelog.authors:
        console.print(f"author: {mapping.username} -> {mapping.signature}", Style.DIM)
