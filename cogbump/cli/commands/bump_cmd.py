from __future__ import annotations

from pathlib import Path

import typer

from cogbump.cli.commands._helpers import exit_on_bump_error, print_hook_list
from cogbump.cli.context import CLIContext, build_context
from cogbump.core.result import Err
from cogbump.git.repository import Repository
from cogbump.output.console import ConsoleProtocol, Style
from cogbump.services.bump.hooks import HookExecutor, HookRunner, SubprocessHookExecutor
from cogbump.services.bump.orchestrator import BumpOrchestrator, BumpPlan
from cogbump.services.bump.versioning import GitTagBumper, VersionBumper


def make_bumper(root: Path, tag_prefix: str) -> VersionBumper:
    return GitTagBumper(Repository(root), tag_prefix=tag_prefix)


def make_executor() -> HookExecutor:
    return SubprocessHookExecutor()


def bump(
    version: str = typer.Argument(
        ...,
        help="Target version (X.Y.Z) or bump kind: major, minor, patch.",
    ),
    profile: str | None = typer.Option(
        None,
        "--profile",
        "-p",
        help="Use the hooks of [bump_profiles.<name>] instead of the defaults.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show the resolved version and hooks without running anything.",
    ),
) -> None:
    """Run pre-bump hooks, bump the version, then run post-bump hooks."""
    ctx = build_context()
    orchestrator = _build_orchestrator(ctx)

    if dry_run:
        planned = orchestrator.plan(profile, version)
        if isinstance(planned, Err):
            exit_on_bump_error(planned.error, ctx.console)
        _print_plan(ctx.console, planned.value)
        return

    result = orchestrator.execute(profile, version)
    if isinstance(result, Err):
        exit_on_bump_error(result.error, ctx.console)


def _build_orchestrator(ctx: CLIContext) -> BumpOrchestrator:
    runner = HookRunner(executor=make_executor(), cwd=ctx.root, console=ctx.console)
    return BumpOrchestrator(
        config=ctx.config,
        bumper=make_bumper(ctx.root, ctx.config.tag_prefix),
        runner=runner,
        console=ctx.console,
    )


def _print_plan(console: ConsoleProtocol, plan: BumpPlan) -> None:
    console.header(f"Dry run: {plan.context.latest_version} -> {plan.context.version}")
    console.print(f"profile: {plan.hooks.profile or 'default'}", Style.DIM)
    print_hook_list(console, "pre-bump hooks", plan.pre)
    console.print(f"bump: commit and tag {plan.context.version}", Style.BOLD)
    print_hook_list(console, "post-bump hooks", plan.post)
