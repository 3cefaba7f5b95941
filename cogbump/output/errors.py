"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cogbump.core.config import MalformedConfig
from cogbump.core.errors import ErrorCode
from cogbump.output.console import Style
from cogbump.services.bump.errors import (
    BumpError,
    BumpFailed,
    HookFailed,
    PostHookFailedAfterBump,
    UnknownProfile,
    UnresolvedToken,
)

if TYPE_CHECKING:
    from cogbump.output.console import ConsoleProtocol

__all__ = ["bump_error_exit_code", "print_bump_error", "print_config_error"]


def _describe_hook_failure(error: HookFailed) -> str:
    position = f"{error.phase}-bump hook #{error.index + 1}"
    if error.interrupted:
        return f"{position} interrupted: {error.command}"
    if error.exit_status < 0:
        return f"{position} could not be run: {error.command}"
    return f"{position} failed (exit {error.exit_status}): {error.command}"


def print_config_error(error: MalformedConfig, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def print_bump_error(error: BumpError, console: ConsoleProtocol) -> None:
    """Print a bump error with enough context to re-run safely."""
    match error:
        case UnknownProfile(name=name, available=available):
            console.error(f"Unknown bump profile: {name}")
            if available:
                console.print(f"Available: {', '.join(available)}", Style.DIM)
            else:
                console.print("No [bump_profiles] are defined", Style.DIM)
        case UnresolvedToken(identifier=identifier, index=index, command=command, phase=phase):
            console.error(
                f"Unknown token {{{{{identifier}}}}} in {phase}-bump hook #{index + 1}: {command}"
            )
            console.print("hint: supported tokens are {{version}} and {{latest_version}}", Style.DIM)
        case HookFailed() as failed:
            console.error(_describe_hook_failure(failed))
            console.print("hint: nothing was bumped; fix the hook and run again", Style.DIM)
        case BumpFailed(message=message, hint=hint):
            console.error(f"Version bump failed: {message}")
            if hint:
                console.print(f"hint: {hint}", Style.DIM)
        case PostHookFailedAfterBump(version=version, cause=cause, remaining=remaining):
            match cause:
                case HookFailed():
                    console.error(_describe_hook_failure(cause))
                case UnresolvedToken(identifier=identifier, command=command):
                    console.error(f"Unknown token {{{{{identifier}}}}} in post-bump hook: {command}")
            console.warning(f"version {version} was already bumped; it has not been rolled back")
            if remaining:
                console.print("Post-bump hooks left to run by hand:", Style.BOLD)
                for command in remaining:
                    console.print(f"  {command}", Style.DIM)


def bump_error_exit_code(error: BumpError) -> int:
    """Get exit code for a bump error."""
    match error:
        case UnknownProfile():
            return int(ErrorCode.UNKNOWN_PROFILE)
        case UnresolvedToken():
            return int(ErrorCode.CONFIG_ERROR)
        case HookFailed():
            return int(ErrorCode.HOOK_FAILED)
        case BumpFailed():
            return int(ErrorCode.BUMP_FAILED)
        case PostHookFailedAfterBump():
            return int(ErrorCode.POST_HOOK_FAILED)
