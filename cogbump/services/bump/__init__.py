"""Hook-driven version bump workflow."""

from cogbump.services.bump.errors import (
    BumpError,
    BumpFailed,
    HookFailed,
    PostHookFailedAfterBump,
    UnknownProfile,
    UnresolvedToken,
)
from cogbump.services.bump.hooks import HookExecutor, HookRun, HookRunner, SubprocessHookExecutor
from cogbump.services.bump.orchestrator import BumpOrchestrator, BumpOutcome, BumpPlan, BumpState
from cogbump.services.bump.profiles import ResolvedHooks, resolve_profile
from cogbump.services.bump.versioning import GitTagBumper, VersionBumper

__all__ = [
    # errors
    "BumpError",
    "BumpFailed",
    "HookFailed",
    "PostHookFailedAfterBump",
    "UnknownProfile",
    "UnresolvedToken",
    # hooks
    "HookExecutor",
    "HookRun",
    "HookRunner",
    "SubprocessHookExecutor",
    # orchestrator
    "BumpOrchestrator",
    "BumpOutcome",
    "BumpPlan",
    "BumpState",
    # profiles
    "ResolvedHooks",
    "resolve_profile",
    # versioning
    "GitTagBumper",
    "VersionBumper",
]
