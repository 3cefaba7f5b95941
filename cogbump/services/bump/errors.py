from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

HookPhase = Literal["pre", "post"]

# Exit status reported for a hook aborted by Ctrl-C.
INTERRUPTED_EXIT_STATUS = 130


@dataclass(frozen=True, slots=True)
class UnknownProfile:
    name: str
    available: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class UnresolvedToken:
    """A hook references ``{{identifier}}`` and nothing provides it."""

    identifier: str
    index: int
    command: str
    phase: HookPhase


@dataclass(frozen=True, slots=True)
class HookFailed:
    """Hook ``index`` (0-based) exited non-zero; later hooks did not run."""

    index: int
    command: str
    exit_status: int
    phase: HookPhase
    interrupted: bool = False


@dataclass(frozen=True, slots=True)
class BumpFailed:
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class PostHookFailedAfterBump:
    """A post-bump hook failed. The version change is already applied.

    Attributes:
        version: The version that was bumped to.
        cause: The failing hook.
        remaining: Commands that never ran, in order, starting with the failed one.
    """

    version: str
    cause: HookFailed | UnresolvedToken
    remaining: tuple[str, ...]


HookRunError = UnresolvedToken | HookFailed

BumpError = UnknownProfile | UnresolvedToken | HookFailed | BumpFailed | PostHookFailedAfterBump
