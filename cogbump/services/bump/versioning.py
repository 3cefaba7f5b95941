"""Default version bumper: git tags as the version store.

The orchestrator only depends on ``VersionBumper``. ``GitTagBumper`` is the
implementation the CLI uses: the latest version is the most recent tag, and
applying a bump commits the working tree as ``chore(version): X.Y.Z`` and
tags it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Protocol, cast, get_args

from cogbump.core.result import Err, Ok, Result
from cogbump.core.template import BumpContext
from cogbump.git.repository import GitError, Repository
from cogbump.services.bump.errors import BumpFailed

__all__ = [
    "BumpKind",
    "GitTagBumper",
    "INITIAL_VERSION",
    "SemVer",
    "VersionBumper",
    "parse_version",
]

BumpKind = Literal["major", "minor", "patch"]
BUMP_KINDS: frozenset[str] = frozenset(get_args(BumpKind))

INITIAL_VERSION = "0.0.0"

_VERSION_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


@dataclass(frozen=True, slots=True, order=True)
class SemVer:
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def bump(self, kind: BumpKind) -> SemVer:
        match kind:
            case "major":
                return SemVer(self.major + 1, 0, 0)
            case "minor":
                return SemVer(self.major, self.minor + 1, 0)
            case "patch":
                return SemVer(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")


def parse_version(text: str) -> SemVer | None:
    """Parse ``X.Y.Z[-pre][+build]``, keeping only the numeric core."""
    m = _VERSION_RE.match(text)
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)))


class VersionBumper(Protocol):
    """Computes and applies the version change of one bump."""

    def plan(self, requested: str) -> Result[BumpContext, BumpFailed]:
        """Work out target and previous version. Must not change anything."""
        ...

    def apply(self, context: BumpContext) -> Result[None, BumpFailed]:
        """Record context.version in the repository."""
        ...


def _git_failed(e: GitError) -> BumpFailed:
    return BumpFailed(message=f"git {e.command} failed: {e.message}")


class GitTagBumper:
    def __init__(self, repo: Repository, *, tag_prefix: str = "") -> None:
        self.repo = repo
        self.tag_prefix = tag_prefix

    def tag_for(self, version: str) -> str:
        return f"{self.tag_prefix}{version}"

    def latest_version(self) -> Result[str, BumpFailed]:
        """Version of the most recent tag, or INITIAL_VERSION without one."""
        result = self.repo.latest_tag(prefix=self.tag_prefix)
        if isinstance(result, Err):
            return Err(_git_failed(result.error))

        tag = result.value
        if tag is None:
            return Ok(INITIAL_VERSION)
        return Ok(tag.removeprefix(self.tag_prefix))

    def plan(self, requested: str) -> Result[BumpContext, BumpFailed]:
        if not self.repo.exists():
            return Err(BumpFailed(message="not a git repository", hint=str(self.repo.path)))

        latest = self.latest_version()
        if isinstance(latest, Err):
            return latest
        latest_version = latest.value

        requested = requested.strip()
        if requested in BUMP_KINDS:
            base = parse_version(latest_version)
            if base is None:
                return Err(
                    BumpFailed(
                        message=f"latest version is not semantic: {latest_version}",
                        hint="pass an explicit X.Y.Z version instead of a bump kind",
                    )
                )
            version = str(base.bump(cast(BumpKind, requested)))
        elif _VERSION_RE.match(requested):
            version = requested
        else:
            return Err(
                BumpFailed(
                    message=f"invalid version: {requested}",
                    hint="use major, minor, patch or an explicit X.Y.Z version",
                )
            )

        if self.repo.tag_exists(self.tag_for(version)):
            return Err(BumpFailed(message=f"tag already exists: {self.tag_for(version)}"))

        return Ok(BumpContext(version=version, latest_version=latest_version))

    def apply(self, context: BumpContext) -> Result[None, BumpFailed]:
        steps = (
            self.repo.add_all,
            lambda: self.repo.commit(f"chore(version): {context.version}", allow_empty=True),
            lambda: self.repo.create_tag(self.tag_for(context.version)),
        )
        for step in steps:
            result = step()
            if isinstance(result, Err):
                return Err(_git_failed(result.error))
        return Ok(None)
