from __future__ import annotations

from dataclasses import dataclass

from cogbump.core.config import Config
from cogbump.core.result import Err, Ok, Result
from cogbump.core.template import Hook
from cogbump.services.bump.errors import UnknownProfile


@dataclass(frozen=True, slots=True)
class ResolvedHooks:
    """The hook lists one bump will run.

    Attributes:
        pre: Hooks run before the version bump, in order.
        post: Hooks run after the version bump, in order.
        profile: Name of the profile they came from, None for the defaults.
    """

    pre: tuple[Hook, ...]
    post: tuple[Hook, ...]
    profile: str | None = None


def resolve_profile(config: Config, profile_name: str | None) -> Result[ResolvedHooks, UnknownProfile]:
    """Select the hooks for a bump.

    A profile replaces each base list it sets and inherits each list it
    leaves unset. Lists are never merged. Config is not modified.
    """
    if profile_name is None:
        return Ok(ResolvedHooks(pre=config.pre_bump_hooks, post=config.post_bump_hooks))

    profile = config.profiles.get(profile_name)
    if profile is None:
        return Err(UnknownProfile(name=profile_name, available=tuple(sorted(config.profiles))))

    pre = profile.pre_bump_hooks if profile.pre_bump_hooks is not None else config.pre_bump_hooks
    post = profile.post_bump_hooks if profile.post_bump_hooks is not None else config.post_bump_hooks
    return Ok(ResolvedHooks(pre=pre, post=post, profile=profile_name))
