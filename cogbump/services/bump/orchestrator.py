"""Top-level bump workflow.

    IDLE -> RESOLVING_PROFILE -> RUNNING_PRE_HOOKS -> BUMPING
         -> RUNNING_POST_HOOKS -> DONE

Any failure after IDLE ends in FAILED, including Ctrl-C during BUMPING,
which is reported as BumpFailed. Everything that can be checked
without side effects (profile, target version, every hook template) is
checked in RESOLVING_PROFILE, so UnknownProfile, UnresolvedToken and a
failed version plan never leave anything behind.

A failure in RUNNING_POST_HOOKS is reported as PostHookFailedAfterBump.
The bump is not rolled back: post hooks such as ``git push`` may already
have published it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum

from cogbump.core.config import Config
from cogbump.core.result import Err, Ok, Result
from cogbump.core.template import BumpContext, Hook
from cogbump.output.console import ConsoleProtocol, Style
from cogbump.services.bump.errors import BumpError, BumpFailed, PostHookFailedAfterBump
from cogbump.services.bump.fsm import StepOutcome, StepHandler, advance, finish, run_state_machine
from cogbump.services.bump.hooks import HookRunner, render_hooks
from cogbump.services.bump.profiles import ResolvedHooks, resolve_profile
from cogbump.services.bump.versioning import VersionBumper

__all__ = ["BumpOrchestrator", "BumpOutcome", "BumpPlan", "BumpState"]


class BumpState(Enum):
    IDLE = "idle"
    RESOLVING_PROFILE = "resolving_profile"
    RUNNING_PRE_HOOKS = "running_pre_hooks"
    BUMPING = "bumping"
    RUNNING_POST_HOOKS = "running_post_hooks"
    DONE = "done"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value.replace("_", " ")


@dataclass(frozen=True, slots=True)
class BumpPlan:
    """Everything a bump will do, with templates already substituted."""

    context: BumpContext
    hooks: ResolvedHooks
    pre: tuple[Hook, ...]
    post: tuple[Hook, ...]


@dataclass(frozen=True, slots=True)
class BumpOutcome:
    version: str
    latest_version: str
    profile: str | None
    pre_executed: tuple[str, ...]
    post_executed: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class _Session:
    state: BumpState
    profile_name: str | None
    requested: str
    plan: BumpPlan | None = None
    pre_executed: tuple[str, ...] = ()
    post_executed: tuple[str, ...] = ()

    def require_plan(self) -> BumpPlan:
        if self.plan is None:
            raise AssertionError(f"no plan in state {self.state}")
        return self.plan


type _Step = Result[StepOutcome[_Session], BumpError]


class BumpOrchestrator:
    """Runs one bump: profile, pre hooks, version change, post hooks.

    Attributes:
        state: The current BumpState. IDLE until ``execute`` is called.
    """

    def __init__(
        self,
        *,
        config: Config,
        bumper: VersionBumper,
        runner: HookRunner,
        console: ConsoleProtocol,
        on_transition: Callable[[BumpState], None] | None = None,
    ) -> None:
        self._config = config
        self._bumper = bumper
        self._runner = runner
        self._console = console
        self._on_transition = on_transition
        self.state = BumpState.IDLE

    def plan(self, profile_name: str | None, requested_version: str) -> Result[BumpPlan, BumpError]:
        """Resolve profile, target version and hook templates. No side effects."""
        resolved = resolve_profile(self._config, profile_name)
        if isinstance(resolved, Err):
            return resolved

        context = self._bumper.plan(requested_version)
        if isinstance(context, Err):
            return context

        pre = render_hooks(resolved.value.pre, context.value, "pre")
        if isinstance(pre, Err):
            return pre
        post = render_hooks(resolved.value.post, context.value, "post")
        if isinstance(post, Err):
            return post

        return Ok(BumpPlan(context=context.value, hooks=resolved.value, pre=pre.value, post=post.value))

    def execute(self, profile_name: str | None, requested_version: str) -> Result[BumpOutcome, BumpError]:
        handlers: dict[BumpState, StepHandler[_Session, BumpError]] = {
            BumpState.RESOLVING_PROFILE: self._resolve,
            BumpState.RUNNING_PRE_HOOKS: self._run_pre_hooks,
            BumpState.BUMPING: self._bump,
            BumpState.RUNNING_POST_HOOKS: self._run_post_hooks,
            BumpState.DONE: lambda s: Ok(finish(s)),
        }

        self._transition(BumpState.RESOLVING_PROFILE)
        try:
            result = run_state_machine(
                initial_state=_Session(
                    state=BumpState.RESOLVING_PROFILE,
                    profile_name=profile_name,
                    requested=requested_version,
                ),
                get_step=lambda s: s.state,
                handlers=handlers,
                on_advance=lambda s: self._transition(s.state),
            )
        except KeyboardInterrupt:
            result = Err(self._interrupted())

        if isinstance(result, Err):
            self._transition(BumpState.FAILED)
            return result

        session = result.value
        plan = session.require_plan()
        self._console.success(f"bumped {plan.context.latest_version} -> {plan.context.version}")
        return Ok(
            BumpOutcome(
                version=plan.context.version,
                latest_version=plan.context.latest_version,
                profile=plan.hooks.profile,
                pre_executed=session.pre_executed,
                post_executed=session.post_executed,
            )
        )

    def _transition(self, state: BumpState) -> None:
        self.state = state
        if self._on_transition is not None:
            self._on_transition(state)

    def _interrupted(self) -> BumpFailed:
        # Hook phases report their own interrupts through HookRunner.
        if self.state == BumpState.BUMPING:
            return BumpFailed(
                message="interrupted",
                hint="the version commit or tag may be incomplete; check `git status` and `git tag`",
            )
        return BumpFailed(message=f"interrupted while {self.state}")

    def _resolve(self, session: _Session) -> _Step:
        planned = self.plan(session.profile_name, session.requested)
        if isinstance(planned, Err):
            return planned

        plan = planned.value
        profile = plan.hooks.profile or "default"
        self._console.header(f"Bumping {plan.context.latest_version} -> {plan.context.version}")
        self._console.print(f"profile: {profile}", Style.DIM)
        return Ok(advance(replace(session, state=BumpState.RUNNING_PRE_HOOKS, plan=plan)))

    def _run_pre_hooks(self, session: _Session) -> _Step:
        plan = session.require_plan()
        ran = self._runner.run(plan.hooks.pre, plan.context, phase="pre")
        if isinstance(ran, Err):
            return ran
        return Ok(advance(replace(session, state=BumpState.BUMPING, pre_executed=ran.value.executed)))

    def _bump(self, session: _Session) -> _Step:
        plan = session.require_plan()
        applied = self._bumper.apply(plan.context)
        if isinstance(applied, Err):
            return applied
        self._console.print(f"version set to {plan.context.version}", Style.INFO)
        return Ok(advance(replace(session, state=BumpState.RUNNING_POST_HOOKS)))

    def _run_post_hooks(self, session: _Session) -> _Step:
        plan = session.require_plan()
        ran = self._runner.run(plan.hooks.post, plan.context, phase="post")
        if isinstance(ran, Err):
            cause = ran.error
            remaining = tuple(h.display for h in plan.post[cause.index :])
            return Err(PostHookFailedAfterBump(version=plan.context.version, cause=cause, remaining=remaining))
        return Ok(advance(replace(session, state=BumpState.DONE, post_executed=ran.value.executed)))
