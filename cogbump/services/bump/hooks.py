"""Sequential, fail-fast hook execution.

Hooks build on each other's side effects (a ``git merge`` after a ``git
checkout``), and most of them cannot be repeated safely (pushes, publishes).
So the runner renders every hook before running any, runs them strictly in
order, stops at the first non-zero exit and never retries.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from cogbump.core.result import Err, Ok, Result
from cogbump.core.template import BumpContext, Hook, ShellHook, StructuredHook, render_hook
from cogbump.output.console import ConsoleProtocol
from cogbump.platform.process import run_shell, run_silent
from cogbump.services.bump.errors import (
    INTERRUPTED_EXIT_STATUS,
    HookFailed,
    HookPhase,
    HookRunError,
    UnresolvedToken,
)

__all__ = [
    "HookExecutor",
    "HookRun",
    "HookRunner",
    "SubprocessHookExecutor",
    "render_hooks",
]


class HookExecutor(Protocol):
    """Runs one rendered hook in cwd and returns its exit status."""

    def __call__(self, hook: Hook, cwd: Path) -> int: ...


class SubprocessHookExecutor:
    """Runs shell hooks through the shell and structured hooks as argv.

    The child inherits the environment and the terminal. A hook that cannot
    be started at all reports exit status -1.
    """

    def __call__(self, hook: Hook, cwd: Path) -> int:
        match hook:
            case ShellHook(command=command):
                result = run_shell(command, cwd=cwd)
            case StructuredHook():
                result = run_silent(hook.argv, cwd=cwd)

        if isinstance(result, Err):
            return result.error.returncode
        return 0


@dataclass(frozen=True, slots=True)
class HookRun:
    """Outcome of a successful run.

    Attributes:
        executed: Rendered commands that ran, in order.
    """

    executed: tuple[str, ...]


def render_hooks(
    hooks: tuple[Hook, ...],
    context: BumpContext,
    phase: HookPhase,
) -> Result[tuple[Hook, ...], UnresolvedToken]:
    """Substitute tokens in every hook, failing on the first unknown one."""
    rendered: list[Hook] = []
    for index, hook in enumerate(hooks):
        result = render_hook(hook, context)
        if isinstance(result, Err):
            return Err(
                UnresolvedToken(
                    identifier=result.error,
                    index=index,
                    command=hook.display,
                    phase=phase,
                )
            )
        rendered.append(result.value)
    return Ok(tuple(rendered))


class HookRunner:
    """Executes hook sequences for a bump.

    Attributes:
        cwd: Directory every hook runs in (the repository root).
    """

    def __init__(
        self,
        *,
        executor: HookExecutor,
        cwd: Path,
        console: ConsoleProtocol,
    ) -> None:
        self._executor = executor
        self._console = console
        self.cwd = cwd

    def run(
        self,
        hooks: tuple[Hook, ...],
        context: BumpContext,
        *,
        phase: HookPhase = "pre",
    ) -> Result[HookRun, HookRunError]:
        """Run hooks in declaration order.

        Returns:
            Ok(HookRun) when every hook exited 0 (trivially for no hooks),
            Err(UnresolvedToken) before anything ran, or
            Err(HookFailed) for the first hook that failed.
        """
        rendered = render_hooks(hooks, context, phase)
        if isinstance(rendered, Err):
            return rendered

        total = len(rendered.value)
        executed: list[str] = []
        for index, hook in enumerate(rendered.value):
            self._console.command(f"[{phase} {index + 1}/{total}]", hook.display)
            try:
                status = self._executor(hook, self.cwd)
            except KeyboardInterrupt:
                return Err(
                    HookFailed(
                        index=index,
                        command=hook.display,
                        exit_status=INTERRUPTED_EXIT_STATUS,
                        phase=phase,
                        interrupted=True,
                    )
                )

            if status != 0:
                return Err(HookFailed(index=index, command=hook.display, exit_status=status, phase=phase))
            executed.append(hook.display)

        return Ok(HookRun(executed=tuple(executed)))
