"""Child processes, reported as ``Result`` values.

Two ways to run something:

- ``run`` captures output, for short git queries whose stdout is parsed.
- ``run_silent`` (an argv) and ``run_shell`` (a command line handed to the
  shell) leave the child attached to the terminal. Hooks use these:
  ``cargo publish`` or ``git push`` may print progress or prompt the
  operator.

A command that cannot be started at all (missing program, bad cwd) or that
times out is reported with ``returncode == NOT_STARTED``.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from cogbump.core.result import Err, Ok, Result

__all__ = ["NOT_STARTED", "ProcessError", "run", "run_shell", "run_silent"]

NOT_STARTED = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that failed or never ran.

    Attributes:
        command: argv of the command; a shell command line is a single item.
        returncode: Exit status, or NOT_STARTED.
        stdout: Captured output, empty for attached runs.
        stderr: Captured errors, or why the command could not start.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def started(self) -> bool:
        return self.returncode != NOT_STARTED

    def __str__(self) -> str:
        shown = " ".join(self.command[:3])
        if len(self.command) > 3:
            shown += " ..."
        if not self.started:
            return f"{shown} could not be run: {self.stderr}"
        return f"{shown} failed (exit {self.returncode})"


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Run cmd with captured output.

    Returns:
        Ok(stdout) on exit 0, otherwise Err with both streams.
    """
    command = tuple(cmd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(ProcessError(command, NOT_STARTED, stderr=f"timed out after {timeout}s"))
    except OSError as e:
        return Err(ProcessError(command, NOT_STARTED, stderr=str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(command, proc.returncode, stdout=proc.stdout, stderr=proc.stderr))
    return Ok(proc.stdout)


def run_silent(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Run an argv attached to the terminal, without a shell."""
    return _run_attached(cmd, tuple(cmd), cwd=cwd, env=env, shell=False)


def run_shell(
    command: str,
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Run a command line through the system shell, attached to the terminal.

    The string is passed unchanged, so pipes, globs and ``&&`` behave the
    way they do when typed.
    """
    return _run_attached(command, (command,), cwd=cwd, env=env, shell=True)


def _run_attached(
    args: str | list[str],
    command: tuple[str, ...],
    *,
    cwd: Path,
    env: dict[str, str] | None,
    shell: bool,
) -> Result[None, ProcessError]:
    try:
        proc = subprocess.run(args, cwd=cwd, env=env, shell=shell, check=False)
    except OSError as e:
        return Err(ProcessError(command, NOT_STARTED, stderr=str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(command, proc.returncode))
    return Ok(None)
