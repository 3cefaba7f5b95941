"""Process execution, the only place cogbump spawns children."""

from .process import NOT_STARTED, ProcessError, run, run_shell, run_silent

__all__ = ["NOT_STARTED", "ProcessError", "run", "run_shell", "run_silent"]
