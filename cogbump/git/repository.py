"""The git operations behind GitTagBumper.

Find the latest version tag, check whether a tag exists, stage, commit and
tag. Each call is one `git -C <root> ...` run through platform.process.

    match Repository(root).latest_tag(prefix="v"):
        case Ok(None):
            ...  # first release
        case Ok(tag):
            ...
        case Err(error):
            console.error(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cogbump.core.result import Err, Ok, Result
from cogbump.platform.process import ProcessError
from cogbump.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """A failed git call.

    Attributes:
        command: Subcommand name, e.g. ``describe`` or ``tag``.
        message: git's stderr (or stdout) with whitespace trimmed.
        returncode: Exit status of git.
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A git working tree rooted at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """Check if path lies inside a git work tree, at any depth."""
        result = self._run(["rev-parse", "--is-inside-work-tree"])
        return isinstance(result, Ok) and result.value.strip() == "true"

    def latest_tag(self, prefix: str = "") -> Result[str | None, GitError]:
        """Most recent tag reachable from HEAD that starts with prefix.

        Returns:
            Ok(tag), Ok(None) if the repository has no matching tag yet,
            Err(GitError) if git itself failed.
        """
        result = self._run(["describe", "--tags", "--abbrev=0", "--match", f"{prefix}*"])
        match result:
            case Ok(stdout):
                return Ok(stdout.strip() or None)
            case Err(e):
                if _is_no_tag_error(e):
                    return Ok(None)
                return Err(self._error("describe", e, "git describe failed"))

    def tag_exists(self, tag: str) -> bool:
        result = self._run(["rev-parse", "--verify", "--quiet", f"refs/tags/{tag}"])
        return isinstance(result, Ok)

    def add_all(self) -> Result[None, GitError]:
        """Stage every change in the working tree."""
        result = self._run(["add", "-A"])
        if isinstance(result, Err):
            return Err(self._error("add", result.error, "git add failed"))
        return Ok(None)

    def commit(self, message: str, *, allow_empty: bool = False) -> Result[None, GitError]:
        args = ["commit", "-m", message]
        if allow_empty:
            args.append("--allow-empty")
        result = self._run(args)
        if isinstance(result, Err):
            return Err(self._error("commit", result.error, "git commit failed"))
        return Ok(None)

    def create_tag(self, tag: str) -> Result[None, GitError]:
        result = self._run(["tag", tag])
        if isinstance(result, Err):
            return Err(self._error("tag", result.error, f"git tag {tag} failed"))
        return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=_GIT_TIMEOUT_SECONDS,
        )

    def _error(self, command: str, e: ProcessError, fallback: str) -> GitError:
        return GitError(
            command=command,
            message=e.stderr.strip() or e.stdout.strip() or fallback,
            returncode=e.returncode,
        )


def _is_no_tag_error(e: ProcessError) -> bool:
    # "No names found" on a repo without tags, "cannot describe" when none match.
    stderr = e.stderr.lower()
    return "no names found" in stderr or "cannot describe" in stderr or "no tags" in stderr
