"""Git operations used by the default version bumper."""

from cogbump.git.repository import GitError, Repository

__all__ = ["GitError", "Repository"]
