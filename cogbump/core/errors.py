"""Exit codes for the cogbump CLI.

Each failure class of a bump maps to its own exit status so that scripts
driving a release can tell "nothing happened yet" apart from "the version
was already changed".
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. These values are part of the CLI contract.

    - 0: Success
    - 1: User error (bad arguments, no config file found)
    - 2: Config error (malformed cog.toml, unknown template token)
    - 3: Unknown bump profile
    - 4: A pre-bump hook failed (no bump attempted)
    - 5: The version bump itself failed
    - 6: A post-bump hook failed after the version was bumped
    """

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    UNKNOWN_PROFILE = 3
    HOOK_FAILED = 4
    BUMP_FAILED = 5
    POST_HOOK_FAILED = 6

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
