"""Exit codes for the ghver CLI.

These values are used as process exit codes and should remain stable:
- 0: Success
- 1: User error (malformed owner/repo, bad config)
- 4: Network error (API unreachable, rate limited, HTTP error)
- 5: Cancelled (timeout elapsed)
- 6: Not found (a winning tag has no commit in the tag listing)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0
    USER_ERROR = 1
    NETWORK_ERROR = 4
    CANCELLED = 5
    NOT_FOUND = 6

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")
