"""Cancellation and deadline signal for long-running lookups.

A CancelToken is checked at every page-fetch boundary. It can be fired
explicitly (e.g. from another thread) or expire on a monotonic deadline.

Usage:
    token = CancelToken.with_timeout(10.0)
    result = get_releases(http, "kubernetes", "minikube", cancel=token)
"""

from __future__ import annotations

import threading
from time import monotonic

__all__ = ["CancelToken"]


class CancelToken:
    def __init__(self, deadline: float | None = None) -> None:
        """Create a token.

        Args:
            deadline: Absolute monotonic() value after which the token
                counts as cancelled, or None for no deadline.
        """
        self._event = threading.Event()
        self._deadline = deadline

    @classmethod
    def with_timeout(cls, seconds: float) -> CancelToken:
        return cls(deadline=monotonic() + seconds)

    def cancel(self) -> None:
        self._event.set()

    @property
    def remaining(self) -> float | None:
        """Seconds left before the deadline (never negative), or None."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - monotonic())

    def reason(self) -> str | None:
        """Why the token is cancelled, or None if it is still live."""
        if self._event.is_set():
            return "operation cancelled"
        if self._deadline is not None and monotonic() >= self._deadline:
            return "deadline exceeded"
        return None

    @property
    def cancelled(self) -> bool:
        return self.reason() is not None
