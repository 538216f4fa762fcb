"""Cancellation and deadline handling for git invocations."""

import threading
import time
from typing import Optional

from git_repo_keeper.exceptions import OperationCancelledError


class OperationContext:
    """Shared cancellation signal and optional deadline.

    One context is handed to every repository job of a run. Git invocations
    call ``check()`` before they start and bound themselves by
    ``remaining()``, so a cancel or an expired deadline stops new work and
    kills commands that outlive the deadline.
    """

    def __init__(self, timeout: Optional[float] = None):
        self._cancelled = threading.Event()
        self.deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        """Signal cancellation to everything sharing this context."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None when there is none."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def error(self) -> Optional[OperationCancelledError]:
        """Return the cancellation error if the context is done, else None."""
        if self.cancelled:
            return OperationCancelledError("operation cancelled")
        if self.expired:
            return OperationCancelledError("deadline exceeded")
        return None

    def check(self) -> None:
        """Raise OperationCancelledError if the context is done."""
        err = self.error()
        if err is not None:
            raise err


def background() -> OperationContext:
    """A context that is never cancelled and has no deadline."""
    return OperationContext()
