from __future__ import annotations

import threading

from .errors import RunCancelled


class CancellationToken:
    """Cooperative cancellation flag checked at every I/O boundary of a run."""

    def __init__(self):
        self._event = threading.Event()
        self.reason = None

    def cancel(self, reason: str = "cancelled") -> None:
        self.reason = reason
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RunCancelled(self.reason)


NEVER = CancellationToken()
