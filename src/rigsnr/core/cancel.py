from __future__ import annotations

import threading


class RunFlag:
    """One-shot cancellation token shared by the meter threads.

    Starts in the running state and can be cleared exactly once. All reads
    and writes go through the underlying :class:`threading.Event`, so a
    cleared flag is visible to every thread immediately.
    """

    def __init__(self) -> None:
        self._stopped = threading.Event()
        self._lock = threading.Lock()
        self._reason: str | None = None

    @property
    def running(self) -> bool:
        return not self._stopped.is_set()

    @property
    def reason(self) -> str | None:
        with self._lock:
            return self._reason

    def clear(self, reason: str = "requested") -> bool:
        """Clear the flag. Returns True only for the call that cleared it."""
        with self._lock:
            if self._stopped.is_set():
                return False
            self._reason = reason
            self._stopped.set()
            return True

    def wait(self, timeout: float) -> bool:
        """Sleep up to *timeout* seconds, waking early on clear.

        Returns True if the flag is still set (keep running).
        """
        return not self._stopped.wait(timeout)
