"""Type definitions for rigsnr.

Protocol stubs for the collaborators the meter threads talk to, so the
loop and listener can be driven by Hamlib, rigctld, mocks or test doubles
without importing any of them.
"""

from __future__ import annotations

from typing import Protocol

from .metrics import DerivedMetrics


class SampleSource(Protocol):
    """Yields one integer strength reading per call.

    ``read_strength`` raises :class:`rigsnr.core.errors.SampleReadError`
    on a transient failure and must return in bounded time.
    """

    def read_strength(self) -> int: ...

    def close(self) -> None: ...


class KeySource(Protocol):
    def read_key(self, timeout: float) -> str | None:
        """Return the next key, or None if none arrived within *timeout*."""
        ...


class LineRendererProtocol(Protocol):
    def render(self, metrics: DerivedMetrics) -> None: ...

    def newline(self) -> None: ...


class SessionStatus:
    """Status dictionary returned by MeterSession.status()."""

    running: bool
    backend: str
    polling_alive: bool
    listener_alive: bool
    samples: int
    snr: float
    dnr: float


SessionStatusDict = dict[str, object]
