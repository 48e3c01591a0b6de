"""Running extremes shared between the polling and input threads."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from .metrics import (
    DEFAULT_CEILING,
    DEFAULT_OFFSET,
    NORMALIZED_FLOOR,
    DerivedMetrics,
    compute_metrics,
    normalize,
)


@dataclass(frozen=True, slots=True)
class ExtremesState:
    """Consistent copy of the tracker taken under its lock."""

    high: float
    low: float
    metrics: DerivedMetrics
    samples: int


class ExtremesTracker:
    """Tracks the running high/low of normalised samples.

    ``high``, ``low`` and the derived metrics only ever change together
    under a single lock, so :meth:`observe` and :meth:`reset` never
    interleave and readers never see a torn state.
    """

    def __init__(self, *, ceiling: float = DEFAULT_CEILING, offset: int = DEFAULT_OFFSET) -> None:
        if ceiling < NORMALIZED_FLOOR:
            raise ValueError(f"ceiling must be >= {NORMALIZED_FLOOR:g}, got {ceiling!r}")
        self._ceiling = float(ceiling)
        self._offset = offset
        self._lock = threading.Lock()
        self._high = NORMALIZED_FLOOR
        self._low = self._ceiling
        self._metrics = DerivedMetrics()
        self._samples = 0

    @property
    def ceiling(self) -> float:
        return self._ceiling

    @property
    def offset(self) -> int:
        return self._offset

    def observe(self, raw: int) -> DerivedMetrics:
        """Fold one raw reading into the extremes and return fresh metrics."""
        value = normalize(raw, self._offset)
        with self._lock:
            self._high = max(self._high, value)
            self._low = min(self._low, value)
            self._metrics = compute_metrics(self._high, self._low)
            self._samples += 1
            return self._metrics

    def reset(self) -> None:
        """Start a new measurement window."""
        with self._lock:
            self._high = NORMALIZED_FLOOR
            self._low = self._ceiling
            self._metrics = DerivedMetrics()
            self._samples = 0

    def snapshot(self) -> DerivedMetrics:
        with self._lock:
            return self._metrics

    def state(self) -> ExtremesState:
        with self._lock:
            return ExtremesState(
                high=self._high,
                low=self._low,
                metrics=self._metrics,
                samples=self._samples,
            )
