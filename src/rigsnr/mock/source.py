"""Simulated S-meter for development without a rig."""

from __future__ import annotations

import logging
import random
import threading
from typing import Iterable

from rigsnr.core.errors import SampleReadError

logger = logging.getLogger(__name__)


class MockSampleSource:
    """Random-walk strength readings in Hamlib units (S9 = 0).

    Drifts around a noise floor near S3 with occasional stronger
    signals, and fails a fraction of reads to exercise the retry path.
    """

    def __init__(
        self,
        *,
        seed: int | None = None,
        floor: int = -36,
        peak: int = 30,
        failure_rate: float = 0.05,
    ) -> None:
        self._rng = random.Random(seed)
        self._floor = floor
        self._peak = peak
        self._failure_rate = failure_rate
        self._level = float(floor)

    def read_strength(self) -> int:
        if self._rng.random() < self._failure_rate:
            raise SampleReadError("mock read timeout")
        if self._rng.random() < 0.02:
            self._level = float(self._rng.randint(self._floor, self._peak))
        else:
            self._level += self._rng.gauss(0.0, 1.5)
            # pull back toward the noise floor
            self._level += (self._floor - self._level) * 0.05
        self._level = min(max(self._level, self._floor - 18), self._peak)
        return round(self._level)

    def close(self) -> None:
        logger.debug("MockSampleSource: closed")


class ScriptedSampleSource:
    """Replays a fixed sequence of readings.

    Items may be ints or exception instances; exceptions are raised in
    place of a reading. Once the script runs out every read fails.
    """

    def __init__(self, script: Iterable[int | BaseException]) -> None:
        self._script = list(script)
        self._index = 0
        self._lock = threading.Lock()
        self.reads = 0
        self.closed = False

    @property
    def exhausted(self) -> bool:
        with self._lock:
            return self._index >= len(self._script)

    def read_strength(self) -> int:
        with self._lock:
            self.reads += 1
            if self._index >= len(self._script):
                raise SampleReadError("script exhausted")
            item = self._script[self._index]
            self._index += 1
        if isinstance(item, BaseException):
            raise item
        return item

    def close(self) -> None:
        self.closed = True
