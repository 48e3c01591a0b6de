from __future__ import annotations

import queue
from typing import Iterable


class ScriptedKeySource:
    """Queue-backed key feed standing in for a terminal."""

    def __init__(self, keys: Iterable[str] = ()) -> None:
        self._queue: queue.Queue[str] = queue.Queue()
        for key in keys:
            self._queue.put_nowait(key)

    def press(self, key: str) -> None:
        self._queue.put_nowait(key)

    def read_key(self, timeout: float) -> str | None:
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None
