"""Single-line in-place readout.

The renderer rewrites one terminal line for every update instead of
scrolling. How the previous text is erased is a strategy: the default
backs up over it with backspaces, ``carriage_return_erase`` uses ``\\r``
plus the ANSI clear-to-end-of-line sequence.
"""

from __future__ import annotations

import sys
import threading
from typing import Callable, TextIO

from rigsnr.core.metrics import DerivedMetrics, format_metrics

EraseStrategy = Callable[[int], str]


def backspace_erase(previous_width: int) -> str:
    return "\b" * previous_width


def carriage_return_erase(previous_width: int) -> str:
    if previous_width == 0:
        return ""
    return "\r\x1b[K"


ERASE_STRATEGIES: dict[str, EraseStrategy] = {
    "backspace": backspace_erase,
    "carriage": carriage_return_erase,
}


class LineRenderer:
    """Writes ``SNR: ... DNR: ...`` over the previous readout.

    Both meter threads write through the same instance (the poller renders,
    the input listener emits newlines), so writes are serialised.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        erase: EraseStrategy = backspace_erase,
        width: int = 8,
        precision: int = 2,
    ) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._erase = erase
        self._width = width
        self._precision = precision
        self._lock = threading.Lock()
        self._current_width = 0
        self._last_line: str | None = None

    @property
    def last_line(self) -> str | None:
        return self._last_line

    def format(self, metrics: DerivedMetrics) -> str:
        return format_metrics(metrics, width=self._width, precision=self._precision)

    def render(self, metrics: DerivedMetrics) -> None:
        line = self.format(metrics)
        with self._lock:
            # pad so a shorter line fully covers the previous one
            padded = line.ljust(self._current_width)
            self._stream.write(self._erase(self._current_width) + padded)
            self._stream.flush()
            self._current_width = len(padded)
            self._last_line = line

    def newline(self) -> None:
        """Leave the current readout in scrollback and start a fresh line."""
        with self._lock:
            self._stream.write("\n")
            self._stream.flush()
            self._current_width = 0
