"""Character-at-a-time keyboard input from the controlling terminal."""

from __future__ import annotations

import logging
import os
import select
import sys
import time
from typing import Any

logger = logging.getLogger(__name__)


def decode_key(chunk: bytes) -> str | None:
    """Map one byte read from the terminal to a key, or None on EOF."""
    if not chunk:
        return None
    return chunk.decode("latin-1")


class TerminalKeySource:
    """Reads single keys from stdin without waiting for a full line.

    Use as a context manager. On a tty the terminal is switched to
    non-canonical mode with echo and signal generation disabled, so Ctrl+C
    arrives as the byte 0x03 instead of raising ``KeyboardInterrupt``. The
    saved attributes are restored on exit. Pipes and files are read as-is.
    """

    def __init__(self, fd: int | None = None) -> None:
        self._fd = fd
        self._saved_attrs: list[Any] | None = None
        self._eof = False

    @property
    def fd(self) -> int:
        if self._fd is None:
            self._fd = sys.stdin.fileno()
        return self._fd

    @property
    def is_tty(self) -> bool:
        return os.isatty(self.fd)

    def __enter__(self) -> "TerminalKeySource":
        if self.is_tty:
            import termios

            self._saved_attrs = termios.tcgetattr(self.fd)
            attrs = termios.tcgetattr(self.fd)
            attrs[3] &= ~(termios.ICANON | termios.ECHO | termios.ISIG)
            attrs[6][termios.VMIN] = 1
            attrs[6][termios.VTIME] = 0
            termios.tcsetattr(self.fd, termios.TCSANOW, attrs)
            logger.debug("terminal switched to key mode on fd %d", self.fd)
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._saved_attrs is not None:
            import termios

            termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None
            logger.debug("terminal attributes restored")

    def read_key(self, timeout: float) -> str | None:
        if self._eof:
            time.sleep(timeout)
            return None
        readable, _, _ = select.select([self.fd], [], [], timeout)
        if not readable:
            return None
        key = decode_key(os.read(self.fd, 1))
        if key is None:
            logger.debug("stdin reached EOF; keyboard control disabled")
            self._eof = True
        return key
