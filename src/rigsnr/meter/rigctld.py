"""Minimal client for Hamlib's ``rigctld`` network daemon.

Lets the meter share a rig with logging or digital-mode software that
already holds the serial port. Only the ``l STRENGTH`` command is used.
"""

from __future__ import annotations

import logging
import socket
from typing import BinaryIO

from rigsnr.core.errors import RigOpenError, SampleReadError

logger = logging.getLogger(__name__)

STRENGTH_COMMAND = b"l STRENGTH\n"


def parse_strength_reply(line: bytes) -> int:
    """Decode one reply line to ``l STRENGTH``.

    rigctld answers with the level on success and ``RPRT <code>`` with a
    negative code on failure.
    """
    text = line.decode("ascii", errors="replace").strip()
    if not text:
        raise SampleReadError("rigctld closed the connection")
    if text.startswith("RPRT"):
        raise SampleReadError(f"rigctld error: {text}")
    try:
        return int(text)
    except ValueError as exc:
        raise SampleReadError(f"unexpected rigctld reply: {text!r}") from exc


class RigctldSampleSource:
    def __init__(self, host: str, port: int, *, timeout: float = 1.0) -> None:
        self.host = host
        self.port = port
        self._timeout = timeout
        self._sock: socket.socket | None = None
        self._reader: BinaryIO | None = None

    def open(self) -> None:
        try:
            self._connect()
        except OSError as exc:
            raise RigOpenError(f"cannot reach rigctld at {self.host}:{self.port}: {exc}") from exc
        logger.debug("connected to rigctld at %s:%d", self.host, self.port)

    def read_strength(self) -> int:
        try:
            if self._sock is None:
                self._connect()
                logger.debug("reconnected to rigctld")
            assert self._sock is not None and self._reader is not None
            self._sock.sendall(STRENGTH_COMMAND)
            line = self._reader.readline()
        except OSError as exc:
            self.close()
            raise SampleReadError(f"rigctld I/O error: {exc}") from exc
        try:
            return parse_strength_reply(line)
        except SampleReadError:
            if not line:
                self.close()
            raise

    def close(self) -> None:
        if self._reader is not None:
            self._reader.close()
            self._reader = None
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def _connect(self) -> None:
        sock = socket.create_connection((self.host, self.port), timeout=self._timeout)
        self._sock = sock
        self._reader = sock.makefile("rb")
