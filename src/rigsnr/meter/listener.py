from __future__ import annotations

import logging

from rigsnr.core.cancel import RunFlag
from rigsnr.core.tracker import ExtremesTracker
from rigsnr.core.types import KeySource, LineRendererProtocol

logger = logging.getLogger(__name__)

CONFIRM_KEYS = frozenset({"\r", "\n"})
CANCEL_KEYS = frozenset({"\x03"})


class InputListener:
    """Turns keypresses into tracker resets and shutdown requests.

    Enter keeps the current readout on screen and starts a new measurement
    window. Ctrl+C clears the run flag. Everything else is ignored.
    """

    def __init__(
        self,
        keys: KeySource,
        tracker: ExtremesTracker,
        renderer: LineRendererProtocol,
        run_flag: RunFlag,
        *,
        interval: float,
    ) -> None:
        self._keys = keys
        self._tracker = tracker
        self._renderer = renderer
        self._run_flag = run_flag
        self._interval = interval
        self.resets = 0

    def run(self) -> None:
        while self._run_flag.running:
            key = self._keys.read_key(self._interval)
            if key is None:
                continue
            self.handle_key(key)
            self._run_flag.wait(self._interval)

    def handle_key(self, key: str) -> None:
        if key in CONFIRM_KEYS:
            self._renderer.newline()
            self._tracker.reset()
            self.resets += 1
            logger.debug("extremes reset (%d so far)", self.resets)
        elif key in CANCEL_KEYS:
            if self._run_flag.clear("cancel key"):
                self._renderer.newline()
                logger.debug("shutdown requested from keyboard")
