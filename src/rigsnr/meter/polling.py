from __future__ import annotations

import logging

from rigsnr.core.cancel import RunFlag
from rigsnr.core.errors import SampleReadError
from rigsnr.core.tracker import ExtremesTracker
from rigsnr.core.types import LineRendererProtocol, SampleSource

logger = logging.getLogger(__name__)


class PollingLoop:
    """Pulls strength samples, folds them into the tracker and renders.

    A failed read is retried after *interval* seconds forever; it never
    touches the tracker or the renderer. The loop exits only when the run
    flag is cleared, which it checks at the top of every iteration.
    """

    def __init__(
        self,
        source: SampleSource,
        tracker: ExtremesTracker,
        renderer: LineRendererProtocol,
        run_flag: RunFlag,
        *,
        interval: float,
    ) -> None:
        self._source = source
        self._tracker = tracker
        self._renderer = renderer
        self._run_flag = run_flag
        self._interval = interval
        self.samples = 0
        self.failures = 0
        self._failure_streak = 0

    def run(self) -> None:
        logger.debug("polling every %.0f ms", self._interval * 1000)
        while self._run_flag.running:
            self.poll_once()
            self._run_flag.wait(self._interval)
        logger.debug("polling stopped after %d samples, %d failed reads", self.samples, self.failures)

    def poll_once(self) -> bool:
        """Run one iteration without the trailing wait. Returns True on a sample."""
        try:
            raw = self._source.read_strength()
        except SampleReadError as exc:
            self.failures += 1
            if self._failure_streak == 0:
                logger.debug("strength read failed, retrying: %s", exc)
            self._failure_streak += 1
            return False

        if self._failure_streak:
            logger.debug("strength reads recovered after %d failures", self._failure_streak)
            self._failure_streak = 0

        metrics = self._tracker.observe(raw)
        self._renderer.render(metrics)
        self.samples += 1
        return True
