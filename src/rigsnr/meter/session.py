from __future__ import annotations

import logging
import threading
from typing import Callable

from rigsnr.core.cancel import RunFlag
from rigsnr.core.tracker import ExtremesTracker
from rigsnr.core.types import KeySource, LineRendererProtocol, SampleSource, SessionStatusDict

from .config import MeterConfig
from .listener import InputListener
from .polling import PollingLoop

logger = logging.getLogger(__name__)

JOIN_SLICE = 0.2


class MeterSession:
    """Owns the tracker and run flag and runs the two meter threads.

    The polling loop and the input listener each get a thread. Both are
    handed the same tracker and run flag; nothing else is shared. If
    either thread dies with an exception the run flag is cleared so the
    other one stops too, and :meth:`join` re-raises the first error.
    """

    def __init__(
        self,
        config: MeterConfig,
        source: SampleSource,
        renderer: LineRendererProtocol,
        keys: KeySource,
        *,
        tracker: ExtremesTracker | None = None,
        run_flag: RunFlag | None = None,
    ) -> None:
        self.config = config
        self.tracker = tracker or ExtremesTracker(ceiling=config.ceiling, offset=config.offset)
        self.run_flag = run_flag or RunFlag()
        self.poller = PollingLoop(
            source, self.tracker, renderer, self.run_flag, interval=config.interval
        )
        self.listener = InputListener(
            keys, self.tracker, renderer, self.run_flag, interval=config.interval
        )
        self._threads: list[threading.Thread] = []
        self._errors: list[BaseException] = []
        self._errors_lock = threading.Lock()

    def start(self) -> None:
        if self._threads:
            return
        workers: tuple[tuple[str, Callable[[], None]], ...] = (
            ("rigsnr-poll", self.poller.run),
            ("rigsnr-keys", self.listener.run),
        )
        for name, target in workers:
            thread = threading.Thread(target=self._guard, args=(target,), name=name, daemon=True)
            self._threads.append(thread)
        for thread in self._threads:
            thread.start()
        logger.debug("meter threads started")

    def _guard(self, target: Callable[[], None]) -> None:
        try:
            target()
        except Exception as exc:
            name = threading.current_thread().name
            logger.exception("%s failed", name)
            with self._errors_lock:
                self._errors.append(exc)
            self.run_flag.clear(f"{name} failed")

    def stop(self, reason: str = "stopped") -> bool:
        return self.run_flag.clear(reason)

    def join(self) -> None:
        """Wait for both threads to finish, re-raising the first worker error."""
        for thread in self._threads:
            # short slices keep the main thread responsive to KeyboardInterrupt
            while thread.is_alive():
                thread.join(JOIN_SLICE)
        logger.debug("meter threads joined (reason: %s)", self.run_flag.reason)
        with self._errors_lock:
            if self._errors:
                raise self._errors[0]

    def run(self) -> None:
        """Start both threads and return once both have exited.

        Interrupts only request a stop. The threads are always joined before
        this returns, so callers may close the sample source afterwards.
        """
        self.start()
        while True:
            try:
                self.join()
                return
            except KeyboardInterrupt:
                if self.stop("interrupted"):
                    logger.debug("interrupted, waiting for meter threads")

    def status(self) -> SessionStatusDict:
        metrics = self.tracker.snapshot()
        return {
            "running": self.run_flag.running,
            "backend": self.config.backend,
            "polling_alive": len(self._threads) > 0 and self._threads[0].is_alive(),
            "listener_alive": len(self._threads) > 1 and self._threads[1].is_alive(),
            "samples": self.poller.samples,
            "snr": metrics.snr,
            "dnr": metrics.dnr,
        }
