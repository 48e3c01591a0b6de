from __future__ import annotations

import threading
import time

from rigsnr.core.cancel import RunFlag


def test_run_flag_starts_running() -> None:
    flag = RunFlag()
    assert flag.running is True
    assert flag.reason is None


def test_clear_only_succeeds_once() -> None:
    flag = RunFlag()
    assert flag.clear("cancel key") is True
    assert flag.clear("second press") is False
    assert flag.running is False
    assert flag.reason == "cancel key"


def test_wait_returns_true_while_running() -> None:
    flag = RunFlag()
    assert flag.wait(0.01) is True


def test_wait_wakes_early_when_cleared() -> None:
    flag = RunFlag()
    threading.Timer(0.05, flag.clear).start()
    started = time.monotonic()
    assert flag.wait(5.0) is False
    assert time.monotonic() - started < 2.0


def test_concurrent_clear_has_single_winner() -> None:
    flag = RunFlag()
    results: list[bool] = []
    lock = threading.Lock()
    barrier = threading.Barrier(8)

    def worker() -> None:
        barrier.wait()
        won = flag.clear()
        with lock:
            results.append(won)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count(True) == 1
