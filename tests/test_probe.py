from __future__ import annotations

import threading
import time

import pytest

from netsweep.probe import ProbeLimiter, probe


def test_probe_open_port(listener: int) -> None:
    assert probe("127.0.0.1", listener, 1.0) is True


def test_probe_closed_port(closed_port: int) -> None:
    assert probe("127.0.0.1", closed_port, 1.0) is False


@pytest.mark.parametrize("host, port", [("not a host!", 80), ("127.0.0.1", 0), ("127.0.0.1", 70000)])
def test_probe_never_raises(host: str, port: int) -> None:
    assert probe(host, port, 0.2) is False


def test_limiter_rejects_zero() -> None:
    with pytest.raises(ValueError):
        ProbeLimiter(0)


def test_limiter_bounds_concurrency() -> None:
    limiter = ProbeLimiter(2)
    lock = threading.Lock()
    active = 0
    peak = 0

    def task() -> None:
        nonlocal active, peak
        with limiter:
            with lock:
                active += 1
                peak = max(peak, active)
            time.sleep(0.05)
            with lock:
                active -= 1

    threads = [threading.Thread(target=task) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert peak == 2
