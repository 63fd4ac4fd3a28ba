from __future__ import annotations

import logging
import socket
import threading

logger = logging.getLogger(__name__)


def probe(host: str, port: int, timeout_s: float) -> bool:
    """
    One TCP connect attempt. True if the handshake completes within
    timeout_s; refused, timed out, unreachable and bad addresses are all False.
    """
    try:
        with socket.create_connection((host, port), timeout=timeout_s):
            return True
    except (socket.timeout, OSError, OverflowError, ValueError) as exc:
        logger.debug("%s:%d closed (%s)", host, port, exc)
        return False


class ProbeLimiter:
    """
    Counting semaphore shared by every host scan, bounding the number of
    probes in flight at once.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1 (got {capacity})")
        self.capacity = capacity
        self._sem = threading.BoundedSemaphore(capacity)

    def __enter__(self) -> "ProbeLimiter":
        self._sem.acquire()
        return self

    def __exit__(self, *exc_info) -> None:
        self._sem.release()
