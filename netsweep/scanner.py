from __future__ import annotations

import enum
import logging
import time
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, FrozenSet, List, Optional, Sequence

from .errors import ScanError
from .models import HostResult, ScanConfig
from .ports import expand_ports
from .pool import WorkerPool
from .probe import ProbeLimiter, probe
from .targets import enumerate_hosts

logger = logging.getLogger(__name__)

ProbeFn = Callable[[str, int, float], bool]


class ScanState(enum.Enum):
    IDLE = "idle"
    ENUMERATING = "enumerating"
    DISPATCHING = "dispatching"
    AWAITING = "awaiting"
    AGGREGATED = "aggregated"
    DONE = "done"
    FAILED = "failed"


def scan_host(
    host: str,
    ports: Sequence[int],
    timeout_s: float,
    limiter: Optional[ProbeLimiter] = None,
    probe_fn: ProbeFn = probe,
) -> FrozenSet[int]:
    """
    Probes every port of one host concurrently and returns the open ones.

    Without a limiter each port gets its own thread, so a host takes about
    one timeout however many ports it has. With a limiter the fan-out is
    capped at its capacity and each probe holds one of its slots.
    """
    if not ports:
        return frozenset()

    def check(port: int) -> bool:
        if limiter is None:
            return probe_fn(host, port, timeout_s)
        with limiter:
            return probe_fn(host, port, timeout_s)

    fan_out = len(ports) if limiter is None else min(len(ports), limiter.capacity)
    with ThreadPoolExecutor(max_workers=fan_out, thread_name_prefix=f"probe-{host}") as pool:
        futures = {pool.submit(check, p): p for p in ports}
        done, _ = wait(futures)

    return frozenset(futures[f] for f in done if f.result())


class NetworkScanner:
    """
    Runs one scan: enumerate hosts and ports, scan hosts on a fixed pool of
    config.workers threads, return one HostResult per host in enumeration order.
    """

    def __init__(self, config: ScanConfig, probe_fn: ProbeFn = probe):
        config.validate()
        self.config = config
        self.probe_fn = probe_fn
        self.state = ScanState.IDLE
        self.hosts: List[str] = []
        self.ports: List[int] = []
        self.results: List[HostResult] = []
        self.elapsed_s = 0.0
        self._limiter = ProbeLimiter(config.max_inflight) if config.max_inflight else None

    def _scan_one(self, host: str) -> HostResult:
        open_ports = scan_host(
            host,
            self.ports,
            self.config.timeout_s,
            limiter=self._limiter,
            probe_fn=self.probe_fn,
        )
        result = HostResult(host=host, open_ports=open_ports)
        if self.config.verbose:
            if result.is_alive:
                logger.info("%s is alive", host)
                logger.info("%s has open ports: %s", host, result.sorted_ports())
            else:
                logger.info("%s is not alive", host)
        return result

    def run(self) -> List[HostResult]:
        if self.state is not ScanState.IDLE:
            raise RuntimeError(f"scanner already ran (state={self.state.value})")

        start = time.perf_counter()
        self.state = ScanState.ENUMERATING
        try:
            self.hosts = enumerate_hosts(self.config.network, max_hosts=self.config.max_hosts)
            self.ports = expand_ports(self.config.ports)
        except ScanError as exc:
            self.state = ScanState.FAILED
            self.elapsed_s = time.perf_counter() - start
            logger.error("Scan of %r aborted: %s", self.config.network, exc)
            raise

        logger.info(
            "Scanning %s: %d host(s) x %d port(s), %d worker(s)",
            self.config.network, len(self.hosts), len(self.ports), self.config.workers,
        )

        self.state = ScanState.DISPATCHING
        pool = WorkerPool(self._scan_one, self.config.workers, name="host")
        self.state = ScanState.AWAITING
        try:
            results = pool.run(self.hosts)
        except Exception:
            self.state = ScanState.FAILED
            raise
        self.results = results
        self.state = ScanState.AGGREGATED

        self.elapsed_s = time.perf_counter() - start
        alive = sum(1 for r in self.results if r.is_alive)
        logger.info("Scan finished in %.3fs, %d host(s) with open ports", self.elapsed_s, alive)
        self.state = ScanState.DONE
        return self.results


def scan_network(config: ScanConfig, probe_fn: ProbeFn = probe) -> List[HostResult]:
    """
    Scans config.network and returns one HostResult per host in enumeration order.

    With config.verbose the per-host liveness lines are logged at INFO on the
    "netsweep.scanner" logger. Nothing shows unless the caller has configured
    logging at that level (e.g. logging.basicConfig(level=logging.INFO)).
    """
    return NetworkScanner(config, probe_fn=probe_fn).run()
