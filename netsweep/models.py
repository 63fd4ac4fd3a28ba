from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, List, Optional

DEFAULT_TIMEOUT_S = 0.5
DEFAULT_WORKERS = 100
# CLI cap on network size, a /16
DEFAULT_MAX_HOSTS = 65536


@dataclass(frozen=True)
class ScanConfig:
    network: str
    ports: str = ""
    timeout_s: float = DEFAULT_TIMEOUT_S
    workers: int = DEFAULT_WORKERS
    verbose: bool = False
    # Upper bound on probes in flight across all hosts; None keeps one probe per port.
    max_inflight: Optional[int] = None
    max_hosts: Optional[int] = None

    def validate(self) -> None:
        if self.timeout_s <= 0:
            raise ValueError(f"timeout must be > 0 (got {self.timeout_s})")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1 (got {self.workers})")
        if self.max_inflight is not None and self.max_inflight < 1:
            raise ValueError(f"max_inflight must be >= 1 (got {self.max_inflight})")
        if self.max_hosts is not None and self.max_hosts < 1:
            raise ValueError(f"max_hosts must be >= 1 (got {self.max_hosts})")


@dataclass(frozen=True)
class HostResult:
    host: str
    open_ports: FrozenSet[int] = frozenset()

    @property
    def is_alive(self) -> bool:
        return bool(self.open_ports)

    def sorted_ports(self) -> List[int]:
        return sorted(self.open_ports)
