from __future__ import annotations

import argparse
import logging
import os

from .errors import ScanError
from .models import DEFAULT_MAX_HOSTS, DEFAULT_TIMEOUT_S, DEFAULT_WORKERS, ScanConfig
from .output import render
from .scanner import NetworkScanner

logger = logging.getLogger("netsweep")


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not an integer)", name, raw)
        return default


def build_parser() -> argparse.ArgumentParser:
    timeout_ms = _env_int("NETSWEEP_TIMEOUT_MS", int(DEFAULT_TIMEOUT_S * 1000))
    workers = _env_int("NETSWEEP_WORKERS", DEFAULT_WORKERS)

    p = argparse.ArgumentParser(prog="netsweep", description="TCP connect host and port sweeper")
    p.add_argument("-n", "--network", required=True,
                   help='Network to scan (e.g. "192.168.0.1" or "192.168.0.0/24")')
    p.add_argument("-p", "--ports", default="",
                   help='Ports to scan (e.g. "80", "1-1024" or "22,80,8000-8100"; default: common ports)')
    p.add_argument("-t", "--timeout", type=int, default=timeout_ms,
                   help=f"TCP connection timeout in milliseconds (default: {timeout_ms})")
    p.add_argument("-w", "--workers", type=int, default=workers,
                   help=f"Hosts scanned concurrently (default: {workers})")
    p.add_argument("-m", "--max-inflight", type=int, default=None,
                   help="Cap on probes in flight across all hosts (default: one per port)")
    p.add_argument("--max-hosts", type=int, default=DEFAULT_MAX_HOSTS,
                   help="Refuse networks with more addresses than this; every address is listed "
                        f"up front, so large IPv6 blocks need a cap (default: {DEFAULT_MAX_HOSTS})")
    p.add_argument("-v", "--verbose", action="store_true", help="Report per-host liveness")
    p.add_argument("--format", choices=["text", "json", "csv"], default="text", help="Output format")
    p.add_argument("--all", action="store_true", help="Also list hosts with no open ports")
    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    config = ScanConfig(
        network=args.network,
        ports=args.ports,
        timeout_s=args.timeout / 1000.0,
        workers=args.workers,
        verbose=args.verbose,
        max_inflight=args.max_inflight,
        max_hosts=args.max_hosts,
    )

    try:
        scanner = NetworkScanner(config)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    if args.format == "text":
        print(f"[*] Scanning network {config.network} ({config.ports or 'common ports'})...")

    try:
        results = scanner.run()
    except ScanError:
        # already logged by the scanner
        return 2

    print(render(results, args.format, scanner.elapsed_s, show_all=args.all))
    return 0
