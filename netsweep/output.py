from __future__ import annotations

import csv
import io
import json
from typing import List

from .models import HostResult


def _selected(results: List[HostResult], show_all: bool) -> List[HostResult]:
    return [r for r in results if r.is_alive or show_all]


def format_row(r: HostResult) -> str:
    return f"    {r.host}: {r.sorted_ports()}"


def format_text(results: List[HostResult], elapsed_s: float, show_all: bool = False) -> str:
    alive = [r for r in results if r.is_alive]
    lines: List[str] = []
    if alive:
        lines.append(f"[+] Found open ports on {len(alive)} host(s):")
    else:
        lines.append("[-] No open ports found on any host.")

    for r in _selected(results, show_all):
        lines.append(format_row(r))

    lines.append(f"[+] Scan completed in {elapsed_s:.3f}s.")
    return "\n".join(lines)


def format_json(results: List[HostResult], elapsed_s: float, show_all: bool = False) -> str:
    payload = {
        "hosts_scanned": len(results),
        "hosts_alive": sum(1 for r in results if r.is_alive),
        "elapsed_s": round(elapsed_s, 4),
        "results": [
            {
                "host": r.host,
                "alive": r.is_alive,
                "open_ports": r.sorted_ports(),
            }
            for r in _selected(results, show_all)
        ],
    }
    return json.dumps(payload, indent=2)


def format_csv(results: List[HostResult], show_all: bool = False) -> str:
    buf = io.StringIO()
    w = csv.writer(buf, lineterminator="\n")
    w.writerow(["host", "port"])
    for r in _selected(results, show_all):
        if not r.is_alive:
            w.writerow([r.host, ""])
            continue
        for port in r.sorted_ports():
            w.writerow([r.host, port])
    return buf.getvalue()


def render(results: List[HostResult], fmt: str, elapsed_s: float, show_all: bool = False) -> str:
    if fmt == "text":
        return format_text(results, elapsed_s, show_all=show_all)
    if fmt == "json":
        return format_json(results, elapsed_s, show_all=show_all)
    if fmt == "csv":
        return format_csv(results, show_all=show_all)
    raise ValueError(f"Unsupported format: {fmt}")
