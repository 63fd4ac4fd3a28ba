from __future__ import annotations

from typing import List

from .errors import InvalidPortSpec

MIN_PORT = 1
MAX_PORT = 65535

# Scanned when no port spec is given.
DEFAULT_PORTS = (
    21, 22, 23, 25, 53, 80, 81, 88, 89, 110, 113, 119, 123, 135, 139, 143, 161, 179, 199,
    389, 427, 443, 445, 465, 513, 514, 515, 543, 544, 548, 554, 587, 631, 646, 873, 902,
    990, 993, 995, 1080, 1433, 1521, 1701, 1720, 1723, 1755, 1900, 2000, 2049, 2121, 2181,
    2375, 2376, 3128, 3306, 3389, 3500, 3541, 3689, 4000, 4040, 4063, 4333, 4369, 4443,
    4488, 4500, 4567, 4899, 5000, 5001, 5004, 5006, 5007, 5008, 5009, 5060, 5104, 5222,
    5223, 5269, 5351, 5353, 5432, 5555, 5601, 5632, 5800, 5801, 5900, 5901, 5938, 5984,
    5999, 6000, 6001, 6379, 6443, 6588, 6665, 6666, 6667, 6668, 6669, 7001, 7002, 7077,
    7443, 7574, 8000, 8001, 8008, 8010, 8080, 8081, 8082, 8086, 8088, 8090, 8091, 8181,
    8443, 8484, 8600, 8649, 8686, 8787, 8888, 9000, 9001, 9002, 9003, 9009, 9042, 9050,
    9071, 9080, 9090, 9091, 9200, 9300, 9418, 9443, 9600, 9800, 9871, 9999, 10000, 11211,
    12345, 15672, 16010, 16080, 16384, 27017, 27018, 50050,
)


def _to_port(token: str, part: str) -> int:
    # int() alone would accept "+80" and "8_0"
    if not token.isdigit():
        raise InvalidPortSpec(f"Invalid port '{token}' in '{part}'")
    try:
        port = int(token)
    except ValueError as exc:
        raise InvalidPortSpec(f"Invalid port '{token}' in '{part}'") from exc
    if port < MIN_PORT or port > MAX_PORT:
        raise InvalidPortSpec(f"Port out of range {MIN_PORT}-{MAX_PORT}: {port}")
    return port


def expand_ports(spec: str) -> List[int]:
    """
    Parses a port specification string into a list of ports.
    Supports:
    - Empty: the DEFAULT_PORTS list
    - Single ports: "80"
    - Ranges: "1-1024" (inclusive; start > end is an error)
    - Comma-separated: "22,80,443"
    - Mixed: "1-1024,8080,9000-9005"
    Order of first appearance is kept, repeats are dropped.
    """
    spec = (spec or "").strip()
    if not spec:
        return list(DEFAULT_PORTS)

    ports: List[int] = []
    for part in spec.split(","):
        part = part.strip()
        if not part:
            continue
        if "-" in part:
            start_s, end_s = part.split("-", 1)
            start = _to_port(start_s.strip(), part)
            end = _to_port(end_s.strip(), part)
            if start > end:
                raise InvalidPortSpec(f"Invalid port range: {part}")
            ports.extend(range(start, end + 1))
        else:
            ports.append(_to_port(part, part))

    if not ports:
        raise InvalidPortSpec(f"No ports in spec '{spec}'")

    # De-dupe, keep order
    return list(dict.fromkeys(ports))
