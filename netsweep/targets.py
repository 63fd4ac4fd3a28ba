from __future__ import annotations

import ipaddress
from typing import List, Optional, Union

from .errors import EmptyNetwork, InvalidNetworkSpec

Network = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]


def parse_network(network: str) -> Network:
    """
    Supports:
      - Single IP: "172.20.0.10" (IPv4 /32 or IPv6 /128)
      - CIDR: "172.20.0.0/24", host bits are masked off
    Hostnames are rejected.
    """
    spec = (network or "").strip()
    if not spec:
        raise InvalidNetworkSpec("Empty network spec")

    try:
        return ipaddress.ip_network(spec, strict=False)
    except ValueError as exc:
        raise InvalidNetworkSpec(f"Invalid network spec '{spec}': {exc}") from exc


def enumerate_hosts(network: str, max_hosts: Optional[int] = None) -> List[str]:
    """
    Every address of the block in increasing order, network and
    broadcast addresses included.
    """
    net = parse_network(network)

    if max_hosts is not None and net.num_addresses > max_hosts:
        raise InvalidNetworkSpec(
            f"Network {net} too large: {net.num_addresses} addresses (max {max_hosts})"
        )

    # network_address .. broadcast_address, one increment at a time
    hosts = [str(ip) for ip in net]

    if not hosts:
        raise EmptyNetwork(f"No IP addresses found in network {net}")
    return hosts
