from __future__ import annotations


class ScanError(ValueError):
    """Base class for input errors that stop a scan before any probing."""


class InvalidNetworkSpec(ScanError):
    pass


class EmptyNetwork(ScanError):
    pass


class InvalidPortSpec(ScanError):
    pass
