from __future__ import annotations

from typing import Optional, Sequence


class OPRError(Exception):
    """Base class for reset run failures."""


class EmptyGroup(OPRError):
    def __init__(self, selector: str):
        super().__init__(f"no pods match selector {selector!r}")
        self.selector = selector


class UnsupportedTopology(OPRError):
    def __init__(self, count: int, supported: Sequence[int]):
        expected = " or ".join(str(s) for s in supported)
        super().__init__(f"unexpected pod count ({count}), expected {expected}")
        self.count = count
        self.supported = tuple(supported)


class ReadinessTimeout(OPRError):
    def __init__(self, selector: str, timeout: float):
        super().__init__(f"pods matching {selector!r} not Ready within {timeout}s")
        self.selector = selector
        self.timeout = timeout


class ClusterError(OPRError):
    """A cluster API call failed (non-zero kubectl exit, timeout, bad payload)."""

    def __init__(self, message: str, command: str = "", returncode: Optional[int] = None):
        super().__init__(message)
        self.command = command
        self.returncode = returncode


class PrivilegeDeclined(OPRError):
    """Operator declined to continue without elevated privileges."""
