"""
Cluster capability interfaces.

The orchestrator only ever talks to the cluster through these protocols, so a
mock cluster can stand in for kubectl without touching stage logic.
"""
from __future__ import annotations

from typing import List, Protocol

from ..schemas import AuditEvent


class ClusterQuery(Protocol):
    def list_members(self, selector: str) -> List[str]: ...

    def list_events(self, member_name: str, exclude_type: str = "Normal") -> List[AuditEvent]: ...

    def describe(self, member_name: str) -> str: ...


class ClusterMutation(Protocol):
    def delete(self, member_name: str) -> None:
        """Delete one pod. Raises ClusterError on failure."""
        ...


class Readiness(Protocol):
    def wait_until_ready(self, selector: str, timeout: float) -> bool:
        """Block until every pod matching `selector` is Ready; False on timeout."""
        ...


class ClusterClient(ClusterQuery, ClusterMutation, Readiness, Protocol):
    """Convenience union: a backend that provides every capability."""
