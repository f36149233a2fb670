from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

from ..errors import ClusterError
from ..schemas import AuditEvent


@dataclass
class MockCluster:
    """
    In-memory cluster backend.

    Used by the test-suite and by `--cluster-mode mock` rehearsals.

    Engineering notes:
    - groups map a label selector to pod names, returned in insertion order
      (the orchestrator must sort them itself)
    - deleted pods stay listed: a StatefulSet controller recreates them
    - every call is appended to `calls` so ordering can be asserted
    """
    groups: Dict[str, List[str]] = field(default_factory=dict)
    events: Dict[str, List[AuditEvent]] = field(default_factory=dict)
    ready: bool = True
    fail_events: Set[str] = field(default_factory=set)
    fail_delete: Set[str] = field(default_factory=set)
    calls: List[Tuple[str, str]] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)

    def list_members(self, selector: str) -> List[str]:
        self.calls.append(("list_members", selector))
        return list(self.groups.get(selector, []))

    def list_events(self, member_name: str, exclude_type: str = "Normal") -> List[AuditEvent]:
        self.calls.append(("list_events", member_name))
        if member_name in self.fail_events:
            raise ClusterError(f"events for {member_name} unavailable")
        return [e for e in self.events.get(member_name, []) if e.event_type != exclude_type]

    def describe(self, member_name: str) -> str:
        self.calls.append(("describe", member_name))
        return f"NAME: {member_name}\nSTATUS: Running\n"

    def delete(self, member_name: str) -> None:
        self.calls.append(("delete", member_name))
        if member_name in self.fail_delete:
            raise ClusterError(f'pods "{member_name}" is forbidden', returncode=1)
        self.deleted.append(member_name)

    def wait_until_ready(self, selector: str, timeout: float) -> bool:
        self.calls.append(("wait", selector))
        return self.ready
