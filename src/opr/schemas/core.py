from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

RunOutcome = Literal["success", "aborted", "timed_out"]
GateResult = Literal["ready", "timed_out"]


# ---------- Topology ----------
class Member(BaseModel):
    """One pod of the ordinal group. Readiness is observed, never stored here."""
    name: str
    ordinal: Optional[int] = None


# ---------- Audit ----------
class AuditEvent(BaseModel):
    subject: str
    event_type: str
    reason: str = ""
    message: str = ""
    timestamp: Optional[datetime] = None

    def as_line(self) -> str:
        ts = self.timestamp.isoformat() if self.timestamp else "<unknown>"
        return f"{ts}  {self.event_type:<8} {self.reason:<20} {self.message}"


# ---------- Reset ----------
class StepResult(BaseModel):
    member: str
    audited: bool = False
    audit_error: Optional[str] = None
    event_count: int = 0
    deleted: bool = False
    delete_error: Optional[str] = None


class ResetReport(BaseModel):
    steps: List[StepResult] = Field(default_factory=list)

    @property
    def failed_deletions(self) -> List[str]:
        return [s.member for s in self.steps if not s.deleted]
