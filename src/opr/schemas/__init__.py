from __future__ import annotations

from .core import (
    Member,
    AuditEvent,
    StepResult,
    ResetReport,
    RunOutcome,
    GateResult,
)
from .run_status import StageState, StageStatus, RunStatus


__all__ = [
    "Member",
    "AuditEvent",
    "StepResult",
    "ResetReport",
    "RunOutcome",
    "GateResult",
    "StageState",
    "StageStatus",
    "RunStatus",
]
