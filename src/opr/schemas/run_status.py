from __future__ import annotations
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field

from .core import RunOutcome


StageState = Literal["pending", "ok", "skipped", "fail"]


class StageStatus(BaseModel):
    topology: StageState = "pending"
    reset: StageState = "pending"
    readiness: StageState = "pending"
    dependent: StageState = "pending"


class RunStatus(BaseModel):
    run_id: str
    stages: StageStatus = Field(default_factory=StageStatus)
    outcome: Optional[RunOutcome] = None
    members: List[str] = Field(default_factory=list)
    failed_deletions: List[str] = Field(default_factory=list)
    error: Optional[Dict[str, str]] = None
