"""Shared fixtures: a mock cluster, a frozen clock and a session factory."""

from datetime import datetime
from pathlib import Path
from typing import Any, Callable, List

import pytest

from opr.cluster import MockCluster
from opr.config import OPRConfig
from opr.schemas import AuditEvent
from opr.session import RunSession

MEMBER_SELECTOR = "app.kubernetes.io/name=redis"
DEPENDENT_SELECTOR = "feature=core"
STARTED_AT = datetime(2026, 10, 18, 10, 15, 0)


def warning(subject: str, reason: str, ts: str, event_type: str = "Warning") -> AuditEvent:
    return AuditEvent(subject=subject, event_type=event_type, reason=reason, message=f"{reason} on {subject}", timestamp=ts)


@pytest.fixture
def cluster() -> MockCluster:
    return MockCluster(groups={
        MEMBER_SELECTOR: ["redis-node-0"],
        DEPENDENT_SELECTOR: ["core-api-7f9c", "core-worker-2b1d"],
    })


@pytest.fixture
def console() -> List[str]:
    return []


@pytest.fixture
def make_session(tmp_path: Path, cluster: MockCluster, console: List[str]) -> Callable[..., RunSession]:
    """Build a RunSession whose sleeps are recorded into cluster.calls."""

    def _make(**overrides: Any) -> RunSession:
        fields = {
            "runs_dir": str(tmp_path / "runs"),
            "member_selector": MEMBER_SELECTOR,
            "dependent_selector": DEPENDENT_SELECTOR,
            "group_name": "redis",
            "supported_sizes": [1, 3],
            "pacing_seconds": 5,
            "ready_timeout_seconds": 300,
            "handoff_delay_seconds": 5,
            "monitor_command": ["avidctl", "pod", "watch-not-running"],
            "launch_monitor": True,
            "dry_run": False,
            "capture_describe": False,
        }
        fields.update(overrides)
        cfg = OPRConfig(**fields)
        return RunSession.open(
            cfg,
            clock=lambda: STARTED_AT,
            sleep=lambda s: cluster.calls.append(("sleep", f"{s:g}")),
            echo=console.append,
        )

    return _make
