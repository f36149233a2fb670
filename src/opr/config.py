from __future__ import annotations

import os
from typing import List

from pydantic import BaseModel, Field


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [x.strip() for x in raw.split(",") if x.strip()]


class OPRConfig(BaseModel):
    """
    Global configuration for a reset run.

    Notes:
    - Keep config serializable (JSON); it is written into every run directory.
    - CLI options override fields through model_copy(update=...).
    """
    runs_dir: str = Field(default_factory=lambda: os.getenv("OPR_RUNS_DIR", "runs"))

    # target groups
    namespace: str = Field(default_factory=lambda: os.getenv("OPR_NAMESPACE", "default"))
    group_name: str = Field(default_factory=lambda: os.getenv("OPR_GROUP_NAME", "redis"))
    member_selector: str = Field(
        default_factory=lambda: os.getenv("OPR_MEMBER_SELECTOR", "app.kubernetes.io/name=redis")
    )
    dependent_selector: str = Field(default_factory=lambda: os.getenv("OPR_DEPENDENT_SELECTOR", "feature=core"))
    supported_sizes: List[int] = Field(
        default_factory=lambda: [int(x) for x in _env_list("OPR_SUPPORTED_SIZES", "1,3")]
    )

    # pacing / bounds (seconds)
    pacing_seconds: float = Field(default_factory=lambda: float(os.getenv("OPR_PACING_SECONDS", "5")))
    ready_timeout_seconds: int = Field(default_factory=lambda: int(os.getenv("OPR_READY_TIMEOUT_SECONDS", "300")))
    handoff_delay_seconds: float = Field(default_factory=lambda: float(os.getenv("OPR_HANDOFF_DELAY_SECONDS", "5")))

    # monitor handoff
    monitor_command: List[str] = Field(
        default_factory=lambda: os.getenv("OPR_MONITOR_COMMAND", "avidctl pod watch-not-running").split()
    )
    launch_monitor: bool = Field(default_factory=lambda: os.getenv("OPR_LAUNCH_MONITOR", "1") != "0")

    # cluster backend
    cluster_mode: str = Field(default_factory=lambda: os.getenv("OPR_CLUSTER_MODE", "kubectl"))
    kubectl_bin: str = Field(default_factory=lambda: os.getenv("OPR_KUBECTL_BIN", "kubectl"))
    kubectl_timeout_seconds: int = Field(default_factory=lambda: int(os.getenv("OPR_KUBECTL_TIMEOUT_SECONDS", "60")))
    # kubectl delete blocks until the pod is gone; must cover the termination grace period
    kubectl_delete_timeout_seconds: int = Field(
        default_factory=lambda: int(os.getenv("OPR_KUBECTL_DELETE_TIMEOUT_SECONDS", "180"))
    )
    mock_members: List[str] = Field(
        default_factory=lambda: _env_list("OPR_MOCK_MEMBERS", "redis-node-0,redis-node-1,redis-node-2")
    )

    dry_run: bool = False  # replace deletions with a describe of the pod
    capture_describe: bool = False  # append describe output to each audit section
