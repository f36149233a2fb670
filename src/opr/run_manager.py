from __future__ import annotations

import json
import re
from datetime import datetime
from pathlib import Path
from typing import Any

from .config import OPRConfig
from .schemas import RunStatus, StageStatus


def _slugify(text: str, max_len: int = 32) -> str:
    text = text.strip().lower()
    text = re.sub(r"[^a-z0-9\-_ ]+", "", text)
    text = re.sub(r"\s+", "-", text)
    return text[:max_len] if len(text) > max_len else text


def run_stamp(started_at: datetime) -> str:
    return started_at.strftime("%Y%m%d_%H%M%S")


def new_run_dir(cfg: OPRConfig, started_at: datetime) -> Path:
    """
    Create a new run directory with a stable naming convention.

    Convention:
    YYYYmmdd_HHMMSS_<group>
    """
    run_id = f"{run_stamp(started_at)}_{_slugify(cfg.group_name)}"
    run_dir = Path(cfg.runs_dir) / run_id
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def session_log_name(cfg: OPRConfig, started_at: datetime) -> str:
    return f"reset_{_slugify(cfg.group_name)}_{run_stamp(started_at)}.log"


def write_json(path: Path, obj: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2, default=str)


def init_status(run_dir: Path) -> RunStatus:
    status = RunStatus(run_id=run_dir.name, stages=StageStatus())
    write_json(run_dir / "status.json", status.model_dump(mode="json"))
    return status


def update_status(run_dir: Path, status: RunStatus) -> None:
    write_json(run_dir / "status.json", status.model_dump(mode="json"))
