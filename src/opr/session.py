from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

import typer

from .config import OPRConfig
from .logger import Clock, Echo, EventLogger, SessionLog
from .run_manager import new_run_dir, session_log_name, write_json
from .schemas import Member, RunOutcome

Sleeper = Callable[[float], None]


@dataclass
class RunSession:
    """
    One execution of the orchestrator.

    Ambient state (wall clock, sleeping, console) is injected so that a run
    can be replayed deterministically in tests. The session log is the only
    artifact an operator is expected to read.
    """
    cfg: OPRConfig
    run_dir: Path
    started_at: datetime
    log: SessionLog
    events: EventLogger
    clock: Clock = datetime.now
    sleep: Sleeper = time.sleep
    members: List[Member] = field(default_factory=list)
    outcome: Optional[RunOutcome] = None

    @classmethod
    def open(
        cls,
        cfg: OPRConfig,
        clock: Clock = datetime.now,
        sleep: Sleeper = time.sleep,
        echo: Echo = typer.echo,
    ) -> "RunSession":
        started_at = clock()
        run_dir = new_run_dir(cfg, started_at)
        log = SessionLog(log_path=run_dir / session_log_name(cfg, started_at), echo=echo)
        events = EventLogger(log_path=run_dir / "events.jsonl", clock=clock)

        echo(f"Logging to {log.log_path}")
        log.append(f"Reset run at {started_at.strftime('%a %b %d %H:%M:%S %Y')}")
        write_json(run_dir / "config.json", cfg.model_dump())
        events.log("pipeline", "start", {"run_id": run_dir.name, "dry_run": cfg.dry_run})

        return cls(
            cfg=cfg,
            run_dir=run_dir,
            started_at=started_at,
            log=log,
            events=events,
            clock=clock,
            sleep=sleep,
        )

    @property
    def log_path(self) -> Path:
        return self.log.log_path

    @property
    def run_id(self) -> str:
        return self.run_dir.name
