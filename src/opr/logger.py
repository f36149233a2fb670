from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import typer

Clock = Callable[[], datetime]
Echo = Callable[[str], None]


@dataclass
class EventLogger:
    """
    Structured event logger (JSON Lines).

    Logging discipline:
    - fixed fields (ts, stage, event)
    - meta dict reserved for structured diagnostics
    - one event per line (append-only)
    """
    log_path: Path
    clock: Clock = datetime.now

    def log(self, stage: str, event: str, meta: Optional[Dict[str, Any]] = None) -> None:
        record = {
            "ts": self.clock().strftime("%Y-%m-%dT%H:%M:%S"),
            "stage": stage,
            "event": event,
            "meta": meta or {},
        }
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        with self.log_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")


@dataclass
class SessionLog:
    """
    Human-readable, append-only run log.

    `write` tees every line to the console; `append` writes to the file only
    (bulk audit output the operator does not need to watch scroll by).
    """
    log_path: Path
    echo: Echo = field(default=typer.echo)

    def _append_lines(self, text: str) -> None:
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        with self.log_path.open("a", encoding="utf-8") as f:
            f.write(text.rstrip("\n") + "\n")

    def write(self, line: str) -> None:
        self._append_lines(line)
        self.echo(line)

    def append(self, text: str) -> None:
        self._append_lines(text)

    def read(self) -> str:
        if not self.log_path.exists():
            return ""
        return self.log_path.read_text(encoding="utf-8")
