from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field
from typing import List, Protocol, Sequence

logger = logging.getLogger(__name__)


class InteractiveMonitor(Protocol):
    def run(self, command: Sequence[str]) -> int: ...


class SubprocessMonitor:
    """Runs the monitor in the foreground, attached to this terminal."""

    def run(self, command: Sequence[str]) -> int:
        try:
            return subprocess.call(list(command))
        except KeyboardInterrupt:
            # Ctrl+C is how the operator leaves the monitor
            return 0
        except OSError as e:
            logger.error("could not launch monitor %s: %s", command[0] if command else "", e)
            return 127


@dataclass
class RecordingMonitor:
    """Stand-in monitor that remembers what it was asked to run."""
    launched: List[List[str]] = field(default_factory=list)
    returncode: int = 0

    def run(self, command: Sequence[str]) -> int:
        self.launched.append(list(command))
        return self.returncode
