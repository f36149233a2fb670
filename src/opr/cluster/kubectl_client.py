from __future__ import annotations

import json
import logging
import shlex
import subprocess
from typing import Any, Dict, List, Optional, Sequence

from ..errors import ClusterError
from ..schemas import AuditEvent

logger = logging.getLogger(__name__)


def _event_timestamp(item: Dict[str, Any]) -> Optional[str]:
    # lastTimestamp is empty for events emitted through the events.k8s.io API
    return (
        item.get("lastTimestamp")
        or item.get("eventTime")
        or (item.get("metadata") or {}).get("creationTimestamp")
    )


def parse_events(payload: Dict[str, Any]) -> List[AuditEvent]:
    events: List[AuditEvent] = []
    for item in payload.get("items") or []:
        involved = item.get("involvedObject") or {}
        events.append(AuditEvent(
            subject=involved.get("name", ""),
            event_type=item.get("type") or "",
            reason=item.get("reason") or "",
            message=(item.get("message") or "").strip(),
            timestamp=_event_timestamp(item),
        ))
    return events


class KubectlClient:
    """
    Cluster backend that shells out to kubectl.

    Every call is blocking. JSON output is requested wherever kubectl offers it
    so nothing depends on column layout.
    """

    def __init__(
        self,
        namespace: str = "default",
        kubectl_bin: str = "kubectl",
        timeout: float = 60,
        delete_timeout: float = 180,
    ):
        self.namespace = namespace
        self.kubectl_bin = kubectl_bin
        self.timeout = timeout
        self.delete_timeout = delete_timeout

    # ---------- plumbing ----------

    def _run(self, args: Sequence[str], timeout: Optional[float] = None) -> str:
        command = [self.kubectl_bin, "-n", self.namespace, *args]
        command_str = shlex.join(command)
        logger.debug("exec: %s", command_str)
        try:
            completed = subprocess.run(
                command,
                check=False,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=timeout if timeout is not None else self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise ClusterError("kubectl command timed out", command=command_str) from e
        except OSError as e:
            raise ClusterError(f"kubectl could not be executed: {e}", command=command_str) from e

        if completed.returncode != 0:
            error = completed.stderr.strip() or completed.stdout.strip() or "kubectl command failed"
            raise ClusterError(error, command=command_str, returncode=completed.returncode)
        return completed.stdout

    def _run_json(self, args: Sequence[str]) -> Dict[str, Any]:
        out = self._run([*args, "-o", "json"])
        try:
            return json.loads(out or "{}")
        except json.JSONDecodeError as e:
            raise ClusterError(f"kubectl JSON decode error: {e}") from e

    # ---------- query ----------

    def list_members(self, selector: str) -> List[str]:
        payload = self._run_json(["get", "pods", "-l", selector])
        return [
            (item.get("metadata") or {}).get("name", "")
            for item in payload.get("items") or []
        ]

    def list_events(self, member_name: str, exclude_type: str = "Normal") -> List[AuditEvent]:
        field_selector = f"involvedObject.kind=Pod,involvedObject.name={member_name},type!={exclude_type}"
        payload = self._run_json([
            "get", "events",
            "--field-selector", field_selector,
            "--sort-by=.metadata.creationTimestamp",
        ])
        return parse_events(payload)

    def describe(self, member_name: str) -> str:
        return self._run(["get", "pod", member_name, "-o", "wide"])

    # ---------- mutation ----------

    def delete(self, member_name: str) -> None:
        # blocks until the pod is gone; the termination grace period must fit in delete_timeout
        self._run(["delete", "pod", member_name, "--wait=true"], timeout=self.delete_timeout)

    # ---------- readiness ----------

    def wait_until_ready(self, selector: str, timeout: float) -> bool:
        args = ["wait", "pod", "-l", selector, "--for=condition=Ready", f"--timeout={int(timeout)}s"]
        try:
            # leave kubectl its own bound plus slack before the subprocess timeout fires
            self._run(args, timeout=timeout + 30)
        except ClusterError as e:
            logger.info("readiness wait did not succeed: %s", e)
            return False
        return True
