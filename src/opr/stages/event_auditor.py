from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterator, Tuple

from ..cluster import ClusterQuery
from ..schemas import AuditEvent, Member, StepResult
from ..session import RunSession

NORMAL_EVENT_TYPE = "Normal"
NONE_MARKER = "(none)"


def _ts_key(event: AuditEvent) -> Tuple[bool, datetime]:
    ts = event.timestamp
    if ts is None:
        return (True, datetime.min.replace(tzinfo=timezone.utc))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return (False, ts)


def fetch_recent_events(query: ClusterQuery, member: Member) -> Iterator[AuditEvent]:
    """
    Warning/error events about `member`, oldest first.

    The backend is asked to exclude Normal events already; the subject and
    type are checked again here since field selectors are not honoured by
    every API server version.
    """
    raw = query.list_events(member.name, exclude_type=NORMAL_EVENT_TYPE)
    relevant = [
        e for e in raw
        if e.subject == member.name and e.event_type != NORMAL_EVENT_TYPE
    ]
    for event in sorted(relevant, key=_ts_key):
        yield event


def audit_member(session: RunSession, query: ClusterQuery, member: Member, step: StepResult) -> None:
    """
    Append the pre-delete audit section for `member` to the session log.

    Never raises for a retrieval problem: the section gets the none marker
    and the error is kept on the step result.
    """
    session.log.write("Warnings/Errors (pre-delete):")
    try:
        for event in fetch_recent_events(query, member):
            session.log.append(event.as_line())
            step.event_count += 1
        step.audited = True
    except Exception as e:
        step.audit_error = str(e)
        session.events.log("reset", "audit_fail", {"member": member.name, "error": str(e)})

    if step.event_count == 0:
        session.log.write(NONE_MARKER)

    if session.cfg.capture_describe:
        try:
            session.log.append(query.describe(member.name))
        except Exception as e:
            session.events.log("reset", "describe_fail", {"member": member.name, "error": str(e)})

    session.events.log("reset", "audited", {
        "member": member.name,
        "events": step.event_count,
        "ok": step.audited,
    })
