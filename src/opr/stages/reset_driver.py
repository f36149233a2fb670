from __future__ import annotations

from typing import Sequence

from ..cluster import ClusterMutation, ClusterQuery
from ..schemas import Member, ResetReport, StepResult
from ..session import RunSession
from .event_auditor import audit_member

SECTION_RULE = "----"


def delete_or_describe(session: RunSession, query: ClusterQuery, mutation: ClusterMutation, name: str) -> None:
    """Deletion primitive; in dry-run mode the pod is only described."""
    if session.cfg.dry_run:
        session.log.write(query.describe(name))
        return
    mutation.delete(name)


def reset_all(
    session: RunSession,
    query: ClusterQuery,
    mutation: ClusterMutation,
    members: Sequence[Member],
) -> ResetReport:
    """
    Audit and delete each member, one at a time, in the given order.

    Member i (audit, delete, pacing sleep) finishes before member i+1 is
    audited. A failed deletion is recorded on its StepResult and the loop
    moves on; nothing here aborts the run.
    """
    report = ResetReport()
    pacing = session.cfg.pacing_seconds

    for member in members:
        step = StepResult(member=member.name)
        report.steps.append(step)

        session.log.write(SECTION_RULE)
        session.log.write(f"Pod: {member.name}")
        audit_member(session, query, member, step)

        if session.cfg.dry_run:
            session.log.write(f"Dry run: describing {member.name} instead of deleting...")
        else:
            session.log.write(f"Deleting {member.name}...")
        try:
            delete_or_describe(session, query, mutation, member.name)
            step.deleted = True
            session.events.log("reset", "deleted", {"member": member.name, "dry_run": session.cfg.dry_run})
        except Exception as e:
            step.delete_error = str(e)
            session.log.write(f"Failed to delete {member.name}: {e}")
            session.events.log("reset", "delete_fail", {"member": member.name, "error": str(e)})

        session.sleep(pacing)

    return report
