from __future__ import annotations

from typing import List, Sequence

from ..cluster import ClusterMutation, ClusterQuery
from ..monitor import InteractiveMonitor
from ..schemas import StepResult
from ..session import RunSession
from .reset_driver import delete_or_describe


def trigger_dependent_reset(
    session: RunSession,
    query: ClusterQuery,
    mutation: ClusterMutation,
    selector: str,
) -> List[StepResult]:
    """
    Delete every pod of the dependent group. These pods are interchangeable,
    so no ordering or pacing applies. Failures are reported, never raised.
    """
    results: List[StepResult] = []
    try:
        names = query.list_members(selector)
    except Exception as e:
        session.log.write(f"Could not list pods for {selector}: {e}")
        session.events.log("dependent", "list_fail", {"selector": selector, "error": str(e)})
        return results

    if not names:
        session.log.write(f"No pods match {selector}.")

    for name in names:
        step = StepResult(member=name)
        try:
            delete_or_describe(session, query, mutation, name)
            step.deleted = True
            if session.cfg.dry_run:
                session.log.write(f"Dry run: described {name}, not deleted")
            else:
                session.log.write(f"Deleted {name}")
        except Exception as e:
            step.delete_error = str(e)
            session.log.write(f"Failed to delete {name}: {e}")
        results.append(step)

    session.events.log("dependent", "done", {
        "selector": selector,
        "deleted": [s.member for s in results if s.deleted],
        "failed": [s.member for s in results if not s.deleted],
    })
    return results


def hand_off(session: RunSession, monitor: InteractiveMonitor, command: Sequence[str], delay: float) -> int:
    """
    Terminal step: give the terminal to the interactive monitor.
    The pause lets the operator read the launch message first.
    """
    session.log.echo(f"Launching '{' '.join(command)}' for {session.cfg.dependent_selector} pods...")
    session.sleep(delay)
    session.log.echo("(Ctrl+C to exit)")
    session.events.log("monitor", "handoff", {"command": list(command)})
    return monitor.run(command)
