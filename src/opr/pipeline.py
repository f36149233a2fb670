from __future__ import annotations

from typing import Optional

from .cluster import ClusterClient
from .errors import ClusterError, EmptyGroup, ReadinessTimeout, UnsupportedTopology
from .monitor import InteractiveMonitor
from .run_manager import init_status, update_status
from .schemas import ResetReport, RunOutcome, RunStatus
from .session import RunSession
from .stages.dependent_trigger import hand_off, trigger_dependent_reset
from .stages.readiness_gate import await_ready
from .stages.reset_driver import reset_all
from .stages.topology import discover_members


def run_reset(
    session: RunSession,
    cluster: ClusterClient,
    monitor: Optional[InteractiveMonitor] = None,
) -> RunStatus:
    """
    Execute one reset run with artifacts persisted.

    Stages:
      1) topology  (discover + validate, read-only)
      2) reset     (ordered audit + delete, best-effort per member)
      3) readiness (whole-group barrier, bounded)
      4) dependent (unordered delete of the second group)
    then hand off to the interactive monitor when one is given.

    Only an unsupported topology or the readiness timeout end the run early.
    """
    cfg = session.cfg
    group = cfg.group_name.capitalize()
    log = session.log
    events = session.events

    status = init_status(session.run_dir)

    # ---- Stage 1: topology ----
    try:
        events.log("topology", "start", {"selector": cfg.member_selector})
        members = discover_members(cluster, cfg.member_selector, cfg.supported_sizes, events)
    except EmptyGroup:
        log.write(f"No {group} pods found. Exiting.")
        status.stages.topology = "ok"
        status.stages.reset = "skipped"
        status.stages.readiness = "skipped"
        status.stages.dependent = "skipped"
        return _finish(session, status, "success")
    except UnsupportedTopology as e:
        expected = " or ".join(str(s) for s in e.supported)
        log.write(f"Unexpected {group} pod count ({e.count}). Expected {expected}. Aborting.")
        status.stages.topology = "fail"
        status.error = {"stage": "topology", "message": str(e)}
        events.log("topology", "fail", {"error": str(e), "count": e.count})
        return _finish(session, status, "aborted")
    except ClusterError as e:
        log.write(f"Could not list {group} pods: {e}. Aborting.")
        status.stages.topology = "fail"
        status.error = {"stage": "topology", "message": str(e)}
        events.log("topology", "fail", {"error": str(e)})
        return _finish(session, status, "aborted")

    session.members = members
    status.members = [m.name for m in members]
    status.stages.topology = "ok"
    if len(members) == 1:
        log.write(f"Single-node {group} detected.")
    else:
        log.write(f"{len(members)}-node {group} cluster detected.")
    log.write(f"{group} pods in deletion order: {' '.join(m.name for m in members)}")
    events.log("topology", "done", {"members": status.members})
    update_status(session.run_dir, status)

    # ---- Stage 2: ordered reset ----
    try:
        events.log("reset", "start", {"members": len(members), "pacing": cfg.pacing_seconds})
        report: ResetReport = reset_all(session, cluster, cluster, members)
        status.failed_deletions = report.failed_deletions
        status.stages.reset = "ok"
        events.log("reset", "done", {
            "deleted": sum(1 for s in report.steps if s.deleted),
            "failed": report.failed_deletions,
        })
    except Exception as e:
        status.stages.reset = "fail"
        status.error = {"stage": "reset", "message": str(e)}
        events.log("reset", "fail", {"error": str(e)})
        update_status(session.run_dir, status)
        raise

    update_status(session.run_dir, status)

    # ---- Stage 3: readiness barrier ----
    log.write(f"Waiting for {group} pods to be Ready...")
    gate = await_ready(session, cluster, cfg.member_selector, cfg.ready_timeout_seconds)
    if gate == "timed_out":
        err = ReadinessTimeout(cfg.member_selector, cfg.ready_timeout_seconds)
        log.write(f"{group} pods not Ready within {cfg.ready_timeout_seconds}s. Skipping dependent reset.")
        status.stages.readiness = "fail"
        status.stages.dependent = "skipped"
        status.error = {"stage": "readiness", "message": str(err)}
        events.log("readiness", "fail", {"error": str(err)})
        _write_summary(session, report)
        return _finish(session, status, "timed_out")

    log.write(f"All {group} pods are Ready.")
    status.stages.readiness = "ok"
    events.log("readiness", "done", {})
    update_status(session.run_dir, status)

    # ---- Stage 4: dependent group ----
    try:
        verb = "Describing (dry run)" if cfg.dry_run else "Deleting"
        log.write(f"{verb} {cfg.dependent_selector} pods...")
        dependent = trigger_dependent_reset(session, cluster, cluster, cfg.dependent_selector)
        failed = [s.member for s in dependent if not s.deleted]
        if failed:
            log.write(f"Dependent pods not deleted: {' '.join(failed)}")
        status.stages.dependent = "ok"
    except Exception as e:
        status.stages.dependent = "fail"
        status.error = {"stage": "dependent", "message": str(e)}
        events.log("dependent", "fail", {"error": str(e)})
        update_status(session.run_dir, status)
        raise

    _write_summary(session, report)
    status = _finish(session, status, "success")

    if monitor is not None and cfg.launch_monitor:
        hand_off(session, monitor, cfg.monitor_command, cfg.handoff_delay_seconds)
    return status


def _write_summary(session: RunSession, report: ResetReport) -> None:
    deleted = sum(1 for s in report.steps if s.deleted)
    session.log.write("----")
    if session.cfg.dry_run:
        session.log.write(f"Dry run: would delete {deleted}/{len(report.steps)} {session.cfg.group_name} pods; none deleted.")
    else:
        session.log.write(f"Deleted {deleted}/{len(report.steps)} {session.cfg.group_name} pods.")
    if report.failed_deletions:
        session.log.write(f"Deletion failed for: {' '.join(report.failed_deletions)}")


def _finish(session: RunSession, status: RunStatus, outcome: RunOutcome) -> RunStatus:
    status.outcome = outcome
    session.outcome = outcome
    session.log.append(f"Outcome: {outcome}")
    update_status(session.run_dir, status)
    session.events.log("pipeline", "done", {"run_id": session.run_id, "outcome": outcome})
    return status
