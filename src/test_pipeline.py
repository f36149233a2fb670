"""
test_pipeline.py
Purpose: End-to-end reset runs against the in-memory cluster.
"""

import json

from conftest import DEPENDENT_SELECTOR, MEMBER_SELECTOR, warning
from opr.errors import ClusterError
from opr.monitor import RecordingMonitor
from opr.pipeline import run_reset


def _status(session):
    return json.loads((session.run_dir / "status.json").read_text(encoding="utf-8"))


def _events(session):
    lines = (session.run_dir / "events.jsonl").read_text(encoding="utf-8").splitlines()
    return [json.loads(line) for line in lines]


# --------------------------------------------------------------------------
# Scenario A: single member, everything succeeds
# --------------------------------------------------------------------------

def test_single_member_success(cluster, make_session, console):
    session = make_session()
    monitor = RecordingMonitor()

    status = run_reset(session, cluster, monitor)

    assert status.outcome == "success"
    assert session.outcome == "success"
    assert cluster.deleted == ["redis-node-0", "core-api-7f9c", "core-worker-2b1d"]
    assert monitor.launched == [["avidctl", "pod", "watch-not-running"]]

    text = session.log.read()
    assert text.startswith("Reset run at Sun Oct 18 10:15:00 2026")
    assert "Single-node Redis detected." in text
    assert "All Redis pods are Ready." in text
    assert "Deleted 1/1 redis pods." in text
    assert console[0] == f"Logging to {session.log_path}"
    assert session.log_path.name == "reset_redis_20261018_101500.log"

    persisted = _status(session)
    assert persisted["outcome"] == "success"
    assert persisted["stages"] == {"topology": "ok", "reset": "ok", "readiness": "ok", "dependent": "ok"}


def test_monitor_not_launched_when_disabled(cluster, make_session):
    monitor = RecordingMonitor()
    status = run_reset(make_session(launch_monitor=False), cluster, monitor)
    assert status.outcome == "success"
    assert monitor.launched == []


# --------------------------------------------------------------------------
# Scenario B: three members, processed in ordinal order
# --------------------------------------------------------------------------

def test_three_members_in_order(cluster, make_session):
    cluster.groups[MEMBER_SELECTOR] = ["redis-node-2", "redis-node-0", "redis-node-1"]
    cluster.events["redis-node-1"] = [warning("redis-node-1", "Unhealthy", "2026-10-18T09:59:00Z")]
    session = make_session()

    status = run_reset(session, cluster, RecordingMonitor())

    assert status.outcome == "success"
    assert status.members == ["redis-node-0", "redis-node-1", "redis-node-2"]
    assert cluster.deleted[:3] == ["redis-node-0", "redis-node-1", "redis-node-2"]

    text = session.log.read()
    assert text.count("Warnings/Errors (pre-delete):") == 3
    assert text.count("(none)") == 2
    assert "3-node Redis cluster detected." in text
    assert "Redis pods in deletion order: redis-node-0 redis-node-1 redis-node-2" in text
    assert text.index("Pod: redis-node-0") < text.index("Pod: redis-node-1") < text.index("Pod: redis-node-2")

    reset_calls = [c for c in cluster.calls if c[0] in ("list_events", "delete", "sleep")][:9]
    assert [c[0] for c in reset_calls] == ["list_events", "delete", "sleep"] * 3


def test_delete_failure_is_not_fatal(cluster, make_session):
    cluster.groups[MEMBER_SELECTOR] = ["redis-node-0", "redis-node-1", "redis-node-2"]
    cluster.fail_delete.add("redis-node-0")
    session = make_session()

    status = run_reset(session, cluster, RecordingMonitor())

    assert status.outcome == "success"
    assert status.failed_deletions == ["redis-node-0"]
    assert "Deletion failed for: redis-node-0" in session.log.read()


# --------------------------------------------------------------------------
# Scenario C: unsupported topology
# --------------------------------------------------------------------------

def test_two_members_abort_before_mutation(cluster, make_session):
    cluster.groups[MEMBER_SELECTOR] = ["redis-node-0", "redis-node-1"]
    session = make_session()
    monitor = RecordingMonitor()

    status = run_reset(session, cluster, monitor)

    assert status.outcome == "aborted"
    assert status.stages.topology == "fail"
    assert cluster.deleted == []
    assert not any(c[0] in ("delete", "list_events", "wait") for c in cluster.calls)
    assert monitor.launched == []
    assert "Unexpected Redis pod count (2). Expected 1 or 3. Aborting." in session.log.read()
    assert _status(session)["error"]["stage"] == "topology"


def test_empty_group_is_success_without_actions(cluster, make_session):
    cluster.groups[MEMBER_SELECTOR] = []
    session = make_session()

    status = run_reset(session, cluster, RecordingMonitor())

    assert status.outcome == "success"
    assert status.stages.reset == "skipped"
    assert cluster.deleted == []
    assert "No Redis pods found. Exiting." in session.log.read()


def test_listing_failure_aborts(make_session):
    class Unreachable:
        def list_members(self, selector):
            raise ClusterError("The connection to the server was refused")

    session = make_session()
    status = run_reset(session, Unreachable(), RecordingMonitor())
    assert status.outcome == "aborted"
    assert "connection to the server was refused" in session.log.read()


# --------------------------------------------------------------------------
# Scenario D: readiness never clears
# --------------------------------------------------------------------------

def test_readiness_timeout_skips_dependent(cluster, make_session):
    cluster.groups[MEMBER_SELECTOR] = ["redis-node-0", "redis-node-1", "redis-node-2"]
    cluster.ready = False
    session = make_session()
    monitor = RecordingMonitor()

    status = run_reset(session, cluster, monitor)

    assert status.outcome == "timed_out"
    assert status.stages.readiness == "fail"
    assert status.stages.dependent == "skipped"
    assert cluster.deleted == ["redis-node-0", "redis-node-1", "redis-node-2"]
    assert ("list_members", DEPENDENT_SELECTOR) not in cluster.calls
    assert monitor.launched == []

    text = session.log.read()
    assert "Deleting redis-node-2..." in text
    assert "not Ready within 300s" in text
    assert "Deleted 3/3 redis pods." in text

    stages = [(e["stage"], e["event"]) for e in _events(session)]
    assert ("readiness", "fail") in stages
    assert stages[-1] == ("pipeline", "done")


def test_dry_run_deletes_nothing(cluster, make_session):
    session = make_session(dry_run=True)
    status = run_reset(session, cluster, RecordingMonitor())
    assert status.outcome == "success"
    assert cluster.deleted == []
    assert ("describe", "core-api-7f9c") in cluster.calls


def test_dry_run_log_records_no_deletions(cluster, make_session):
    session = make_session(dry_run=True)
    run_reset(session, cluster, RecordingMonitor())

    text = session.log.read()
    assert "Dry run: would delete 1/1 redis pods; none deleted." in text
    assert "Dry run: described core-api-7f9c, not deleted" in text
    assert "Deleted " not in text
    assert "Deleting " not in text
