from __future__ import annotations

from ..cluster import Readiness
from ..schemas import GateResult
from ..session import RunSession
from ..utils.ui import spinner


def await_ready(session: RunSession, readiness: Readiness, selector: str, timeout: float) -> GateResult:
    """
    Single barrier for the whole group: returns once every pod matching
    `selector` is Ready, or "timed_out" once `timeout` seconds have passed.
    A backend failure counts as not ready.
    """
    session.events.log("readiness", "wait", {"selector": selector, "timeout": timeout})
    try:
        with spinner(f"Waiting up to {timeout:g}s for {selector} ..."):
            ok = readiness.wait_until_ready(selector, timeout)
    except Exception as e:
        session.events.log("readiness", "error", {"error": str(e)})
        ok = False
    return "ready" if ok else "timed_out"
