from __future__ import annotations

# ---- Environment bootstrap (MUST be first) ----
import logging
import os
from dotenv import load_dotenv

# Load .env once at process start
load_dotenv()

# ---- CLI / Pipeline imports ----
from typing import Any, Dict, Optional

import typer

from .cluster import ClusterClient, KubectlClient, MockCluster
from .config import OPRConfig
from .errors import PrivilegeDeclined
from .monitor import RecordingMonitor, SubprocessMonitor
from .pipeline import run_reset
from .privilege import check_privilege
from .session import RunSession
from .utils.ui import print_header

EXIT_CODES = {"success": 0, "aborted": 1, "timed_out": 2}

app = typer.Typer(add_completion=False, help="Ordered Pod Reset (OPR)")


def build_cluster(cfg: OPRConfig) -> ClusterClient:
    if cfg.cluster_mode.lower() == "mock":
        return MockCluster(groups={cfg.member_selector: list(cfg.mock_members)})
    return KubectlClient(
        namespace=cfg.namespace,
        kubectl_bin=cfg.kubectl_bin,
        timeout=cfg.kubectl_timeout_seconds,
        delete_timeout=cfg.kubectl_delete_timeout_seconds,
    )


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    """
    Ordered Pod Reset (OPR)
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else os.getenv("OPR_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )


@app.command()
def reset(
    namespace: Optional[str] = typer.Option(None, help="Namespace of both pod groups"),
    selector: Optional[str] = typer.Option(None, help="Label selector of the ordinal group"),
    dependent_selector: Optional[str] = typer.Option(None, help="Label selector of the dependent group"),
    group_name: Optional[str] = typer.Option(None, help="Display name of the ordinal group"),
    pacing: Optional[float] = typer.Option(None, help="Seconds between member deletions"),
    timeout: Optional[int] = typer.Option(None, help="Readiness timeout in seconds"),
    monitor_command: Optional[str] = typer.Option(None, help="Interactive monitor command line"),
    no_monitor: bool = typer.Option(False, "--no-monitor", help="Do not launch the monitor at the end"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Describe pods instead of deleting them"),
    capture_describe: bool = typer.Option(False, "--capture-describe", help="Add describe output to audit sections"),
    cluster_mode: Optional[str] = typer.Option(None, help="kubectl | mock"),
    runs_dir: Optional[str] = typer.Option(None, help="Directory for run artifacts"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not prompt when not running as root"),
):
    """
    Reset the ordinal group member by member, wait for readiness, then reset
    the dependent group and launch the monitor.
    """
    overrides: Dict[str, Any] = {
        "namespace": namespace,
        "member_selector": selector,
        "dependent_selector": dependent_selector,
        "group_name": group_name,
        "pacing_seconds": pacing,
        "ready_timeout_seconds": timeout,
        "monitor_command": monitor_command.split() if monitor_command else None,
        "cluster_mode": cluster_mode,
        "runs_dir": runs_dir,
    }
    update = {k: v for k, v in overrides.items() if v is not None}
    if no_monitor:
        update["launch_monitor"] = False
    if dry_run:
        update["dry_run"] = True
    if capture_describe:
        update["capture_describe"] = True
    cfg = OPRConfig().model_copy(update=update)

    try:
        check_privilege(assume_yes=yes)
    except PrivilegeDeclined:
        raise typer.Exit(code=EXIT_CODES["aborted"])

    print_header("Ordered Pod Reset", f"{cfg.member_selector} in {cfg.namespace}")

    cluster = build_cluster(cfg)
    monitor = RecordingMonitor() if cfg.cluster_mode.lower() == "mock" else SubprocessMonitor()

    session = RunSession.open(cfg)
    status = run_reset(session, cluster, monitor)

    if status.outcome == "success":
        typer.echo(f"Reset complete. See log file: {session.log_path}")
    else:
        typer.echo(f"Reset {status.outcome}. See log file: {session.log_path}")
    raise typer.Exit(code=EXIT_CODES[status.outcome or "aborted"])


if __name__ == "__main__":
    app()
