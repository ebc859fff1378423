"""Failure diagnostics for the KubeSolo service."""
from __future__ import annotations
from typing import Dict, Optional
from cli import FileOps, Journalctl, Network, SystemCtl
from libs.config import ActionConfig
from libs.logger import get_logger
logger = get_logger(__name__)


def collect_diagnostics(executor, cfg: ActionConfig, emit: bool = True) -> Dict[str, Optional[str]]:
    """
    Gather service status, recent journal, credential directory, listeners and interfaces
    Args:
        executor: command executor
        cfg: action configuration
        emit: log every section as it is collected
    Returns:
        Mapping of section title to captured output (None when the command could not run)
    """
    service = cfg.service_name
    sections = (
        ("service status", SystemCtl().service(service).status()),
        (
            f"last {cfg.waits.journal_lines} journal lines",
            Journalctl().unit(service).lines(cfg.waits.journal_lines).tail(),
        ),
        ("credential directory", FileOps().list_dir(cfg.kubesolo.kubeconfig_dir)),
        ("listening sockets", Network().listeners()),
        ("network interfaces", Network().interfaces()),
    )
    report: Dict[str, Optional[str]] = {}
    for title, command in sections:
        try:
            output, exit_code = executor.execute(command, sudo=True)
        except OSError as exc:
            logger.warning("Could not collect %s: %s", title, exc)
            report[title] = None
            continue
        if output is None:
            logger.warning("Could not collect %s (exit code %s)", title, exit_code)
        report[title] = output
        if emit:
            logger.info("--- %s ---", title)
            logger.info(output or "(no output)")
    return report
