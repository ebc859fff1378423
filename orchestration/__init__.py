"""Orchestrators for waiting on and inspecting the installed cluster."""
from .diagnostics import collect_diagnostics  # noqa: F401
from .readiness import ReadinessPoller, ReadinessReport, ReadinessStage, ReadinessTimeoutError  # noqa: F401
from .dns import DnsCheck, DnsCheckError  # noqa: F401
__all__ = [
    "collect_diagnostics",
    "ReadinessPoller",
    "ReadinessReport",
    "ReadinessStage",
    "ReadinessTimeoutError",
    "DnsCheck",
    "DnsCheckError",
]
