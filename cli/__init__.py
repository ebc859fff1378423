"""
CLI command wrappers with error parsing and structured results
"""
from .base import CommandResult, ErrorType, Outcome, StepResult, CommandWrapper
from .systemctl import SystemCtl
from .journalctl import Journalctl
from .files import FileOps
from .curl import Curl
from .tar import Tar
from .process import Process
from .iptables import Iptables
from .network import Network
from .mount import Mount
from .kubectl import Kubectl
from .uname import Uname
__all__ = [
    "CommandResult",
    "ErrorType",
    "Outcome",
    "StepResult",
    "CommandWrapper",
    "SystemCtl",
    "Journalctl",
    "FileOps",
    "Curl",
    "Tar",
    "Process",
    "Iptables",
    "Network",
    "Mount",
    "Kubectl",
    "Uname",
]
