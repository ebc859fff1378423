"""
Systemctl command wrapper with fluent API
"""
import logging
import shlex
from typing import Optional
from .base import CommandWrapper
logger = logging.getLogger(__name__)

class SystemCtl(CommandWrapper):
    """Wrapper for systemctl commands with fluent API"""
    def __init__(self):
        """Initialize with default settings"""
        self._service: Optional[str] = None
        self._signal: str = "SIGKILL"

    def service(self, name: str) -> "SystemCtl":
        """Set service name (returns self for chaining)."""
        self._service = name
        return self

    def signal(self, name: str) -> "SystemCtl":
        """Set the signal used by kill (returns self for chaining)."""
        self._signal = name
        return self

    def _unit(self) -> str:
        if not self._service:
            raise ValueError("Service name must be set")
        return shlex.quote(self._service)

    def enable(self) -> str:
        """Generate command to enable a service"""
        return f"systemctl enable {self._unit()} 2>&1"

    def disable(self) -> str:
        """Generate command to disable a service"""
        return f"systemctl disable {self._unit()} 2>&1"

    def start(self) -> str:
        """Generate command to start a service"""
        return f"systemctl start {self._unit()} 2>&1"

    def stop(self) -> str:
        """Generate command to stop a service"""
        return f"systemctl stop {self._unit()} 2>&1"

    def mask(self) -> str:
        """Generate command to mask a service (survives reboot)"""
        return f"systemctl mask {self._unit()} 2>&1"

    def unmask(self) -> str:
        """Generate command to unmask a service"""
        return f"systemctl unmask {self._unit()} 2>&1"

    def kill(self) -> str:
        """Generate command to signal every process of a service"""
        return f"systemctl kill --signal={self._signal} {self._unit()} 2>&1"

    def is_active(self) -> str:
        """Generate command to check if service is active (exit status carries the answer)"""
        return f"systemctl is-active {self._unit()} 2>&1"

    def is_enabled(self) -> str:
        """Generate command to check if service is enabled"""
        return f"systemctl is-enabled {self._unit()} 2>&1"

    def daemon_reload(self) -> str:
        """Generate command to reload systemd daemon"""
        return "systemctl daemon-reload 2>&1"

    def status(self) -> str:
        """Generate command to get service status"""
        return f"systemctl status {self._unit()} --no-pager 2>&1"

    @staticmethod

    def parse_is_active(output: Optional[str]) -> bool:
        """Parse output to check if service is active"""
        if not output:
            return False
        return output.strip().splitlines()[-1].strip() == "active"
    @staticmethod

    def parse_is_enabled(output: Optional[str]) -> bool:
        """Parse output to check if service is enabled"""
        if not output:
            return False
        return output.strip().splitlines()[-1].strip() == "enabled"
