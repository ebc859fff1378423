"""
Socket and link inspection command wrappers with fluent API
"""
import shlex
from typing import Optional
from .base import CommandWrapper

class Network(CommandWrapper):
    """Wrapper for ss / ip commands with fluent API"""
    def __init__(self):
        """Initialize with default settings"""
        self._port: Optional[int] = None
        self._interface: Optional[str] = None

    def port(self, number: int) -> "Network":
        """Set TCP port (returns self for chaining)."""
        self._port = number
        return self

    def interface(self, name: str) -> "Network":
        """Set link name (returns self for chaining)."""
        self._interface = name
        return self

    def listening(self) -> str:
        """Generate query listing TCP listeners bound to the port, no header"""
        if self._port is None:
            raise ValueError("Port must be set")
        return f"ss -H -tln 'sport = :{self._port}' 2>&1"

    def listeners(self) -> str:
        """Generate full listening-socket table"""
        return "ss -tlnp 2>&1"

    def interfaces(self) -> str:
        """Generate network interface list"""
        return "ip addr 2>&1"

    def link_down(self) -> str:
        """Generate command to bring a link down"""
        if not self._interface:
            raise ValueError("Interface must be set")
        return f"ip link set {shlex.quote(self._interface)} down 2>&1"

    def link_delete(self) -> str:
        """Generate command to delete a link"""
        if not self._interface:
            raise ValueError("Interface must be set")
        return f"ip link delete {shlex.quote(self._interface)} 2>&1"

    @staticmethod
    def parse_listening(output: Optional[str], port: int) -> bool:
        """True when some LISTEN row has a local address ending in :port"""
        if not output:
            return False
        suffix = f":{port}"
        for line in output.splitlines():
            fields = line.split()
            if any(field.endswith(suffix) for field in fields):
                return True
        return False
