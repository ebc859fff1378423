"""
Journalctl command wrapper with fluent API
"""
import shlex
from typing import Optional
from .base import CommandWrapper

class Journalctl(CommandWrapper):
    """Wrapper for journalctl commands with fluent API"""
    def __init__(self):
        """Initialize with default settings"""
        self._unit: Optional[str] = None
        self._lines: int = 100

    def unit(self, name: str) -> "Journalctl":
        """Set unit name (returns self for chaining)."""
        self._unit = name
        return self

    def lines(self, count: int) -> "Journalctl":
        """Set number of trailing lines (returns self for chaining)."""
        self._lines = count
        return self

    def tail(self) -> str:
        """Generate command showing the last lines of a unit's journal"""
        if not self._unit:
            raise ValueError("Unit name must be set")
        return f"journalctl -u {shlex.quote(self._unit)} -n {self._lines} --no-pager 2>&1"
