"""
Process management command wrapper with fluent API
"""
import shlex
from typing import Optional
from .base import CommandWrapper, Outcome

class Process(CommandWrapper):
    """Wrapper for process management commands with fluent API"""
    def __init__(self):
        """Initialize with default settings"""
        self._signal: int = 9

    def signal(self, value: int) -> "Process":
        """Set signal number (returns self for chaining)."""
        self._signal = value
        return self

    def pkill(self, pattern: str) -> str:
        """Generate pkill command."""
        return f"pkill -{self._signal} {shlex.quote(pattern)} 2>&1"

    @staticmethod
    def parse_pkill(output: Optional[str], exit_code: Optional[int]) -> Outcome:
        """pkill exits 1 when nothing matched; that is an absent process, not a failure."""
        if exit_code == 0:
            return Outcome.SUCCEEDED
        if exit_code == 1:
            return Outcome.ABSENT
        return Outcome.FAILED
