"""
Tar command wrapper with fluent API
"""
import shlex
from typing import Optional
from .base import CommandWrapper

class Tar(CommandWrapper):
    """Wrapper for tar commands with fluent API"""
    def __init__(self):
        """Initialize with default settings"""
        self._archive: Optional[str] = None
        self._directory: Optional[str] = None

    def archive(self, path: str) -> "Tar":
        """Set archive path (returns self for chaining)."""
        self._archive = path
        return self

    def directory(self, path: str) -> "Tar":
        """Set extraction directory -C (returns self for chaining)."""
        self._directory = path
        return self

    def extract(self) -> str:
        """Generate tar extraction command"""
        if not self._archive:
            raise ValueError("Archive path must be set")
        cmd = f"tar -xzf {shlex.quote(self._archive)}"
        if self._directory:
            cmd += f" -C {shlex.quote(self._directory)}"
        return f"{cmd} 2>&1"
