"""
File and filesystem command wrappers with fluent API
"""
import shlex
from .base import CommandWrapper

def _escape_single_quotes(value: str) -> str:
    return value.replace("'", "'\"'\"'")

class FileOps(CommandWrapper):
    """Wrapper for common file operations with fluent API"""
    def __init__(self):
        """Initialize with default settings"""
        self._recursive: bool = False

    def recursive(self, value: bool = True) -> "FileOps":
        """Set recursive mode (returns self for chaining)."""
        self._recursive = value
        return self

    def write(self, path: str, content: str) -> str:
        """Generate command that writes literal content to a file via printf."""
        sanitized = _escape_single_quotes(content)
        return f"printf '%s' '{sanitized}' > {shlex.quote(path)} 2>&1"

    def chmod(self, path: str, mode: str) -> str:
        """Generate command to change permissions on path."""
        return f"chmod {mode} {shlex.quote(path)} 2>&1"

    def mkdir(self, path: str, parents: bool = True) -> str:
        """Generate command to create directory."""
        flag = "-p " if parents else ""
        return f"mkdir {flag}{shlex.quote(path)} 2>&1"

    def move(self, source: str, destination: str) -> str:
        """Generate mv command."""
        return f"mv -f {shlex.quote(source)} {shlex.quote(destination)} 2>&1"

    def remove(self, path: str) -> str:
        """Generate rm command."""
        flags = "-rf" if self._recursive else "-f"
        return f"rm {flags} {shlex.quote(path)} 2>&1"

    def list_dir(self, path: str) -> str:
        """Generate long listing of a directory."""
        return f"ls -la {shlex.quote(path)} 2>&1"

    def exists(self, path: str) -> str:
        """Generate command to check if a regular file exists."""
        return self._test("-f", path)

    def is_dir(self, path: str) -> str:
        """Generate command to check if path is a directory."""
        return self._test("-d", path)

    def _test(self, flag: str, path: str) -> str:
        return f"test {flag} {shlex.quote(path)} && echo exists || echo not_found 2>&1"

    @staticmethod
    def parse_exists(output) -> bool:
        """Parse output of exists/is_dir."""
        if not output:
            return False
        return output.strip().splitlines()[-1].strip() == "exists"
