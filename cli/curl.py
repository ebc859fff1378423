"""
Curl command wrapper with fluent API
"""
import shlex
from typing import Optional
from .base import CommandWrapper

# fail on HTTP errors, quiet progress but keep errors, follow redirects
BASE_FLAGS = ("-f", "-s", "-S", "-L")

class Curl(CommandWrapper):
    """Wrapper for curl commands with fluent API"""
    def __init__(self):
        """Initialize with default settings"""
        self._output: Optional[str] = None
        self._url: Optional[str] = None
        self._headers: list[str] = []

    def output(self, path: str) -> "Curl":
        """Set output file path -o (returns self for chaining)."""
        self._output = path
        return self

    def header(self, value: str) -> "Curl":
        """Add a request header -H (returns self for chaining)."""
        self._headers.append(value)
        return self

    def url(self, url: str) -> "Curl":
        """Set URL to fetch (returns self for chaining)."""
        self._url = url
        return self

    def _flags(self) -> list[str]:
        return list(BASE_FLAGS) + [f"-H {shlex.quote(header)}" for header in self._headers]

    def download(self) -> str:
        """Generate curl download command"""
        if not self._url:
            raise ValueError("URL must be set for curl download")
        if not self._output:
            raise ValueError("Output path must be set for curl download")
        flags = self._flags()
        flags.append(f"-o {shlex.quote(self._output)}")
        return f"curl {' '.join(flags)} {shlex.quote(self._url)} 2>&1"

    def fetch(self) -> str:
        """Generate curl command printing the response body to stdout"""
        if not self._url:
            raise ValueError("URL must be set for curl fetch")
        parts = ["curl", *self._flags(), shlex.quote(self._url)]
        return " ".join(parts)
