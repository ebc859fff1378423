"""
Uname command wrapper
"""
from .base import CommandWrapper

class Uname(CommandWrapper):
    """Wrapper for uname - just provides command generation."""
    @staticmethod

    def machine() -> str:
        """Generate command printing the hardware name (x86_64, aarch64, ...)"""
        return "uname -m"
