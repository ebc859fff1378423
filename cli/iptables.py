"""
Iptables command wrapper with fluent API
"""
import shlex
from typing import List
from .base import CommandWrapper

TABLES = ("filter", "nat", "mangle", "raw")
BUILTIN_CHAINS = ("INPUT", "FORWARD", "OUTPUT")

class Iptables(CommandWrapper):
    """Wrapper for iptables commands"""
    def __init__(self):
        """Initialize with default settings"""

    def save(self, path: str) -> str:
        """Generate command that snapshots the ruleset to a file"""
        return f"iptables-save > {shlex.quote(path)}"

    def restore(self, path: str) -> str:
        """Generate command that loads a snapshot back"""
        return f"iptables-restore < {shlex.quote(path)} 2>&1"

    def flush_all(self) -> List[str]:
        """Generate flush and delete-chain commands for every table"""
        commands = []
        for table in TABLES:
            prefix = "iptables" if table == "filter" else f"iptables -t {table}"
            commands.append(f"{prefix} -F 2>&1")
            commands.append(f"{prefix} -X 2>&1")
        return commands

    def accept_policies(self) -> List[str]:
        """Generate commands setting ACCEPT on the builtin filter chains"""
        return [f"iptables -P {chain} ACCEPT 2>&1" for chain in BUILTIN_CHAINS]
