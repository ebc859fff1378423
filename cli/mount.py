"""
Mount table command wrappers with fluent API
"""
import shlex
from typing import List, Optional
from .base import CommandWrapper

class Mount(CommandWrapper):
    """Wrapper for findmnt / umount with fluent API"""
    def __init__(self):
        """Initialize with default settings"""
        self._lazy: bool = False

    def lazy(self, value: bool = True) -> "Mount":
        """Use lazy unmount -l (returns self for chaining)."""
        self._lazy = value
        return self

    def targets(self) -> str:
        """Generate command listing every mount target, one per line"""
        return "findmnt -rn -o TARGET 2>&1"

    def unmount(self, target: str) -> str:
        """Generate umount command"""
        flag = "-l " if self._lazy else ""
        return f"umount {flag}{shlex.quote(target)} 2>&1"

    @staticmethod
    def mounts_under(output: Optional[str], root: str) -> List[str]:
        """
        Pick mount targets at or below root, deepest first
        Args:
            output: findmnt output
            root: directory prefix
        Returns:
            Targets ordered so that children come before their parents
        """
        if not output:
            return []
        root = root.rstrip("/")
        found = []
        for line in output.splitlines():
            # findmnt -r escapes spaces as \x20
            target = line.strip().replace("\\x20", " ")
            if target == root or target.startswith(root + "/"):
                found.append(target)
        return sorted(set(found), key=lambda path: (path.count("/"), len(path)), reverse=True)
