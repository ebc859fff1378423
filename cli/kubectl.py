"""
Kubectl command wrapper with fluent API
"""
import re
import shlex
from typing import List, Optional
from .base import CommandWrapper

class Kubectl(CommandWrapper):
    """Wrapper for kubectl commands with fluent API"""
    def __init__(self):
        """Initialize with default settings"""
        self._kubeconfig: Optional[str] = None
        self._namespace: Optional[str] = None

    def kubeconfig(self, path: str) -> "Kubectl":
        """Set --kubeconfig (returns self for chaining)."""
        self._kubeconfig = path
        return self

    def namespace(self, name: str) -> "Kubectl":
        """Set -n namespace (returns self for chaining)."""
        self._namespace = name
        return self

    def _base(self) -> str:
        cmd = "kubectl"
        if self._kubeconfig:
            cmd += f" --kubeconfig {shlex.quote(self._kubeconfig)}"
        if self._namespace:
            cmd += f" -n {shlex.quote(self._namespace)}"
        return cmd

    def get_nodes(self) -> str:
        """Generate node listing without headers"""
        return f"{self._base()} get nodes --no-headers 2>&1"

    def get_pods(self, headers: bool = False) -> str:
        """Generate pod listing"""
        flag = "" if headers else " --no-headers"
        return f"{self._base()} get pods{flag} 2>&1"

    def run_pod(self, name: str, image: str, args: List[str]) -> str:
        """Generate a one-shot pod that never restarts"""
        quoted_args = " ".join(shlex.quote(arg) for arg in args)
        return (
            f"{self._base()} run {shlex.quote(name)} --image={shlex.quote(image)} "
            f"--restart=Never -- {quoted_args} 2>&1"
        )

    def wait_ready(self, name: str, timeout: int) -> str:
        """Generate wait for pod Ready condition"""
        return f"{self._base()} wait --for=condition=ready --timeout={timeout}s pod/{shlex.quote(name)} 2>&1"

    def exec(self, name: str, args: List[str]) -> str:
        """Generate exec into a pod"""
        quoted_args = " ".join(shlex.quote(arg) for arg in args)
        return f"{self._base()} exec {shlex.quote(name)} -- {quoted_args} 2>&1"

    def delete_pod(self, name: str) -> str:
        """Generate pod deletion that tolerates absence"""
        return f"{self._base()} delete pod {shlex.quote(name)} --ignore-not-found 2>&1"

    @staticmethod

    def parse_node_ready(output: Optional[str]) -> bool:
        """A row whose STATUS column is exactly Ready (NotReady does not count)"""
        if not output:
            return False
        for line in output.splitlines():
            if "Ready" in line.split():
                return True
        return False
    @staticmethod

    def parse_pod_running(output: Optional[str], pattern: str) -> bool:
        """True when some pod line matches pattern"""
        if not output:
            return False
        regex = re.compile(pattern)
        return any(regex.search(line) for line in output.splitlines())
