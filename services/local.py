"""
Local Service - runs shell commands on the runner host and captures their output
"""
import base64
import logging
import os
import shlex
import subprocess
from typing import Optional
from libs.config import ActionConfig
logger = logging.getLogger(__name__)

class LocalService:
    """Service that executes command strings on the local host, optionally through sudo"""
    def __init__(self, use_sudo: bool = True, default_timeout: int = 300, verbose: bool = False, shell: str = "/bin/bash"):
        """
        Initialize local service
        Args:
            use_sudo: Wrap privileged commands with sudo when not running as root
            default_timeout: Command timeout in seconds when none is given
            verbose: Log every command output at INFO instead of DEBUG
            shell: Shell used to interpret command strings
        """
        self.use_sudo = use_sudo
        self.default_timeout = default_timeout
        self.verbose = verbose
        self.shell = shell

    def _needs_sudo(self) -> bool:
        return self.use_sudo and os.geteuid() != 0

    def wrap(self, command: str, sudo: bool = False) -> str:
        """Return the command line actually handed to the shell"""
        if not sudo or not self._needs_sudo():
            return command
        if "\n" in command:
            # For multi-line scripts, use base64 encoding to avoid quoting issues
            encoded = base64.b64encode(command.encode("utf-8")).decode("utf-8")
            return f"sudo -n bash -c 'echo {encoded} | base64 -d | bash'"
        return f"sudo -n bash -c {shlex.quote(command)}"

    def execute(self, command: str, timeout: Optional[int] = None, sudo: bool = False) -> tuple[Optional[str], Optional[int]]:
        """
        Execute command locally
        Args:
            command: Command to execute
            timeout: Command timeout in seconds
            sudo: Whether to run command with root privileges
        Returns:
            Tuple of (output, exit_code). (None, None) on timeout or spawn failure
        """
        wrapped = self.wrap(command, sudo=sudo)
        exec_timeout = timeout if timeout else self.default_timeout
        logger.debug("Running: %s", wrapped)
        try:
            completed = subprocess.run(
                wrapped,
                shell=True,
                executable=self.shell,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=exec_timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.error("Command timed out after %ss: %s", exec_timeout, command)
            return None, None
        except OSError as exc:
            logger.error("Failed to run command %s: %s", command, exc)
            return None, None
        output = (completed.stdout or "").strip()
        if output:
            if self.verbose:
                logger.info(output)
            else:
                logger.debug(output)
        return output, completed.returncode

    @classmethod

    def from_config(cls, cfg: ActionConfig) -> "LocalService":
        """
        Create LocalService from ActionConfig
        Args:
            cfg: Action configuration
        Returns:
            LocalService instance
        """
        return cls(use_sudo=cfg.use_sudo, verbose=cfg.verbose)
