"""Readiness polling for a freshly started KubeSolo service."""
from __future__ import annotations
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional
from cli import FileOps, Kubectl, Network
from libs.config import ActionConfig
from libs.logger import get_logger
from services.systemd import SystemdService
from .diagnostics import collect_diagnostics
logger = get_logger(__name__)


class ReadinessTimeoutError(RuntimeError):
    """Raised when the node is not Ready before the deadline."""


class ReadinessStage(Enum):
    """Checks in the order they must pass."""
    SERVICE_ACTIVE = 1
    PORT_LISTENING = 2
    CREDENTIAL_FILE_PRESENT = 3
    API_REACHABLE = 4
    NODE_READY = 5


@dataclass
class ReadinessReport:
    """How long readiness took."""
    elapsed: int
    iterations: int


class ReadinessPoller:
    """Re-runs every stage from the first on each iteration until the node reports Ready."""

    def __init__(
        self,
        executor,
        cfg: ActionConfig,
        timeout: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        diagnostics: Optional[Callable[[], object]] = None,
    ):
        self.executor = executor
        self.cfg = cfg
        self.timeout = cfg.inputs.timeout if timeout is None else timeout
        self.clock = clock
        self.sleep = sleep
        self.diagnostics = diagnostics or (lambda: collect_diagnostics(executor, cfg))
        self.systemd = SystemdService(executor)

    def evaluate_once(self) -> Optional[ReadinessStage]:
        """Return the last stage that passed, or None when the service is not even active."""
        kubesolo = self.cfg.kubesolo
        if not self.systemd.is_active(kubesolo.service_name):
            return None
        output, _ = self.executor.execute(Network().port(kubesolo.api_port).listening(), sudo=True)
        if not Network.parse_listening(output, kubesolo.api_port):
            return ReadinessStage.SERVICE_ACTIVE
        kubeconfig = self.cfg.kubeconfig_path
        output, _ = self.executor.execute(FileOps().exists(kubeconfig), sudo=True)
        if not FileOps.parse_exists(output):
            return ReadinessStage.PORT_LISTENING
        # Regenerated files come back 0600
        self.executor.execute(FileOps().chmod(kubeconfig, "644"), sudo=True)
        output, exit_code = self.executor.execute(Kubectl().kubeconfig(kubeconfig).get_nodes())
        if exit_code != 0 or not (output or "").strip():
            return ReadinessStage.CREDENTIAL_FILE_PRESENT
        if not Kubectl.parse_node_ready(output):
            return ReadinessStage.API_REACHABLE
        return ReadinessStage.NODE_READY

    def wait(self) -> ReadinessReport:
        """
        Poll until NODE_READY
        Returns:
            ReadinessReport with whole seconds elapsed
        Raises:
            ReadinessTimeoutError: once elapsed exceeds the timeout, after diagnostics ran
        """
        logger.info("Waiting for KubeSolo to become ready (timeout %ss)...", self.timeout)
        start = self.clock()
        iterations = 0
        while True:
            elapsed = int(self.clock() - start)
            if elapsed > self.timeout:
                logger.error("KubeSolo failed to become ready within %s seconds", self.timeout)
                self.diagnostics()
                raise ReadinessTimeoutError(f"KubeSolo not ready after {elapsed}s")
            iterations += 1
            stage = self.evaluate_once()
            if stage == ReadinessStage.NODE_READY:
                logger.info("KubeSolo is ready (took %ss)", elapsed)
                return ReadinessReport(elapsed=elapsed, iterations=iterations)
            logger.info(
                "Waiting for KubeSolo... %ss elapsed, last check passed: %s",
                elapsed,
                stage.name.lower() if stage else "none",
            )
            self.sleep(self.cfg.waits.poll_interval)
