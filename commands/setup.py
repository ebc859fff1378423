"""Setup command orchestration."""
from __future__ import annotations
import sys
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, TYPE_CHECKING
from actions.base import ActionError
from actions.registry import resolve_actions
from libs import workflow
from libs.command import Command
from libs.logger import get_logger
from orchestration import DnsCheck, DnsCheckError, ReadinessPoller, ReadinessReport, ReadinessTimeoutError
if TYPE_CHECKING:
    from services.local import LocalService
    from services.state import HandoffState
logger = get_logger(__name__)


class SetupError(RuntimeError):
    """Raised when setup fails."""


@dataclass
class Setup(Command):
    """Installs KubeSolo, then waits for the node and cluster DNS."""
    executor: Optional["LocalService"] = field(default=None)
    state: Optional["HandoffState"] = field(default=None)
    clock: Callable[[], float] = field(default=time.monotonic)
    sleep: Callable[[float], None] = field(default=time.sleep)

    def run(self, args):
        """Execute the setup workflow."""
        import traceback
        try:
            self.execute()
        except SetupError as err:
            logger.error("Error during setup: %s", err)
            logger.debug(traceback.format_exc())
            sys.exit(1)

    def execute(self) -> Optional[ReadinessReport]:
        logger.info("=" * 50)
        logger.info("Setting up KubeSolo")
        logger.info("=" * 50)
        try:
            action_classes = resolve_actions(self.cfg.actions)
        except ValueError as err:
            raise SetupError(str(err)) from err
        # Recorded before anything is touched so the post step also undoes a half-finished setup
        self.state.mark_setup_ran(cleanup=self.cfg.inputs.cleanup)
        total = len(action_classes)
        for step, action_class in enumerate(action_classes, 1):
            name = action_class.description
            with workflow.group(f"[{step}/{total}] {name}"):
                action = action_class(executor=self.executor, cfg=self.cfg)
                try:
                    if not action.execute():
                        raise SetupError(f"Failed to execute action '{name}'")
                except ActionError as err:
                    raise SetupError(f"{name}: {err}") from err
                logger.info("Action '%s' completed successfully", name)
        report = None
        inputs = self.cfg.inputs
        if inputs.wait_for_ready:
            with workflow.group("Waiting for KubeSolo to be ready"):
                poller = ReadinessPoller(self.executor, self.cfg, clock=self.clock, sleep=self.sleep)
                try:
                    report = poller.wait()
                except ReadinessTimeoutError as err:
                    raise SetupError(str(err)) from err
        else:
            logger.info("Skipping readiness wait")
        if inputs.dns_readiness:
            with workflow.group("Testing DNS readiness"):
                try:
                    DnsCheck(self.executor, self.cfg, sleep=self.sleep).run()
                except DnsCheckError as err:
                    raise SetupError(str(err)) from err
        logger.info("KubeSolo setup completed successfully")
        return report
