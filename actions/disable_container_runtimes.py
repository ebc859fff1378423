"""
Disable container runtimes action
"""
import logging
from typing import List
from cli import CommandWrapper, FileOps, Network, Outcome, Process, StepResult
from services.runtimes import RuntimeService, ServiceState, binaries_from_config, services_from_config
from services.systemd import SystemdService
from .base import Action
logger = logging.getLogger(__name__)


class DisableContainerRuntimesAction(Action):
    """Stop, mask and rename every preinstalled runtime that would fight KubeSolo for containerd"""
    description = "disable container runtimes"

    def __init__(self, executor=None, cfg=None):
        super().__init__(executor=executor, cfg=cfg)
        self.services: List[RuntimeService] = []

    def execute(self) -> bool:
        self.disable()
        return True

    def disable(self) -> List[StepResult]:
        """Best-effort; safe to repeat. Returns one StepResult per sub-step."""
        runtimes = self.cfg.runtimes
        systemd = SystemdService(self.executor)
        results: List[StepResult] = []
        logger.info("Disabling conflicting container runtimes...")
        self.services = services_from_config(runtimes)
        for service in self.services:
            stopped = systemd.stop(service.name)
            results.append(stopped)
            if stopped.outcome != Outcome.FAILED:
                service.state = ServiceState.INACTIVE
            if runtimes.disable_mode == "mask":
                step = systemd.mask(service.name)
                if step.succeeded:
                    service.state = ServiceState.MASKED
            else:
                step = systemd.disable(service.name)
            results.append(step)
            logger.debug("%s: %s", service.name, service.state.value)
        for name in runtimes.processes:
            output, exit_code = self.executor.execute(Process().signal(9).pkill(name), sudo=True)
            outcome = Process.parse_pkill(output, exit_code)
            results.append(StepResult(f"kill {name}", outcome, None if outcome != Outcome.FAILED else output))
        for binary in binaries_from_config(runtimes):
            results.append(binary.backup_binary(self.executor))
        for socket in runtimes.sockets:
            output, exit_code = self.executor.execute(FileOps().recursive().remove(socket), sudo=True)
            results.append(StepResult(f"remove {socket}", CommandWrapper.classify(output, exit_code), None))
        if runtimes.bridge_interface:
            results.extend(self._remove_bridge(runtimes.bridge_interface))
        self._report(results)
        return results

    def _remove_bridge(self, interface: str) -> List[StepResult]:
        results = []
        for step, command in (
            (f"link down {interface}", Network().interface(interface).link_down()),
            (f"link delete {interface}", Network().interface(interface).link_delete()),
        ):
            output, exit_code = self.executor.execute(command, sudo=True)
            # ip reports a missing link as 'Cannot find device'
            if exit_code != 0 and output and "cannot find device" in output.lower():
                results.append(StepResult(step, Outcome.ABSENT))
            else:
                results.append(StepResult(step, CommandWrapper.classify(output, exit_code), None))
        return results

    @staticmethod
    def _report(results: List[StepResult]) -> None:
        for result in results:
            if result.failed:
                logger.warning("%s failed: %s", result.name, result.detail or "unknown error")
            elif result.outcome == Outcome.ABSENT:
                logger.debug("%s: nothing to do", result.name)
            else:
                logger.info("%s: done", result.name)
