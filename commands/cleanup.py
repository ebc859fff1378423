"""Cleanup command orchestration."""
from __future__ import annotations
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, TYPE_CHECKING
from cli import CommandWrapper, FileOps, Iptables, Mount, Network, Outcome, StepResult
from libs import workflow
from libs.command import Command
from libs.config import ActionConfig
from libs.logger import get_logger
from services.runtimes import RuntimeService, ServiceState, binaries_from_config, services_from_config
from services.systemd import SystemdService
if TYPE_CHECKING:
    from services.local import LocalService
    from services.state import HandoffState
logger = get_logger(__name__)


class CleanupStrategy:
    """Decides what the post step undoes."""

    def execute(self) -> List[StepResult]:
        raise NotImplementedError("Subclasses must implement execute()")


class NullCleanup(CleanupStrategy):
    """For disposable runners: nothing is reverted."""

    def execute(self) -> List[StepResult]:
        logger.info("Cleanup disabled; skipping (runner is expected to be discarded)")
        return []


class FullRestoreCleanup(CleanupStrategy):
    """
    Remove KubeSolo and hand the runner back with its container runtimes working.
    Every step is best-effort: failures become warnings, nothing raises.
    """

    def __init__(
        self,
        executor,
        cfg: ActionConfig,
        sleep: Optional[Callable[[float], None]] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.executor = executor
        self.cfg = cfg
        self.sleep = sleep or time.sleep
        self.clock = clock or time.monotonic
        self.systemd = SystemdService(executor)
        self.services: List[RuntimeService] = []

    def execute(self) -> List[StepResult]:
        results: List[StepResult] = []
        for title, phase in (
            ("Removing KubeSolo", self.remove_kubesolo),
            ("Restoring container runtime binaries", self.restore_binaries),
            ("Restoring iptables rules", self.restore_iptables),
            ("Restarting container runtimes", self.restart_runtimes),
        ):
            with workflow.group(title):
                try:
                    results.extend(phase())
                except Exception as exc:  # pylint: disable=broad-except
                    logger.warning("%s failed: %s", title, exc)
                    results.append(StepResult(title, Outcome.FAILED, str(exc)))
        failed = [result for result in results if result.failed]
        if failed:
            logger.warning("Cleanup finished with %d failed step(s): %s", len(failed), ", ".join(r.name for r in failed))
        else:
            logger.info("Cleanup completed")
        return results

    def _run(self, name: str, command: str) -> StepResult:
        output, exit_code = self.executor.execute(command, sudo=True)
        result = StepResult.from_result(name, CommandWrapper.parse_result(output, exit_code))
        if result.failed:
            logger.warning("%s failed: %s", name, result.detail or "unknown error")
        return result

    def _exists(self, command: str) -> bool:
        output, _ = self.executor.execute(command, sudo=True)
        return FileOps.parse_exists(output)

    def remove_kubesolo(self) -> List[StepResult]:
        kubesolo = self.cfg.kubesolo
        service = kubesolo.service_name
        results: List[StepResult] = []
        if self.systemd.is_active(service):
            logger.info("Stopping %s...", service)
            results.append(self.systemd.stop(service))
        if self.systemd.is_enabled(service):
            results.append(self.systemd.disable(service))
        results.append(self.systemd.kill(service))
        self.sleep(self.cfg.waits.process_kill_settle)
        results.append(self._wait_port_release())
        results.extend(self._unmount_data_dir())
        self._warn_partial_install()
        for path in [kubesolo.data_dir, kubesolo.binary_path, kubesolo.unit_path] + list(kubesolo.remove_paths):
            results.append(self._run(f"remove {path}", FileOps().recursive().remove(path)))
        results.append(self.systemd.daemon_reload())
        return results

    def _wait_port_release(self) -> StepResult:
        port = self.cfg.kubesolo.api_port
        waits = self.cfg.waits
        start = self.clock()
        while True:
            output, _ = self.executor.execute(Network().port(port).listening(), sudo=True)
            if not Network.parse_listening(output, port):
                return StepResult(f"release port {port}", Outcome.SUCCEEDED)
            if self.clock() - start >= waits.port_release_timeout:
                logger.warning("Port %s still bound after %ss", port, waits.port_release_timeout)
                return StepResult(f"release port {port}", Outcome.FAILED, "still listening")
            self.sleep(waits.port_release_interval)

    def _unmount_data_dir(self) -> List[StepResult]:
        output, _ = self.executor.execute(Mount().targets(), sudo=True)
        results = []
        for target in Mount.mounts_under(output, self.cfg.kubesolo.data_dir):
            output, exit_code = self.executor.execute(Mount().unmount(target), sudo=True)
            if exit_code != 0:
                output, exit_code = self.executor.execute(Mount().lazy().unmount(target), sudo=True)
            if exit_code == 0:
                results.append(StepResult(f"unmount {target}", Outcome.SUCCEEDED))
            else:
                logger.warning("Failed to unmount %s: %s", target, output or "no output")
                results.append(StepResult(f"unmount {target}", Outcome.FAILED, output))
        return results

    def _warn_partial_install(self) -> None:
        kubesolo = self.cfg.kubesolo
        if not self._exists(FileOps().exists(kubesolo.unit_path)):
            return
        missing = []
        if not self._exists(FileOps().exists(kubesolo.binary_path)):
            missing.append(kubesolo.binary_path)
        if not self._exists(FileOps().is_dir(kubesolo.data_dir)):
            missing.append(kubesolo.data_dir)
        if missing:
            logger.warning("Partial KubeSolo installation detected (missing %s); removing what is left", ", ".join(missing))

    def restore_binaries(self) -> List[StepResult]:
        results = []
        for binary in binaries_from_config(self.cfg.runtimes):
            result = binary.restore(self.executor)
            if result.failed:
                logger.warning("Failed to restore %s: %s", binary.original, result.detail)
            elif result.succeeded:
                logger.info("Restored %s", binary.original)
            results.append(result)
        return results

    def restore_iptables(self) -> List[StepResult]:
        snapshot = self.cfg.iptables_snapshot
        if not self._exists(FileOps().exists(snapshot)):
            logger.info("No iptables snapshot to restore")
            return [StepResult("restore iptables", Outcome.ABSENT)]
        results = [self._run("restore iptables", Iptables().restore(snapshot))]
        results.append(self._run(f"remove {snapshot}", FileOps().remove(snapshot)))
        return results

    def restart_runtimes(self) -> List[StepResult]:
        services = self.services = services_from_config(self.cfg.runtimes)
        results = []
        for service in services:
            step = self.systemd.unmask(service.name)
            if step.outcome != Outcome.FAILED:
                service.state = ServiceState.UNMASKED
            results.append(step)
        if self.cfg.runtimes.disable_mode == "disable":
            results.extend(self.systemd.enable(service.name) for service in services)
        results.append(self.systemd.daemon_reload())
        for service in services:
            results.append(self.systemd.start(service.name))
            if self.systemd.is_active(service.name):
                service.state = ServiceState.ACTIVE
                logger.info("%s restored", service.name)
            else:
                service.state = ServiceState.INACTIVE
                logger.warning("%s failed to start (may not be installed)", service.name)
        return results


def make_cleanup_strategy(cfg: ActionConfig, executor, cleanup: Optional[bool] = None, **kwargs) -> CleanupStrategy:
    """Full restore unless cleanup is off (the cleanup input when not given)."""
    enabled = cfg.inputs.cleanup if cleanup is None else cleanup
    if enabled:
        return FullRestoreCleanup(executor, cfg, **kwargs)
    return NullCleanup()


@dataclass
class Cleanup(Command):
    """Manual full restore, independent of the handoff flag."""
    executor: Optional["LocalService"] = field(default=None)
    state: Optional["HandoffState"] = field(default=None)

    def run(self, args):
        """Execute the cleanup workflow."""
        logger.info("=" * 50)
        logger.info("Cleaning Up KubeSolo")
        logger.info("=" * 50)
        FullRestoreCleanup(self.executor, self.cfg).execute()
        if self.state:
            self.state.clear()
