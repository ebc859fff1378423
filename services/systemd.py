"""
Systemd Service - executes SystemCtl commands and reports each as a StepResult
"""
import logging
from typing import Optional
from cli import CommandWrapper, StepResult, SystemCtl
logger = logging.getLogger(__name__)

class SystemdService:
    """Service-manager operations on the local host; every mutation runs as root"""
    def __init__(self, executor):
        """
        Args:
            executor: LocalService (or anything with the same execute signature)
        """
        self.executor = executor

    def _run(self, step: str, command: str) -> StepResult:
        output, exit_code = self.executor.execute(command, sudo=True)
        return StepResult.from_result(step, CommandWrapper.parse_result(output, exit_code))

    def stop(self, unit: str) -> StepResult:
        return self._run(f"stop {unit}", SystemCtl().service(unit).stop())

    def start(self, unit: str) -> StepResult:
        return self._run(f"start {unit}", SystemCtl().service(unit).start())

    def enable(self, unit: str) -> StepResult:
        return self._run(f"enable {unit}", SystemCtl().service(unit).enable())

    def disable(self, unit: str) -> StepResult:
        return self._run(f"disable {unit}", SystemCtl().service(unit).disable())

    def mask(self, unit: str) -> StepResult:
        return self._run(f"mask {unit}", SystemCtl().service(unit).mask())

    def unmask(self, unit: str) -> StepResult:
        return self._run(f"unmask {unit}", SystemCtl().service(unit).unmask())

    def kill(self, unit: str, signal: str = "SIGKILL") -> StepResult:
        return self._run(f"kill {unit}", SystemCtl().service(unit).signal(signal).kill())

    def daemon_reload(self) -> StepResult:
        return self._run("daemon-reload", SystemCtl().daemon_reload())

    def is_active(self, unit: str) -> bool:
        output, exit_code = self.executor.execute(SystemCtl().service(unit).is_active(), sudo=True)
        return exit_code == 0 and SystemCtl.parse_is_active(output)

    def is_enabled(self, unit: str) -> bool:
        output, exit_code = self.executor.execute(SystemCtl().service(unit).is_enabled(), sudo=True)
        return exit_code == 0 and SystemCtl.parse_is_enabled(output)

    def status(self, unit: str) -> Optional[str]:
        output, _ = self.executor.execute(SystemCtl().service(unit).status(), sudo=True)
        return output
