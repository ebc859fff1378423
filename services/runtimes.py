"""
Conflicting container runtime inventory - services and renamed binaries
"""
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import List
from cli import FileOps, Outcome, StepResult
from libs.config import RuntimesConfig
logger = logging.getLogger(__name__)


class ServiceState(Enum):
    """Last known lifecycle state of a runtime service"""
    UNKNOWN = "unknown"
    ACTIVE = "active"
    INACTIVE = "inactive"
    MASKED = "masked"
    UNMASKED = "unmasked"


@dataclass
class RuntimeService:
    """A system service that conflicts with KubeSolo"""
    name: str
    state: ServiceState = ServiceState.UNKNOWN


@dataclass
class BackedUpBinary:
    """Executable renamed aside so a runtime cannot be started; at most one of the two paths exists"""
    original: str
    backup: str

    @property
    def name(self) -> str:
        return os.path.basename(self.original)

    @staticmethod
    def _exists(executor, path: str) -> bool:
        output, _ = executor.execute(FileOps().exists(path), sudo=True)
        return FileOps.parse_exists(output)

    def _move(self, executor, step: str, source: str, destination: str) -> StepResult:
        output, exit_code = executor.execute(FileOps().move(source, destination), sudo=True)
        if exit_code == 0:
            return StepResult(step, Outcome.SUCCEEDED)
        return StepResult(step, Outcome.FAILED, (output or "mv failed")[-200:])

    def backup_binary(self, executor) -> StepResult:
        """Rename original to backup; already renamed or never installed is ABSENT"""
        step = f"backup {self.name}"
        if not self._exists(executor, self.original):
            detail = "already backed up" if self._exists(executor, self.backup) else "not installed"
            return StepResult(step, Outcome.ABSENT, detail)
        if self._exists(executor, self.backup):
            # A package reinstalled the binary after an earlier backup; keep the older copy
            logger.warning("Both %s and %s exist; leaving both in place", self.original, self.backup)
            return StepResult(step, Outcome.FAILED, "backup already present")
        return self._move(executor, step, self.original, self.backup)

    def restore(self, executor) -> StepResult:
        """Rename backup back to original; no backup is ABSENT"""
        step = f"restore {self.name}"
        if not self._exists(executor, self.backup):
            return StepResult(step, Outcome.ABSENT, "no backup")
        return self._move(executor, step, self.backup, self.original)


def services_from_config(runtimes: RuntimesConfig) -> List[RuntimeService]:
    return [RuntimeService(name) for name in runtimes.services]


def binaries_from_config(runtimes: RuntimesConfig) -> List[BackedUpBinary]:
    """Build the binary inventory from configuration"""
    binaries = []
    for name in runtimes.binaries:
        original = f"{runtimes.binary_dir.rstrip('/')}/{name}"
        binaries.append(BackedUpBinary(original=original, backup=f"{original}{runtimes.backup_suffix}"))
    return binaries
