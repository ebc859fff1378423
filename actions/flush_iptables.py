"""
Flush iptables action
"""
import logging
from typing import List
from cli import CommandWrapper, FileOps, Iptables, Outcome, StepResult
from .base import Action
logger = logging.getLogger(__name__)


class FlushIptablesAction(Action):
    """Snapshot the ruleset, then flush leftover runtime chains so the cluster network starts clean"""
    description = "flush iptables"

    def execute(self) -> bool:
        if not self.cfg.runtimes.flush_iptables:
            logger.info("iptables flush disabled in configuration")
            return True
        self.flush()
        return True

    def flush(self) -> List[StepResult]:
        results = [self._snapshot()]
        logger.info("Flushing iptables rules...")
        iptables = Iptables()
        for command in iptables.flush_all() + iptables.accept_policies():
            output, exit_code = self.executor.execute(command, sudo=True)
            result = StepResult(command.replace(" 2>&1", ""), CommandWrapper.classify(output, exit_code))
            if result.failed:
                result.detail = output
                logger.warning("%s failed: %s", result.name, output or "no output")
            results.append(result)
        return results

    def _snapshot(self) -> StepResult:
        """Save the current ruleset once; a second setup must not overwrite the pristine copy"""
        snapshot = self.cfg.iptables_snapshot
        output, _ = self.executor.execute(FileOps().exists(snapshot), sudo=True)
        if FileOps.parse_exists(output):
            logger.info("iptables snapshot %s already present", snapshot)
            return StepResult("save iptables", Outcome.ABSENT, "snapshot exists")
        self.executor.execute(FileOps().mkdir(self.cfg.state_dir), sudo=True)
        # The redirect creates the file even when iptables-save fails
        partial = f"{snapshot}.partial"
        output, exit_code = self.executor.execute(Iptables().save(partial), sudo=True)
        if exit_code == 0:
            output, exit_code = self.executor.execute(FileOps().move(partial, snapshot), sudo=True)
        if exit_code != 0:
            self.executor.execute(FileOps().remove(partial), sudo=True)
            logger.warning("Failed to save iptables rules to %s: %s", snapshot, output or "no output")
            return StepResult("save iptables", Outcome.FAILED, output)
        logger.info("Saved iptables rules to %s", snapshot)
        return StepResult("save iptables", Outcome.SUCCEEDED)
