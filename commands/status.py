"""Status command orchestration."""
from dataclasses import dataclass, field
from typing import Optional, TYPE_CHECKING
from cli import FileOps
from libs.command import Command
from libs.logger import get_logger
from orchestration import collect_diagnostics
from services.runtimes import binaries_from_config
if TYPE_CHECKING:
    from services.local import LocalService
    from services.state import HandoffState
logger = get_logger(__name__)


@dataclass
class Status(Command):
    """Status command class."""
    executor: Optional["LocalService"] = field(default=None)
    state: Optional["HandoffState"] = field(default=None)

    def run(self, args):
        """Show KubeSolo service state and what cleanup would restore."""
        logger.info("=" * 50)
        logger.info("KubeSolo Status")
        logger.info("=" * 50)
        collect_diagnostics(self.executor, self.cfg)
        logger.info("--- handoff ---")
        logger.info("Setup ran: %s", "yes" if self.state and self.state.setup_ran() else "no")
        logger.info("--- backed-up binaries ---")
        found = False
        for binary in binaries_from_config(self.cfg.runtimes):
            output, _ = self.executor.execute(FileOps().exists(binary.backup), sudo=True)
            if FileOps.parse_exists(output):
                logger.info("  %s", binary.backup)
                found = True
        if not found:
            logger.info("  none")
        output, _ = self.executor.execute(FileOps().exists(self.cfg.iptables_snapshot), sudo=True)
        logger.info("iptables snapshot: %s", self.cfg.iptables_snapshot if FileOps.parse_exists(output) else "none")
