"""Post-job command: undo setup if, and only if, setup ran."""
from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING
from cli import StepResult
from libs.command import Command
from libs.logger import get_logger
from .cleanup import make_cleanup_strategy
if TYPE_CHECKING:
    from services.local import LocalService
    from services.state import HandoffState
logger = get_logger(__name__)


@dataclass
class Post(Command):
    """Reads the handoff flag and runs the configured cleanup strategy."""
    executor: Optional["LocalService"] = field(default=None)
    state: Optional["HandoffState"] = field(default=None)

    def run(self, args):
        self.execute()

    def execute(self) -> List[StepResult]:
        if not self.state.setup_ran():
            logger.info("Setup did not run in this job; nothing to clean up")
            return []
        logger.info("=" * 50)
        logger.info("Post-job cleanup")
        logger.info("=" * 50)
        # Either side can switch cleanup off: the setup input or the post flag
        cleanup = self.cfg.inputs.cleanup and self.state.cleanup_requested() is not False
        if not cleanup and self.cfg.inputs.cleanup:
            logger.info("Cleanup was disabled when setup ran")
        results = make_cleanup_strategy(self.cfg, self.executor, cleanup=cleanup).execute()
        self.state.clear()
        return results
