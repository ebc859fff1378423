"""
Base Action class for runner setup steps
"""
import logging
from typing import Optional, TYPE_CHECKING
if TYPE_CHECKING:
    from services.local import LocalService
    from libs.config import ActionConfig
logger = logging.getLogger(__name__)


class ActionError(RuntimeError):
    """Raised when a setup step cannot continue"""


class UnsupportedArchitectureError(ActionError):
    """Raised when the host architecture has no release asset"""


class VersionResolutionError(ActionError):
    """Raised when "latest" cannot be turned into a concrete tag"""


class InstallError(ActionError):
    """Raised when download, extraction or service registration fails"""


class Action:
    """Base class for runner setup actions"""
    description: str = ""

    def __init__(
        self,
        executor: Optional["LocalService"] = None,
        cfg: Optional["ActionConfig"] = None,
    ):
        """
        Initialize action with services
        Args:
            executor: Service for executing commands on the runner
            cfg: Action configuration
        """
        self.executor = executor
        self.cfg = cfg

    def execute(self) -> bool:
        """
        Execute the action
        Returns:
            True if successful, False otherwise
        Raises:
            ActionError: on a failure that must stop setup
        """
        raise NotImplementedError("Subclasses must implement execute()")
