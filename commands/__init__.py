"""High-level CLI command implementations."""
from .setup import Setup, SetupError  # noqa: F401
from .cleanup import Cleanup, CleanupStrategy, FullRestoreCleanup, NullCleanup, make_cleanup_strategy  # noqa: F401
from .post import Post  # noqa: F401
from .status import Status  # noqa: F401
__all__ = [
    "Setup",
    "SetupError",
    "Cleanup",
    "CleanupStrategy",
    "FullRestoreCleanup",
    "NullCleanup",
    "make_cleanup_strategy",
    "Post",
    "Status",
]
