"""
Services module - local command execution, service manager and handoff state
"""
from .local import LocalService
from .systemd import SystemdService
from .state import ActionsStateStore, FileStateStore, HandoffState, make_state_store
from .runtimes import BackedUpBinary, RuntimeService, ServiceState, binaries_from_config, services_from_config
__all__ = [
    "LocalService",
    "SystemdService",
    "ActionsStateStore",
    "FileStateStore",
    "HandoffState",
    "make_state_store",
    "BackedUpBinary",
    "RuntimeService",
    "ServiceState",
    "binaries_from_config",
    "services_from_config",
]
