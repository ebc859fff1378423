"""
Actions for runner setup
"""
from .base import Action, ActionError, InstallError, UnsupportedArchitectureError, VersionResolutionError
from .disable_container_runtimes import DisableContainerRuntimesAction
from .flush_iptables import FlushIptablesAction
from .install_kubesolo import InstallKubeSoloAction
from .publish_kubeconfig import PublishKubeconfigAction

__all__ = [
    "Action",
    "ActionError",
    "InstallError",
    "UnsupportedArchitectureError",
    "VersionResolutionError",
    "DisableContainerRuntimesAction",
    "FlushIptablesAction",
    "InstallKubeSoloAction",
    "PublishKubeconfigAction",
]
