"""
Configuration data model - class-based representation of setup-kubesolo.yaml
plus the action inputs passed by the runner
"""
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

TRUE_VALUES = ("true", "True", "TRUE")
FALSE_VALUES = ("false", "False", "FALSE")


def _input_value(environ: Mapping[str, str], name: str) -> Optional[str]:
    """Look up an action input; runners use INPUT_<NAME> with hyphens kept, composite steps with underscores."""
    upper = name.upper()
    for key in (f"INPUT_{upper}", f"INPUT_{upper.replace('-', '_')}"):
        value = environ.get(key)
        if value is not None and value.strip() != "":
            return value.strip()
    return None


def parse_bool(name: str, value: str) -> bool:
    """Parse a boolean input the way the actions toolkit does (YAML 1.2 core schema)"""
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(f"Input '{name}' does not meet YAML 1.2 \"Core Schema\" specification: {value}")
@dataclass

class InputsConfig:
    """Action inputs"""
    version: str = "latest"
    wait_for_ready: bool = True
    timeout: int = 60
    dns_readiness: bool = True
    local_storage_shared_path: str = ""
    cleanup: bool = True
    @classmethod

    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "InputsConfig":
        """Read inputs from INPUT_* environment variables, falling back to defaults"""
        if environ is None:
            environ = os.environ
        inputs = cls()
        version = _input_value(environ, "version")
        if version:
            inputs.version = version
        for name, attr in (
            ("wait-for-ready", "wait_for_ready"),
            ("dns-readiness", "dns_readiness"),
            ("cleanup", "cleanup"),
        ):
            value = _input_value(environ, name)
            if value is not None:
                setattr(inputs, attr, parse_bool(name, value))
        timeout = _input_value(environ, "timeout")
        if timeout is not None:
            try:
                inputs.timeout = int(timeout)
            except ValueError as err:
                raise ValueError(f"Input 'timeout' must be an integer number of seconds: {timeout}") from err
        shared_path = _input_value(environ, "local-storage-shared-path")
        if shared_path:
            inputs.local_storage_shared_path = shared_path
        return inputs
@dataclass

class RuntimesConfig:  # pylint: disable=too-many-instance-attributes
    """Conflicting container runtimes neutralized before install"""
    services: List[str] = field(default_factory=lambda: ["docker.socket", "docker", "containerd", "podman"])
    binaries: List[str] = field(default_factory=lambda: [
        "docker", "dockerd", "containerd", "containerd-shim", "containerd-shim-runc-v2", "runc", "podman",
    ])
    binary_dir: str = "/usr/bin"
    processes: List[str] = field(default_factory=lambda: ["dockerd", "containerd", "podman"])
    sockets: List[str] = field(default_factory=lambda: [
        "/var/run/docker.sock", "/var/run/containerd", "/run/containerd", "/run/docker.sock",
    ])
    bridge_interface: Optional[str] = "docker0"
    # "mask" survives reboot; "disable" only stops and disables
    disable_mode: str = "mask"
    flush_iptables: bool = True
    backup_suffix: str = ".bak"
@dataclass

class KubeSoloConfig:  # pylint: disable=too-many-instance-attributes
    """Installed target layout"""
    service_name: str = "kubesolo"
    binary_path: str = "/usr/local/bin/kubesolo"
    data_dir: str = "/var/lib/kubesolo"
    unit_path: str = "/etc/systemd/system/kubesolo.service"
    api_port: int = 6443
    release_repo: str = "portainer/kubesolo"
    download_dir: str = "/tmp"
    cni_bin_dir: str = "/opt/cni/bin"
    remove_paths: List[str] = field(default_factory=lambda: [
        "/opt/cni", "/var/lib/cni", "/etc/cni", "/var/log/pods", "/var/log/containers",
    ])

    @property
    def kubeconfig_path(self) -> str:
        """Generated admin credential file"""
        return f"{self.data_dir}/pki/admin/admin.kubeconfig"

    @property
    def kubeconfig_dir(self) -> str:
        return f"{self.data_dir}/pki/admin"

    @property
    def archive_path(self) -> str:
        return f"{self.download_dir}/kubesolo.tar.gz"

    @property
    def latest_release_url(self) -> str:
        return f"https://api.github.com/repos/{self.release_repo}/releases/latest"

    def download_url(self, version: str, arch: str) -> str:
        """Release asset URL for a concrete version tag and architecture token"""
        return (
            f"https://github.com/{self.release_repo}/releases/download/"
            f"{version}/kubesolo-{version}-linux-{arch}.tar.gz"
        )
@dataclass

class DnsConfig:
    """In-cluster DNS probe"""
    namespace: str = "kube-system"
    coredns_pattern: str = r"coredns.*1/1.*Running"
    probe_pod: str = "dns-test"
    probe_image: str = "public.ecr.aws/docker/library/busybox:stable"
    lookup_name: str = "kubernetes.default.svc.cluster.local"
@dataclass

class WaitsConfig:  # pylint: disable=too-many-instance-attributes
    """Wait/retry configuration"""
    poll_interval: int = 5
    port_release_timeout: int = 30
    port_release_interval: int = 1
    process_kill_settle: int = 2
    coredns_attempts: int = 60
    coredns_sleep: int = 2
    dns_attempts: int = 10
    dns_sleep: int = 2
    probe_ready_timeout: int = 60
    journal_lines: int = 100
@dataclass

class ActionConfig:  # pylint: disable=too-many-instance-attributes
    """Main configuration class"""
    inputs: InputsConfig = field(default_factory=InputsConfig)
    runtimes: RuntimesConfig = field(default_factory=RuntimesConfig)
    kubesolo: KubeSoloConfig = field(default_factory=KubeSoloConfig)
    dns: DnsConfig = field(default_factory=DnsConfig)
    waits: WaitsConfig = field(default_factory=WaitsConfig)
    actions: List[str] = field(default_factory=lambda: [
        "disable container runtimes",
        "flush iptables",
        "kubesolo installation",
        "publish kubeconfig",
    ])
    state_dir: str = "/var/tmp/setup-kubesolo"
    use_sudo: bool = True
    verbose: bool = False
    @classmethod

    def from_dict(
        cls,
        data: Optional[Dict[str, Any]],
        inputs: Optional[InputsConfig] = None,
        verbose: bool = False,
    ) -> "ActionConfig":
        """Create ActionConfig from dictionary (loaded from YAML)"""
        data = data or {}
        runtimes_data = data.get("runtimes", {}) or {}
        kubesolo_data = data.get("kubesolo", {}) or {}
        dns_data = data.get("dns", {}) or {}
        waits_data = data.get("waits", {}) or {}

        runtimes = RuntimesConfig(**_known(RuntimesConfig, runtimes_data))
        if runtimes.disable_mode not in ("mask", "disable"):
            raise ValueError(f"runtimes.disable_mode must be 'mask' or 'disable', got '{runtimes.disable_mode}'")
        kubesolo = KubeSoloConfig(**_known(KubeSoloConfig, kubesolo_data))
        dns = DnsConfig(**_known(DnsConfig, dns_data))
        waits = WaitsConfig(**_known(WaitsConfig, waits_data))

        cfg = cls(
            inputs=inputs or InputsConfig(),
            runtimes=runtimes,
            kubesolo=kubesolo,
            dns=dns,
            waits=waits,
            state_dir=data.get("state_dir", "/var/tmp/setup-kubesolo"),
            use_sudo=data.get("use_sudo", True),
            verbose=verbose,
        )
        if "actions" in data:
            cfg.actions = list(data["actions"] or [])
        return cfg

    # Convenience properties
    @property
    def kubeconfig_path(self) -> str:
        """Return kubeconfig path."""
        return self.kubesolo.kubeconfig_path

    @property
    def service_name(self) -> str:
        """Return KubeSolo unit name."""
        return self.kubesolo.service_name

    @property
    def iptables_snapshot(self) -> str:
        """Ruleset saved before flushing, restored by cleanup."""
        return f"{self.state_dir}/iptables.rules"


def _known(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only keys that are fields of the dataclass, mapping dashes to underscores"""
    names = set(cls.__dataclass_fields__)
    result = {}
    for key, value in data.items():
        attr = key.replace("-", "_")
        if attr not in names:
            raise ValueError(f"Unknown {cls.__name__} option '{key}'")
        result[attr] = value
    return result
