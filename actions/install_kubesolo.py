"""
Install KubeSolo action
"""
import json
import logging
from cli import Curl, FileOps, Tar, Uname
from services.systemd import SystemdService
from .base import Action, InstallError, UnsupportedArchitectureError, VersionResolutionError
logger = logging.getLogger(__name__)

ARCHITECTURES = {
    "x86_64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
}

UNIT_TEMPLATE = """[Unit]
Description=KubeSolo - Lightweight Kubernetes
Documentation=https://github.com/{repo}
After=network-online.target
Wants=network-online.target

[Service]
Type=notify
Restart=on-failure
RestartSec=5s
ExecStart={exec_start}
KillMode=process
Delegate=yes
LimitNOFILE=1048576
LimitNPROC=infinity
LimitCORE=infinity
TasksMax=infinity

[Install]
WantedBy=multi-user.target
"""


def map_architecture(machine: str) -> str:
    """Translate `uname -m` output into the release asset token"""
    arch = ARCHITECTURES.get(machine.strip())
    if arch is None:
        raise UnsupportedArchitectureError(f"Unsupported architecture: {machine.strip() or 'unknown'}")
    return arch


def render_unit(cfg) -> str:
    """Service definition for the installed binary"""
    kubesolo = cfg.kubesolo
    exec_start = f"{kubesolo.binary_path} --path={kubesolo.data_dir}"
    if cfg.inputs.local_storage_shared_path:
        exec_start += f" --local-storage-shared-path={cfg.inputs.local_storage_shared_path}"
    return UNIT_TEMPLATE.format(repo=kubesolo.release_repo, exec_start=exec_start)


class InstallKubeSoloAction(Action):
    """Action to download KubeSolo and register it as a system service"""
    description = "kubesolo installation"

    def execute(self) -> bool:
        kubesolo = self.cfg.kubesolo
        version = self.resolve_version(self.cfg.inputs.version)
        arch = self.detect_architecture()
        url = kubesolo.download_url(version, arch)
        logger.info("Installing KubeSolo %s (%s)...", version, arch)
        self._step(
            f"download {url}",
            Curl().url(url).output(kubesolo.archive_path).download(),
            timeout=300,
        )
        self._step("extract archive", Tar().archive(kubesolo.archive_path).directory(kubesolo.download_dir).extract())
        self._step(
            "install binary",
            FileOps().move(f"{kubesolo.download_dir}/kubesolo", kubesolo.binary_path),
        )
        self._step("chmod binary", FileOps().chmod(kubesolo.binary_path, "+x"))
        self._step("create data directory", FileOps().mkdir(kubesolo.data_dir))
        self._remove_stale_cni()
        self._step("write unit file", FileOps().write(kubesolo.unit_path, render_unit(self.cfg)))
        systemd = SystemdService(self.executor)
        for result in (
            systemd.daemon_reload(),
            systemd.enable(kubesolo.service_name),
            systemd.start(kubesolo.service_name),
        ):
            if not result.succeeded:
                raise InstallError(f"{result.name} failed: {result.detail or 'unknown error'}")
        output, exit_code = self.executor.execute(FileOps().remove(kubesolo.archive_path), sudo=True)
        if exit_code != 0:
            logger.warning("Failed to remove %s: %s", kubesolo.archive_path, output)
        logger.info("KubeSolo service started")
        return True

    def resolve_version(self, requested: str) -> str:
        """Return requested unchanged unless it is "latest", which is looked up on the release API"""
        if requested != "latest":
            return requested
        url = self.cfg.kubesolo.latest_release_url
        logger.info("Resolving latest KubeSolo release from %s", url)
        output, exit_code = self.executor.execute(Curl().url(url).header("Accept: application/vnd.github+json").fetch(), timeout=60)
        if exit_code != 0 or not output:
            raise VersionResolutionError(f"Failed to query {url}: {output or 'no output'}")
        try:
            tag = json.loads(output).get("tag_name") or ""
        except (ValueError, AttributeError) as err:
            raise VersionResolutionError(f"Unexpected release metadata from {url}") from err
        if not tag:
            raise VersionResolutionError("Could not determine latest KubeSolo version")
        logger.info("Latest KubeSolo version: %s", tag)
        return tag

    def detect_architecture(self) -> str:
        output, exit_code = self.executor.execute(Uname.machine())
        if exit_code != 0 or not output:
            raise UnsupportedArchitectureError("Could not detect machine architecture")
        return map_architecture(output)

    def _remove_stale_cni(self) -> None:
        cni_dir = self.cfg.kubesolo.cni_bin_dir
        output, _ = self.executor.execute(FileOps().is_dir(cni_dir), sudo=True)
        if FileOps.parse_exists(output):
            logger.info("Removing existing CNI plugins in %s", cni_dir)
            self._step("remove stale CNI plugins", FileOps().recursive().remove(cni_dir))

    def _step(self, name: str, command: str, timeout=None) -> None:
        output, exit_code = self.executor.execute(command, timeout=timeout, sudo=True)
        if exit_code != 0:
            raise InstallError(f"Failed to {name}: {(output or 'no output')[-200:]}")
