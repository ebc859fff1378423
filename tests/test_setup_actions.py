"""
Unit tests for the runtime, iptables and kubeconfig setup actions
"""
from actions.disable_container_runtimes import DisableContainerRuntimesAction
from actions.flush_iptables import FlushIptablesAction
from actions.publish_kubeconfig import PublishKubeconfigAction
from actions.registry import get_action_class, resolve_actions
from cli import Outcome
from services.runtimes import ServiceState
import pytest


def _by_name(results):
    return {result.name: result for result in results}


@pytest.fixture
def runtime_host(make_host):
    """Runner with docker installed, podman absent"""
    host = make_host(paths={"/usr/bin/docker", "/usr/bin/dockerd", "/usr/bin/containerd", "/usr/bin/runc"})
    host.on("systemctl stop podman", "Failed to stop podman.service: Unit podman.service not loaded.", 5)
    host.on("pkill -9 podman", "", 1)
    return host


def test_disable_runtimes(runtime_host, cfg):
    results = DisableContainerRuntimesAction(executor=runtime_host, cfg=cfg).disable()
    steps = _by_name(results)
    assert steps["stop podman"].outcome == Outcome.ABSENT
    assert steps["mask docker"].outcome == Outcome.SUCCEEDED
    assert steps["kill podman"].outcome == Outcome.ABSENT
    assert steps["backup docker"].outcome == Outcome.SUCCEEDED
    assert steps["backup podman"].outcome == Outcome.ABSENT
    assert "/usr/bin/docker.bak" in runtime_host.paths
    assert "/usr/bin/docker" not in runtime_host.paths
    assert runtime_host.ran("rm -rf /var/run/docker.sock")
    assert runtime_host.ran("ip link delete docker0")
    assert runtime_host.index("systemctl stop docker.socket") < runtime_host.index("systemctl mask docker.socket")
    assert not any(result.failed for result in results)


def test_disable_runtimes_twice(runtime_host, cfg):
    action = DisableContainerRuntimesAction(executor=runtime_host, cfg=cfg)
    action.disable()
    results = action.disable()
    assert action.execute() is True
    steps = _by_name(results)
    assert steps["backup docker"].outcome == Outcome.ABSENT
    assert steps["backup docker"].detail == "already backed up"
    assert not any(result.failed for result in results)


def test_disable_mode_disable(runtime_host, cfg):
    cfg.runtimes.disable_mode = "disable"
    DisableContainerRuntimesAction(executor=runtime_host, cfg=cfg).disable()
    assert runtime_host.ran("systemctl disable docker")
    assert not runtime_host.ran("systemctl mask")


def test_disable_records_service_states(runtime_host, cfg):
    runtime_host.on("systemctl mask podman", "Failed to mask unit: Access denied", 1)
    action = DisableContainerRuntimesAction(executor=runtime_host, cfg=cfg)
    action.disable()
    states = {service.name: service.state for service in action.services}
    assert states["docker"] == ServiceState.MASKED
    assert states["podman"] == ServiceState.INACTIVE


def test_disable_mode_leaves_services_inactive(runtime_host, cfg):
    cfg.runtimes.disable_mode = "disable"
    action = DisableContainerRuntimesAction(executor=runtime_host, cfg=cfg)
    action.disable()
    assert {service.state for service in action.services} == {ServiceState.INACTIVE}


def test_missing_bridge_is_absent(runtime_host, cfg):
    runtime_host.on("ip link", 'Cannot find device "docker0"', 1)
    steps = _by_name(DisableContainerRuntimesAction(executor=runtime_host, cfg=cfg).disable())
    assert steps["link delete docker0"].outcome == Outcome.ABSENT


def test_disable_never_raises(make_host, cfg):
    host = make_host(default=("boom: fatal error", 1))
    results = DisableContainerRuntimesAction(executor=host, cfg=cfg).disable()
    assert any(result.failed for result in results)


def test_flush_iptables_saves_snapshot_once(host, cfg):
    action = FlushIptablesAction(executor=host, cfg=cfg)
    results = action.flush()
    snapshot = cfg.iptables_snapshot
    assert host.count(f"iptables-save > {snapshot}.partial") == 1
    assert host.ran(f"mv -f {snapshot}.partial {snapshot}")
    assert snapshot in host.paths
    assert f"{snapshot}.partial" not in host.paths
    assert host.index("iptables-save") < host.index("iptables -F")
    assert host.ran("iptables -t mangle -X")
    assert host.ran("iptables -P FORWARD ACCEPT")
    assert results[0].succeeded
    results = action.flush()
    assert host.count("iptables-save") == 1
    assert results[0].outcome == Outcome.ABSENT


def test_failed_save_leaves_no_snapshot(host, cfg):
    snapshot = cfg.iptables_snapshot

    def save_fails(command):
        host.paths.add(f"{snapshot}.partial")
        return "iptables-save: command not found", 127

    host.on("iptables-save", save_fails)
    action = FlushIptablesAction(executor=host, cfg=cfg)
    results = action.flush()
    assert results[0].failed
    assert snapshot not in host.paths
    assert f"{snapshot}.partial" not in host.paths
    assert not host.ran(f"mv -f {snapshot}.partial")
    # the next setup tries again instead of trusting an empty file
    action.flush()
    assert host.count("iptables-save") == 2


def test_flush_iptables_disabled(host, cfg):
    cfg.runtimes.flush_iptables = False
    assert FlushIptablesAction(executor=host, cfg=cfg).execute() is True
    assert host.commands == []


def test_flush_failure_is_soft(host, cfg):
    host.on("iptables -t raw", "iptables: can't initialize iptables table `raw': Table does not exist", 3)
    results = FlushIptablesAction(executor=host, cfg=cfg).flush()
    failed = [result for result in results if result.outcome != Outcome.SUCCEEDED]
    assert [result.name for result in failed] == ["iptables -t raw -F", "iptables -t raw -X"]


def test_publish_kubeconfig(host, cfg, tmp_path):
    output_file = tmp_path / "output"
    env_file = tmp_path / "env"
    environ = {"GITHUB_OUTPUT": str(output_file), "GITHUB_ENV": str(env_file)}
    host.paths.add(cfg.kubeconfig_path)
    assert PublishKubeconfigAction(executor=host, cfg=cfg, environ=environ).execute() is True
    assert host.ran(f"chmod 644 {cfg.kubeconfig_path}")
    assert output_file.read_text(encoding="utf-8") == f"kubeconfig={cfg.kubeconfig_path}\n"
    assert env_file.read_text(encoding="utf-8") == f"KUBECONFIG={cfg.kubeconfig_path}\n"
    assert environ["KUBECONFIG"] == cfg.kubeconfig_path


def test_publish_before_file_exists(host, cfg):
    environ = {}
    PublishKubeconfigAction(executor=host, cfg=cfg, environ=environ).execute()
    assert not host.ran("chmod")
    assert environ["KUBECONFIG"] == cfg.kubeconfig_path


def test_registry_resolves_descriptions():
    assert get_action_class("kubesolo installation").description == "kubesolo installation"
    assert get_action_class("Disable-Container_Runtimes") is DisableContainerRuntimesAction
    classes = resolve_actions(["disable container runtimes", "flush iptables", "publish kubeconfig"])
    assert classes == [DisableContainerRuntimesAction, FlushIptablesAction, PublishKubeconfigAction]


def test_registry_unknown_action():
    with pytest.raises(ValueError, match="not found"):
        get_action_class("install docker")
