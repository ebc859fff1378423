"""
Unit tests for command builders and output parsers
"""
import pytest
from cli import (
    CommandWrapper,
    Curl,
    ErrorType,
    FileOps,
    Iptables,
    Journalctl,
    Kubectl,
    Mount,
    Network,
    Outcome,
    Process,
    StepResult,
    SystemCtl,
    Tar,
)


def test_systemctl_commands():
    """Test systemctl command generation"""
    assert SystemCtl().service("kubesolo").kill() == "systemctl kill --signal=SIGKILL kubesolo 2>&1"
    assert SystemCtl().service("docker.socket").mask() == "systemctl mask docker.socket 2>&1"
    assert SystemCtl().service("kubesolo").status() == "systemctl status kubesolo --no-pager 2>&1"
    assert SystemCtl().daemon_reload() == "systemctl daemon-reload 2>&1"


def test_systemctl_requires_service():
    with pytest.raises(ValueError):
        SystemCtl().start()


@pytest.mark.parametrize("output,expected", [
    ("active", True),
    ("active\n", True),
    ("inactive", False),
    ("activating", False),
    ("", False),
    (None, False),
])

def test_parse_is_active(output, expected):
    assert SystemCtl.parse_is_active(output) is expected


def test_parse_is_enabled():
    assert SystemCtl.parse_is_enabled("enabled") is True
    assert SystemCtl.parse_is_enabled("disabled") is False
    assert SystemCtl.parse_is_enabled("masked") is False


def test_journalctl_tail():
    assert Journalctl().unit("kubesolo").lines(100).tail() == "journalctl -u kubesolo -n 100 --no-pager 2>&1"


def test_file_ops():
    assert FileOps().recursive().remove("/var/lib/kubesolo") == "rm -rf /var/lib/kubesolo 2>&1"
    assert FileOps().move("/usr/bin/docker", "/usr/bin/docker.bak") == "mv -f /usr/bin/docker /usr/bin/docker.bak 2>&1"
    assert FileOps().exists("/etc/x") == "test -f /etc/x && echo exists || echo not_found 2>&1"
    assert FileOps().is_dir("/opt/cni/bin").startswith("test -d /opt/cni/bin")


def test_file_write_escapes_single_quotes():
    command = FileOps().write("/tmp/f", "it's")
    assert command == "printf '%s' 'it'\"'\"'s' > /tmp/f 2>&1"


def test_parse_exists():
    assert FileOps.parse_exists("exists") is True
    assert FileOps.parse_exists("sudo: unable to resolve host x\nexists\n") is True
    assert FileOps.parse_exists("not_found") is False
    assert FileOps.parse_exists(None) is False


def test_curl_download_requires_output():
    with pytest.raises(ValueError):
        Curl().url("https://example.com/a.tar.gz").download()


def test_curl_download_and_fetch():
    download = Curl().url("https://example.com/a.tar.gz").output("/tmp/a.tar.gz").download()
    assert download == "curl -f -s -S -L -o /tmp/a.tar.gz https://example.com/a.tar.gz 2>&1"
    fetch = Curl().url("https://api.github.com/repos/x/y/releases/latest").fetch()
    assert fetch == "curl -f -s -S -L https://api.github.com/repos/x/y/releases/latest"


def test_tar_extract():
    assert Tar().archive("/tmp/kubesolo.tar.gz").directory("/tmp").extract() == "tar -xzf /tmp/kubesolo.tar.gz -C /tmp 2>&1"


def test_process_pkill():
    assert Process().signal(9).pkill("dockerd") == "pkill -9 dockerd 2>&1"
    assert Process.parse_pkill("", 0) == Outcome.SUCCEEDED
    assert Process.parse_pkill("", 1) == Outcome.ABSENT
    assert Process.parse_pkill("pkill: bad", 2) == Outcome.FAILED


def test_iptables_flush_all_covers_every_table():
    commands = Iptables().flush_all()
    assert "iptables -F 2>&1" in commands
    assert "iptables -t nat -X 2>&1" in commands
    assert "iptables -t raw -F 2>&1" in commands
    assert len(commands) == 8
    assert Iptables().accept_policies() == [
        "iptables -P INPUT ACCEPT 2>&1",
        "iptables -P FORWARD ACCEPT 2>&1",
        "iptables -P OUTPUT ACCEPT 2>&1",
    ]


def test_network_listening():
    assert Network().port(6443).listening() == "ss -H -tln 'sport = :6443' 2>&1"
    assert Network.parse_listening("LISTEN 0 4096 *:6443 *:*", 6443) is True
    assert Network.parse_listening("LISTEN 0 4096 [::]:6443 [::]:*", 6443) is True
    assert Network.parse_listening("LISTEN 0 4096 *:16443 *:*", 6443) is False
    assert Network.parse_listening("", 6443) is False


def test_network_requires_interface():
    with pytest.raises(ValueError):
        Network().link_delete()
    assert Network().interface("docker0").link_delete() == "ip link delete docker0 2>&1"


def test_mounts_under_deepest_first():
    output = "\n".join([
        "/",
        "/var/lib/kubesolo",
        "/var/lib/kubesolo/pods/abc/volumes/token",
        "/var/lib/kubesolo/containerd/shm",
        "/var/lib/kubesolo-other",
    ])
    targets = Mount.mounts_under(output, "/var/lib/kubesolo")
    assert targets == [
        "/var/lib/kubesolo/pods/abc/volumes/token",
        "/var/lib/kubesolo/containerd/shm",
        "/var/lib/kubesolo",
    ]
    assert Mount().lazy().unmount("/var/lib/kubesolo") == "umount -l /var/lib/kubesolo 2>&1"


def test_kubectl_commands():
    kubectl = Kubectl().kubeconfig("/k/admin.kubeconfig")
    assert kubectl.get_nodes() == "kubectl --kubeconfig /k/admin.kubeconfig get nodes --no-headers 2>&1"
    run = kubectl.run_pod("dns-test", "busybox:stable", ["sleep", "300"])
    assert "--restart=Never -- sleep 300" in run
    assert kubectl.delete_pod("dns-test").endswith("delete pod dns-test --ignore-not-found 2>&1")
    assert "-n kube-system get pods --no-headers" in Kubectl().namespace("kube-system").get_pods()


def test_parse_node_ready_needs_exact_token():
    assert Kubectl.parse_node_ready("runner   Ready    control-plane   10s   v1.32.0") is True
    assert Kubectl.parse_node_ready("runner   NotReady control-plane   10s   v1.32.0") is False
    assert Kubectl.parse_node_ready("") is False


def test_parse_pod_running():
    output = "coredns-5d8 1/1 Running 0 30s\nlocal-path 0/1 Pending 0 30s"
    assert Kubectl.parse_pod_running(output, r"coredns.*1/1.*Running") is True
    assert Kubectl.parse_pod_running("coredns-5d8 0/1 Running 0 3s", r"coredns.*1/1.*Running") is False


def test_classify_not_loaded_is_absent():
    output = "Failed to stop docker.service: Unit docker.service not loaded."
    assert CommandWrapper.classify(output, 5) == Outcome.ABSENT


def test_classify_failure_and_success():
    assert CommandWrapper.classify("Job for x.service failed because the control process exited", 1) == Outcome.FAILED
    assert CommandWrapper.classify("warning: something failed but exit was clean", 0) == Outcome.SUCCEEDED


def test_parse_result_timeout():
    result = CommandWrapper.parse_result(None, None)
    assert result.success is False
    assert result.error_type == ErrorType.TIMEOUT


def test_step_result_from_result():
    result = CommandWrapper.parse_result("rm: cannot remove '/x': Permission denied", 1)
    step = StepResult.from_result("remove /x", result)
    assert step.failed is True
    assert "Permission denied" in step.detail
