"""
Unit tests for the in-cluster DNS check
"""
import pytest
from orchestration.dns import DnsCheck, DnsCheckError

COREDNS_READY = "coredns-7db6d8ff4d-abcde   1/1   Running   0   40s"
COREDNS_STARTING = "coredns-7db6d8ff4d-abcde   0/1   Running   0   4s"


class Sequence:
    """Return queued responses in order, repeating the last one"""

    def __init__(self, *responses):
        self.responses = list(responses)

    def __call__(self, command):
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]


@pytest.fixture
def dns_host(host):
    host.on("get pods", COREDNS_READY, 0)
    return host


def test_dns_check_success(dns_host, cfg, clock):
    dns_host.on("exec dns-test", Sequence(("nslookup: can't resolve", 1), ("nslookup: can't resolve", 1), ("Address: 10.43.0.1", 0)))
    DnsCheck(dns_host, cfg, sleep=clock.sleep).run()
    assert dns_host.ran("run dns-test --image=public.ecr.aws/docker/library/busybox:stable --restart=Never -- sleep 300")
    assert dns_host.ran("wait --for=condition=ready --timeout=60s pod/dns-test")
    assert dns_host.count("nslookup kubernetes.default.svc.cluster.local") == 3
    assert dns_host.ran("delete pod dns-test --ignore-not-found")
    assert clock.sleeps == [2, 2]


def test_waits_for_coredns(dns_host, cfg, clock):
    dns_host.on("get pods", Sequence((COREDNS_STARTING, 0), (COREDNS_STARTING, 0), (COREDNS_READY, 0)))
    DnsCheck(dns_host, cfg, sleep=clock.sleep).wait_for_coredns()
    assert dns_host.count("-n kube-system get pods") == 3
    assert clock.sleeps == [2, 2]


def test_coredns_timeout(dns_host, cfg, clock):
    cfg.waits.coredns_attempts = 3
    dns_host.on("get pods", COREDNS_STARTING, 0)
    with pytest.raises(DnsCheckError):
        DnsCheck(dns_host, cfg, sleep=clock.sleep).run()
    # three polls plus the listing with headers
    assert dns_host.count("get pods") == 4
    assert not dns_host.ran("run dns-test")


def test_resolution_never_works_deletes_pod(dns_host, cfg, clock):
    cfg.waits.dns_attempts = 3
    dns_host.on("exec dns-test", "nslookup: can't resolve", 1)
    with pytest.raises(DnsCheckError):
        DnsCheck(dns_host, cfg, sleep=clock.sleep).probe()
    assert dns_host.count("nslookup") == 3
    assert dns_host.ran("delete pod dns-test")


def test_pod_creation_failure_still_deletes(dns_host, cfg, clock):
    dns_host.on("run dns-test", 'Error from server (AlreadyExists): pods "dns-test" already exists', 1)
    with pytest.raises(DnsCheckError):
        DnsCheck(dns_host, cfg, sleep=clock.sleep).probe()
    assert dns_host.ran("delete pod dns-test")
    assert not dns_host.ran("nslookup")


def test_pod_never_ready(dns_host, cfg, clock):
    dns_host.on("wait --for=condition=ready", "error: timed out waiting for the condition", 1)
    with pytest.raises(DnsCheckError):
        DnsCheck(dns_host, cfg, sleep=clock.sleep).probe()
    assert dns_host.ran("delete pod dns-test")


def test_delete_failure_is_only_a_warning(dns_host, cfg, clock, caplog):
    dns_host.on("delete pod dns-test", "error: connection refused", 1)
    DnsCheck(dns_host, cfg, sleep=clock.sleep).probe()
    assert "Failed to delete pod dns-test" in caplog.text
