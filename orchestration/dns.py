"""In-cluster DNS verification."""
from __future__ import annotations
import time
from typing import Callable
from cli import Kubectl
from libs.config import ActionConfig
from libs.logger import get_logger
logger = get_logger(__name__)


class DnsCheckError(RuntimeError):
    """Raised when CoreDNS or name resolution never comes up."""


class DnsCheck:
    """Wait for CoreDNS, then resolve the API service name from a throwaway pod."""

    def __init__(self, executor, cfg: ActionConfig, sleep: Callable[[float], None] = time.sleep):
        self.executor = executor
        self.cfg = cfg
        self.sleep = sleep

    def _kubectl(self, namespace=None) -> Kubectl:
        kubectl = Kubectl().kubeconfig(self.cfg.kubeconfig_path)
        if namespace:
            kubectl.namespace(namespace)
        return kubectl

    def run(self) -> None:
        self.wait_for_coredns()
        self.probe()

    def wait_for_coredns(self) -> None:
        dns = self.cfg.dns
        attempts = self.cfg.waits.coredns_attempts
        logger.info("Waiting for CoreDNS to be ready...")
        for attempt in range(1, attempts + 1):
            output, exit_code = self.executor.execute(self._kubectl(dns.namespace).get_pods())
            if exit_code == 0 and Kubectl.parse_pod_running(output, dns.coredns_pattern):
                logger.info("CoreDNS is ready")
                return
            logger.info("Waiting for CoreDNS... (%s/%s)", attempt, attempts)
            if attempt < attempts:
                self.sleep(self.cfg.waits.coredns_sleep)
        listing, _ = self.executor.execute(self._kubectl(dns.namespace).get_pods(headers=True))
        logger.error("Timeout waiting for CoreDNS")
        if listing:
            logger.info(listing)
        raise DnsCheckError("Timeout waiting for CoreDNS")

    def probe(self) -> None:
        """Resolve the lookup name from the probe pod; the pod is deleted whatever happens."""
        dns = self.cfg.dns
        waits = self.cfg.waits
        kubectl = self._kubectl()
        try:
            output, exit_code = self.executor.execute(
                kubectl.run_pod(dns.probe_pod, dns.probe_image, ["sleep", "300"])
            )
            if exit_code != 0:
                raise DnsCheckError(f"Failed to create pod {dns.probe_pod}: {output or 'no output'}")
            output, exit_code = self.executor.execute(
                kubectl.wait_ready(dns.probe_pod, waits.probe_ready_timeout),
                timeout=waits.probe_ready_timeout + 30,
            )
            if exit_code != 0:
                raise DnsCheckError(f"Pod {dns.probe_pod} not ready: {output or 'no output'}")
            for attempt in range(1, waits.dns_attempts + 1):
                output, exit_code = self.executor.execute(kubectl.exec(dns.probe_pod, ["nslookup", dns.lookup_name]))
                if exit_code == 0:
                    logger.info("DNS resolution is working")
                    return
                logger.info("DNS not ready yet, retrying... (%s/%s)", attempt, waits.dns_attempts)
                if attempt < waits.dns_attempts:
                    self.sleep(waits.dns_sleep)
            logger.error("DNS resolution failed")
            raise DnsCheckError(f"Could not resolve {dns.lookup_name}")
        finally:
            output, exit_code = self.executor.execute(kubectl.delete_pod(dns.probe_pod))
            if exit_code != 0:
                logger.warning("Failed to delete pod %s: %s", dns.probe_pod, output or "no output")
