"""
Publish kubeconfig action
"""
import logging
from cli import FileOps
from libs import workflow
from .base import Action
logger = logging.getLogger(__name__)


class PublishKubeconfigAction(Action):
    """Expose the admin kubeconfig path as an output and as KUBECONFIG for later steps"""
    description = "publish kubeconfig"

    def __init__(self, executor=None, cfg=None, environ=None):
        super().__init__(executor=executor, cfg=cfg)
        self.environ = environ

    def execute(self) -> bool:
        path = self.cfg.kubeconfig_path
        output, _ = self.executor.execute(FileOps().exists(path), sudo=True)
        if FileOps.parse_exists(output):
            chmod_output, exit_code = self.executor.execute(FileOps().chmod(path, "644"), sudo=True)
            if exit_code != 0:
                logger.warning("Failed to chmod %s: %s", path, chmod_output)
        else:
            # The service writes it a few seconds after start; the poller fixes the mode later
            logger.info("Kubeconfig %s not generated yet", path)
        workflow.set_output("kubeconfig", path, self.environ)
        workflow.export_variable("KUBECONFIG", path, self.environ)
        logger.info("KUBECONFIG=%s", path)
        return True
