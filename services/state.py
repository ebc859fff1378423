"""
Handoff state - the durable "setup ran" flag shared between the main and post invocations
"""
import json
import logging
import os
import time
from pathlib import Path
from typing import List, MutableMapping, Optional
from libs import workflow
from libs.config import ActionConfig
logger = logging.getLogger(__name__)
STATE_KEY = "isPost"
CLEANUP_KEY = "cleanup"
HANDOFF_FILE = "handoff.json"


class HandoffStore:
    """One place the flag can live"""
    def mark_setup_ran(self, cleanup: bool = True) -> None:
        raise NotImplementedError("Subclasses must implement mark_setup_ran()")

    def setup_ran(self) -> bool:
        raise NotImplementedError("Subclasses must implement setup_ran()")

    def cleanup_requested(self) -> Optional[bool]:
        """Cleanup choice recorded by setup, None when not recorded"""
        return None

    def clear(self) -> None:
        """Forget the flag (no-op where the store cannot be rewritten)"""


class ActionsStateStore(HandoffStore):
    """Runner-managed state: written via GITHUB_STATE, read back as STATE_isPost"""
    def __init__(self, environ: Optional[MutableMapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ

    def mark_setup_ran(self, cleanup: bool = True) -> None:
        if not workflow.save_state(STATE_KEY, "true", self.environ):
            logger.debug("GITHUB_STATE not set; runner state not saved")
            return
        workflow.save_state(CLEANUP_KEY, "true" if cleanup else "false", self.environ)

    def setup_ran(self) -> bool:
        return workflow.get_state(STATE_KEY, self.environ) == "true"

    def cleanup_requested(self) -> Optional[bool]:
        value = workflow.get_state(CLEANUP_KEY, self.environ)
        if not value:
            return None
        return value == "true"


class FileStateStore(HandoffStore):
    """JSON file under the state directory; survives between process invocations on the same host"""
    def __init__(self, state_dir: str):
        self.path = Path(state_dir) / HANDOFF_FILE

    def mark_setup_ran(self, cleanup: bool = True) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"setup_ran": True, "cleanup": cleanup, "pid": os.getpid(), "timestamp": int(time.time())}
        self.path.write_text(json.dumps(payload), encoding="utf-8")

    def _load(self) -> Optional[dict]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Handoff file %s unreadable (%s)", self.path, exc)
            return None
        return data if isinstance(data, dict) else None

    def setup_ran(self) -> bool:
        if not self.path.exists():
            return False
        data = self._load()
        # The file only exists because setup wrote it
        return True if data is None else bool(data.get("setup_ran"))

    def cleanup_requested(self) -> Optional[bool]:
        if not self.path.exists():
            return None
        data = self._load()
        if data is None or not isinstance(data.get("cleanup"), bool):
            return None
        return data["cleanup"]

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass


class HandoffState:
    """Writes the flag to every store; setup counts as ran if any store says so"""
    def __init__(self, stores: List[HandoffStore]):
        self.stores = stores

    def mark_setup_ran(self, cleanup: bool = True) -> None:
        for store in self.stores:
            try:
                store.mark_setup_ran(cleanup=cleanup)
            except OSError as exc:
                logger.warning("Failed to persist handoff state via %s: %s", type(store).__name__, exc)

    def setup_ran(self) -> bool:
        return any(store.setup_ran() for store in self.stores)

    def cleanup_requested(self) -> Optional[bool]:
        """First recorded cleanup choice across the stores"""
        for store in self.stores:
            choice = store.cleanup_requested()
            if choice is not None:
                return choice
        return None

    def clear(self) -> None:
        for store in self.stores:
            try:
                store.clear()
            except OSError as exc:
                logger.warning("Failed to clear handoff state via %s: %s", type(store).__name__, exc)


def make_state_store(cfg: ActionConfig, environ: Optional[MutableMapping[str, str]] = None) -> HandoffState:
    """File store always; runner state as well when executed by GitHub Actions"""
    if environ is None:
        environ = os.environ
    stores: List[HandoffStore] = [FileStateStore(cfg.state_dir)]
    if "GITHUB_STATE" in environ or any(key.startswith("STATE_") for key in environ):
        stores.append(ActionsStateStore(environ))
    return HandoffState(stores)
