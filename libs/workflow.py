"""
GitHub Actions runner file commands: outputs, exported environment, saved state, log groups
"""
import logging
import os
import sys
import uuid
from contextlib import contextmanager
from typing import MutableMapping, Optional
logger = logging.getLogger(__name__)


def _append_file_command(path: str, name: str, value: str) -> None:
    """Append name=value to a runner command file, using a heredoc delimiter for multi-line values"""
    if "\n" in value or "\r" in value:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        entry = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
    else:
        entry = f"{name}={value}\n"
    with open(path, "a", encoding="utf-8") as f:
        f.write(entry)


def set_output(name: str, value: str, environ: Optional[MutableMapping[str, str]] = None) -> bool:
    """
    Publish an action output
    Returns:
        True when written to the runner's GITHUB_OUTPUT file
    """
    if environ is None:
        environ = os.environ
    path = environ.get("GITHUB_OUTPUT")
    if not path:
        logger.info("Output %s=%s (GITHUB_OUTPUT not set)", name, value)
        return False
    _append_file_command(path, name, value)
    return True


def export_variable(name: str, value: str, environ: Optional[MutableMapping[str, str]] = None) -> bool:
    """
    Export an environment variable to this process and every later step of the job
    Returns:
        True when written to the runner's GITHUB_ENV file
    """
    if environ is None:
        environ = os.environ
    environ[name] = value
    path = environ.get("GITHUB_ENV")
    if not path:
        logger.info("Exported %s=%s for this process only (GITHUB_ENV not set)", name, value)
        return False
    _append_file_command(path, name, value)
    return True


def save_state(name: str, value: str, environ: Optional[MutableMapping[str, str]] = None) -> bool:
    """Persist a value for the post-job invocation of this action"""
    if environ is None:
        environ = os.environ
    path = environ.get("GITHUB_STATE")
    if not path:
        return False
    _append_file_command(path, name, value)
    return True


def get_state(name: str, environ: Optional[MutableMapping[str, str]] = None) -> str:
    """Read a value saved by the main invocation (empty string when absent)"""
    if environ is None:
        environ = os.environ
    return environ.get(f"STATE_{name}", "")


@contextmanager
def group(title: str, stream=None):
    """Fold the enclosed log lines into a collapsible group"""
    if stream is None:
        stream = sys.stdout
    stream.write(f"::group::{title}\n")
    stream.flush()
    try:
        yield
    finally:
        stream.write("::endgroup::\n")
        stream.flush()
