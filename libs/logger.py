"""
Logging configuration for setup-kubesolo
Provides a centralized logger with console and optional file output.
Inside GitHub Actions, warnings and errors become workflow annotations.
"""
import inspect
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
DEFAULT_LOGGER_NAME = "setup_kubesolo"
DEFAULT_FORMAT = "%(asctime)s - %(name)-25s - %(levelname)s - %(message)s"


def running_in_actions(environ=None) -> bool:
    """True when executed by a GitHub Actions runner"""
    if environ is None:
        environ = os.environ
    return environ.get("GITHUB_ACTIONS") == "true"


class WorkflowCommandFormatter(logging.Formatter):
    """Render records as GitHub workflow commands (::error::, ::warning::, ::debug::)"""
    PREFIXES = {
        logging.DEBUG: "::debug::",
        logging.WARNING: "::warning::",
        logging.ERROR: "::error::",
        logging.CRITICAL: "::error::",
    }

    def format(self, record):
        message = super().format(record)
        prefix = self.PREFIXES.get(record.levelno)
        if prefix is None:
            return message
        # Workflow commands are single-line; encode newlines as the toolkit does
        escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        return f"{prefix}{escaped}"

def setup_logging(level=logging.INFO, log_file=None, format_string=None, annotate=None):
    """
    Setup logging configuration
    Args:
        level: Logging level (default: INFO)
        log_file: Optional path to log file (default: None, console only)
        format_string: Custom format string (default: uses standard format)
        annotate: Emit workflow commands on the console (default: auto-detect runner)
    """
    if format_string is None:
        format_string = DEFAULT_FORMAT
    if annotate is None:
        annotate = running_in_actions()
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(format_string, datefmt=date_format)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    if annotate:
        # The runner timestamps every line already
        console_handler.setFormatter(WorkflowCommandFormatter("%(message)s"))
    else:
        console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    return root_logger

def get_logger(name=None):
    """
    Get a logger instance for a module
    Args:
        name: Logger name (default: None, uses calling module name)
    Returns:
        Logger instance
    """
    if name is None:
        frame = inspect.currentframe()
        caller = frame.f_back if frame else None
        if caller:
            name = caller.f_globals.get("__name__", DEFAULT_LOGGER_NAME)
        else:
            name = DEFAULT_LOGGER_NAME
    return logging.getLogger(name)

def init_logger(level=logging.INFO, log_file=None, always_log_to_file=False, logs_dir="logs"):
    """
    Initialize the default logger (called once at startup)
    Args:
        level: Logging level
        log_file: Optional log file path (if None and always_log_to_file=True, creates timestamped log)
        always_log_to_file: If True and log_file is None, creates a timestamped log file in logs_dir
        logs_dir: Directory for timestamped log files
    """
    if log_file is None and always_log_to_file:
        logs_path = Path(logs_dir)
        logs_path.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = logs_path / f"setup_kubesolo_{timestamp}.log"
    setup_logging(level=level, log_file=log_file)
    return logging.getLogger(DEFAULT_LOGGER_NAME)
