"""
Base command wrapper with error parsing and command generation
"""
import re
import logging
from enum import Enum
from dataclasses import dataclass
from typing import Optional
logger = logging.getLogger(__name__)

class ErrorType(Enum):
    """Error types that can be detected in command output"""
    NONE = "none"
    TIMEOUT = "timeout"
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    INVALID_ARGUMENT = "invalid_argument"
    COMMAND_FAILED = "command_failed"
    SERVICE_ERROR = "service_error"
    NETWORK_ERROR = "network_error"
    UNKNOWN = "unknown"


class Outcome(Enum):
    """Result category of a best-effort step"""
    SUCCEEDED = "succeeded"
    ABSENT = "absent"
    FAILED = "failed"
@dataclass

class CommandResult:
    """Structured result from command execution"""
    success: bool
    output: Optional[str]
    error_type: ErrorType
    error_message: Optional[str]
    exit_code: Optional[int]

    @property

    def outcome(self) -> Outcome:
        """Collapse the result into succeeded / absent / failed."""
        if self.success:
            return Outcome.SUCCEEDED
        if self.error_type == ErrorType.NOT_FOUND:
            return Outcome.ABSENT
        return Outcome.FAILED


@dataclass
class StepResult:
    """Outcome of one named best-effort step"""
    name: str
    outcome: Outcome
    detail: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome == Outcome.SUCCEEDED

    @property
    def failed(self) -> bool:
        return self.outcome == Outcome.FAILED

    @classmethod
    def from_result(cls, name: str, result: CommandResult) -> "StepResult":
        """Build a step result from a parsed command result."""
        detail = None if result.success else result.error_message
        return cls(name=name, outcome=result.outcome, detail=detail)

class CommandWrapper:  # pylint: disable=too-few-public-methods
    """Base wrapper for CLI commands - generates command strings and parses results"""
    def __init__(self) -> None:
        """Prevent direct instantiation; subclasses should be static collections."""
        raise RuntimeError("CommandWrapper should not be instantiated")
    # Error patterns: (pattern, error_type, description)
    ERROR_PATTERNS = [
        # Timeout errors
        (r"timeout|timed out|time out", ErrorType.TIMEOUT, "Command timed out"),
        # Permission errors
        (
            r"permission denied|access denied|operation not permitted|eacces|a password is required",
            ErrorType.PERMISSION_DENIED,
            "Permission denied",
        ),
        # Not found errors
        (
            r"not found|no such file|no such directory|command not found|file not found|"
            r"not loaded|does not exist|no such process|not mounted",
            ErrorType.NOT_FOUND,
            "Resource not found",
        ),
        (r"unit .* could not be found|unit file .* does not exist", ErrorType.NOT_FOUND, "Unit not found"),
        # Already exists
        (
            r"already exists|already in use|already running",
            ErrorType.ALREADY_EXISTS,
            "Resource already exists",
        ),
        # Invalid argument
        (
            r"invalid (?:argument|option|parameter)|bad argument|unknown option",
            ErrorType.INVALID_ARGUMENT,
            "Invalid argument",
        ),
        # Service errors
        (
            r"service.*failed|systemctl.*failed|failed to start.*service",
            ErrorType.SERVICE_ERROR,
            "Service error",
        ),
        (r"failed to start|failed to stop|failed to restart", ErrorType.SERVICE_ERROR, "Service operation failed"),
        # Network errors
        (
            r"could not resolve host|network.*unreachable|no route to host|connection refused",
            ErrorType.NETWORK_ERROR,
            "Network error",
        ),
        # Generic command failures
        (r"(?<![-a-z0-9])(error|failed|failure|fatal)(?![-a-z0-9])", ErrorType.COMMAND_FAILED, "Command failed"),
    ]
    @classmethod

    def parse_result(cls, output: Optional[str], exit_code: Optional[int] = None) -> CommandResult:
        """
        Parse command output and return structured result
        Args:
            output: Command output (stdout/stderr combined)
            exit_code: Exit code if available
        Returns:
            CommandResult object
        """
        error_type, error_msg = cls._parse_error(output, exit_code)
        if exit_code == 0:
            # A zero exit status wins over chatty output
            success = True
        else:
            success = error_type in (ErrorType.NONE, ErrorType.ALREADY_EXISTS) and exit_code is not None
        return CommandResult(
            success=success,
            output=output,
            error_type=ErrorType.NONE if exit_code == 0 else error_type,
            error_message=None if exit_code == 0 else error_msg,
            exit_code=exit_code,
        )
    @classmethod

    def classify(cls, output: Optional[str], exit_code: Optional[int]) -> Outcome:
        """Return succeeded / absent / failed for a finished command."""
        return cls.parse_result(output, exit_code).outcome
    @classmethod

    def _parse_error(cls, output: Optional[str], exit_code: Optional[int] = None) -> tuple[ErrorType, Optional[str]]:
        """
        Parse command output to identify error type and message
        Args:
            output: Command output (stdout/stderr combined)
            exit_code: Exit code if available
        Returns:
            Tuple of (ErrorType, error_message)
        """
        if output is None:
            if exit_code is None:
                return ErrorType.TIMEOUT, "Command produced no output (possible timeout)"
            if exit_code != 0:
                return ErrorType.COMMAND_FAILED, f"Command failed with exit code {exit_code}"
            return ErrorType.NONE, None
        if exit_code == 0:
            return ErrorType.NONE, None
        analysis_output = cls._sanitize_output_for_error_detection(output)
        for pattern, error_type, description in cls.ERROR_PATTERNS:
            if re.search(pattern, analysis_output, re.IGNORECASE):
                error_msg = cls._extract_error_message(analysis_output, pattern)
                return error_type, error_msg or description
        if exit_code is None:
            return ErrorType.TIMEOUT, "Command did not finish"
        return ErrorType.COMMAND_FAILED, f"Command failed with exit code {exit_code}"
    @staticmethod

    def _sanitize_output_for_error_detection(output: Optional[str]) -> Optional[str]:
        """Strip ANSI escapes and sudo noise that trigger false positives."""
        if not output:
            return output
        ansi_pattern = re.compile(r"\x1B[@-_][0-?]*[ -/]*[@-~]")
        noise_prefixes = (
            "sudo: unable to resolve host",
            "warning: the unit file, source configuration file or drop-ins",
        )
        sanitized_lines = []
        for raw_line in output.splitlines():
            line_no_ansi = ansi_pattern.sub("", raw_line)
            lower = line_no_ansi.strip().lower()
            if any(lower.startswith(prefix) for prefix in noise_prefixes):
                continue
            sanitized_lines.append(line_no_ansi)
        return "\n".join(sanitized_lines)
    @staticmethod

    def _extract_error_message(output: str, pattern: str) -> Optional[str]:
        """Extract relevant error message from sanitized output"""
        for line in output.split("\n"):
            if re.search(pattern, line, re.IGNORECASE):
                msg = line.strip()
                if len(msg) > 200:
                    msg = msg[:197] + "..."
                return msg
        if len(output) > 200:
            return output[-197:] + "..."
        return output.strip() if output.strip() else None
