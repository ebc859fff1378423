"""
Library functions organized by usage:
- logger: logging configuration and utilities
- config: configuration data model classes
- workflow: GitHub Actions runner file commands
- command: base class for command classes
"""
from . import logger
from . import config
from . import workflow
from . import command
__all__ = ["logger", "config", "workflow", "command"]
