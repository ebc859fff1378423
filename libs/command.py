"""Base class for command classes."""
from dataclasses import dataclass
from typing import Any


@dataclass
class Command:
    """Base class for command classes; every command carries the loaded ActionConfig."""
    cfg: Any
