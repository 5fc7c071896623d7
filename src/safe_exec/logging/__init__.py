"""SafeExec Logging - Diagnostics for unhandled failures."""

from .colors import LIGHT_BLUE, MAGENTA, RED, RESET, YELLOW
from .logger import DiagnosticLogger, LogConfig

__all__ = [
    # Logger classes
    "DiagnosticLogger",
    "LogConfig",
    # Colors
    "RESET",
    "RED",
    "YELLOW",
    "LIGHT_BLUE",
    "MAGENTA",
]
