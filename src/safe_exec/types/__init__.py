"""Shared types for SafeExec.

Import from here rather than submodules:
    from safe_exec.types import LogLevel, MatcherKind, ValidationResult
"""

from .enums import LogFormat, LogLevel, MatcherKind, UnhandledPolicy
from .validation import ValidationIssue, ValidationResult

__all__ = [
    # Enums
    "LogLevel",
    "LogFormat",
    "MatcherKind",
    "UnhandledPolicy",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
