"""Shared enumerations for SafeExec."""

from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log output format."""

    COLORED = "colored"
    JSON = "json"


class MatcherKind(str, Enum):
    """Classification rule kind."""

    CATEGORY = "category"
    SUBSTRING = "substring"
    SHAPE = "shape"
    PREDICATE = "predicate"


class UnhandledPolicy(str, Enum):
    """What to do when no handler and no fallback apply."""

    EXIT = "exit"
    RAISE = "raise"
