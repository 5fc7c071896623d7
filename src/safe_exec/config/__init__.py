"""SafeExec Configuration - Config loading and models."""

from .loader import (
    CONFIG_PATH_ENV,
    ConfigLoader,
    deep_merge,
    resolve_env_vars,
)
from .models import DiagnosticsConfig, SafeExecConfig, UnhandledConfig

__all__ = [
    # Config models
    "SafeExecConfig",
    "UnhandledConfig",
    "DiagnosticsConfig",
    # Loader
    "ConfigLoader",
    "CONFIG_PATH_ENV",
    # Utilities
    "resolve_env_vars",
    "deep_merge",
]
