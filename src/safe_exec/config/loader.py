"""SafeExec configuration loader."""

import os
import re
import typing
from dataclasses import fields
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from safe_exec.errors import create_error
from safe_exec.types import (
    LogFormat,
    UnhandledPolicy,
    ValidationIssue,
    ValidationResult,
)

from .models import SafeExecConfig

CONFIG_PATH_ENV = "SAFE_EXEC_CONFIG_PATH"


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        SafeExecError: If required var not set
    """
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)  # default value or error message

        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        elif operator == "?":
            error_msg = operand or f"Required environment variable {var_name} not set"
            raise create_error("CONFIG_INVALID", detail=error_msg)
        else:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Required environment variable {var_name} not set",
            )

    return re.sub(pattern, replacer, value)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    elif isinstance(data, str):
        return resolve_env_vars(data)
    else:
        return data


def _enum_values(enum_type: type[Enum]) -> set[str]:
    return {member.value for member in enum_type}


class ConfigLoader:
    """Load and validate SafeExec configuration."""

    def load(
        self,
        path: str | Path | None = None,
        use_defaults: bool = True,
        overrides: dict[str, Any] | None = None,
    ) -> SafeExecConfig:
        """Load configuration from file.

        Resolution order if path not specified:
        1. SAFE_EXEC_CONFIG_PATH environment variable
        2. ./safe-exec.yaml
        3. ~/.safe_exec/config.yaml
        4. If use_defaults=True and no file found, use default configuration

        Args:
            path: Optional path to config file
            use_defaults: If True, use default config when no file found
            overrides: Values deep-merged over the file contents

        Returns:
            Loaded SafeExecConfig instance

        Raises:
            SafeExecError: If file not found (when use_defaults=False) or invalid
        """
        if path is None:
            path = self._resolve_config_path()

        config_path = Path(path)

        if not config_path.exists():
            if use_defaults:
                return self.load_from_dict(overrides or {})
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration file not found: {config_path}",
            )

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Invalid YAML in config file: {e}",
            ) from e

        if not isinstance(data, dict):
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Top level of {config_path} must be a mapping",
            )

        data = _resolve_env_vars_recursive(data)
        if overrides:
            data = deep_merge(data, overrides)

        return self.load_from_dict(data, config_path)

    def load_defaults(self) -> SafeExecConfig:
        """Load default configuration without a file."""
        return self.load_from_dict({})

    def load_from_dict(
        self, data: dict[str, Any], config_path: Path | None = None
    ) -> SafeExecConfig:
        """Load configuration from dictionary.

        Args:
            data: Configuration dictionary
            config_path: Optional path to config file (for tracking)

        Returns:
            Loaded SafeExecConfig instance

        Raises:
            SafeExecError: If configuration is invalid
        """
        validation = self.validate(data)
        if not validation.valid:
            error_messages = [f"- {issue.path}: {issue.message}" for issue in validation.errors]
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n" + "\n".join(error_messages),
            )

        return self._convert_dataclass(SafeExecConfig, data)

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Validate config data without loading.

        Args:
            data: Configuration dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        valid_keys = {f.name for f in fields(SafeExecConfig)}
        for key in data:
            if key not in valid_keys:
                warnings.append(
                    ValidationIssue(
                        path=key,
                        message=f"Unknown configuration key: {key}",
                        severity="warning",
                    )
                )

        for section in valid_keys:
            if data.get(section) is not None and not isinstance(data[section], dict):
                errors.append(
                    ValidationIssue(path=section, message=f"{section} must be a dictionary")
                )

        unhandled = data.get("unhandled")
        if isinstance(unhandled, dict):
            policy = unhandled.get("policy")
            if policy is not None and policy not in _enum_values(UnhandledPolicy):
                errors.append(
                    ValidationIssue(
                        path="unhandled.policy",
                        message=f"policy must be one of {sorted(_enum_values(UnhandledPolicy))}",
                    )
                )
            exit_code = unhandled.get("exit_code")
            if exit_code is not None and (
                not isinstance(exit_code, int) or isinstance(exit_code, bool) or exit_code <= 0
            ):
                errors.append(
                    ValidationIssue(
                        path="unhandled.exit_code",
                        message="exit_code must be a positive integer",
                    )
                )

        diagnostics = data.get("diagnostics")
        if isinstance(diagnostics, dict):
            fmt = diagnostics.get("format")
            if fmt is not None and fmt not in _enum_values(LogFormat):
                errors.append(
                    ValidationIssue(
                        path="diagnostics.format",
                        message=f"format must be one of {sorted(_enum_values(LogFormat))}",
                    )
                )
            truncate_at = diagnostics.get("truncate_at")
            if truncate_at is not None and (not isinstance(truncate_at, int) or truncate_at <= 0):
                errors.append(
                    ValidationIssue(
                        path="diagnostics.truncate_at",
                        message="truncate_at must be a positive integer",
                    )
                )

        return ValidationResult(valid=True, errors=errors, warnings=warnings)

    def _resolve_config_path(self) -> Path:
        env_path = os.environ.get(CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path)

        local_path = Path("safe-exec.yaml")
        if local_path.exists():
            return local_path

        home_path = Path.home() / ".safe_exec" / "config.yaml"
        if home_path.exists():
            return home_path

        return local_path

    def _convert_dataclass(self, cls: type, value: dict[str, Any]) -> Any:
        hints = typing.get_type_hints(cls)
        kwargs = {
            f.name: self._convert_field(hints[f.name], value[f.name])
            for f in fields(cls)
            if value.get(f.name) is not None
        }
        return cls(**kwargs)

    def _convert_field(self, field_type: Any, value: Any) -> Any:
        if value is None:
            return None

        if hasattr(field_type, "__dataclass_fields__") and isinstance(value, dict):
            return self._convert_dataclass(field_type, value)

        if isinstance(field_type, type) and issubclass(field_type, Enum) and isinstance(value, str):
            return field_type(value)

        return value

