"""SafeExec configuration data models."""

from dataclasses import dataclass, field

from safe_exec.types import LogFormat, UnhandledPolicy


@dataclass
class UnhandledConfig:
    """Escalation for failures with no matching handler and no fallback."""

    policy: UnhandledPolicy = UnhandledPolicy.EXIT
    exit_code: int = 1


@dataclass
class DiagnosticsConfig:
    """Diagnostic output written before escalation."""

    format: LogFormat = LogFormat.COLORED
    truncate_at: int = 2000
    include_traceback: bool = True


@dataclass
class SafeExecConfig:
    """Root configuration object."""

    unhandled: UnhandledConfig = field(default_factory=UnhandledConfig)
    diagnostics: DiagnosticsConfig = field(default_factory=DiagnosticsConfig)
