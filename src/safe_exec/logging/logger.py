"""Diagnostic logger - colored or JSON reports for unhandled failures."""

import json
import sys
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, TextIO

from safe_exec.logging.colors import LIGHT_BLUE, MAGENTA, RED, RESET, YELLOW
from safe_exec.types import LogFormat, LogLevel


@dataclass
class LogConfig:
    """Diagnostic logger configuration."""

    format: LogFormat = LogFormat.COLORED
    truncate_at: int = 2000
    include_traceback: bool = True
    output: TextIO | None = None  # None = sys.stderr at write time


class DiagnosticLogger:
    """Writes diagnostics to the standard error channel."""

    def __init__(self, config: LogConfig | None = None):
        """Initialize logger with configuration.

        Args:
            config: Logger configuration (defaults to LogConfig())
        """
        self.config = config or LogConfig()

    def unhandled(self, failure: object, trace: object = None) -> None:
        """Report a failure no handler could resolve.

        Args:
            failure: The raw failure value
            trace: Formatted traceback or details, if any
        """
        context: dict[str, Any] = {"failure_type": type(failure).__name__}
        if trace is not None and self.config.include_traceback:
            context["traceback"] = self._truncate(str(trace))
        self._log(LogLevel.ERROR, "unhandled", f"Unhandled error: {failure!r}", context)

    @property
    def _output(self) -> TextIO:
        # Resolved lazily so a swapped sys.stderr (e.g. pytest capsys) is honored.
        return self.config.output or sys.stderr

    def _truncate(self, text: str) -> str:
        if len(text) > self.config.truncate_at:
            return text[: self.config.truncate_at] + "..."
        return text

    def _log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Internal logging method.

        Args:
            level: Log level
            component: Component name
            message: Log message
            context: Additional context data
        """
        if self.config.format == LogFormat.JSON:
            self._log_json(level, component, message, context)
        else:
            self._log_colored(level, component, message, context)
        self._output.flush()

    def _log_json(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": level.value,
            "component": component,
            "message": message,
        }
        if context:
            log_entry.update(context)

        print(json.dumps(log_entry, default=str), file=self._output)

    def _log_colored(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        color = RED if level == LogLevel.ERROR else YELLOW

        # Format: [COMPONENT] message
        output = f"{MAGENTA}[{component.upper()}]{RESET} {color}{message}{RESET}"

        context = dict(context or {})
        trace = context.pop("traceback", None)
        if context:
            output += f" {LIGHT_BLUE}{context}{RESET}"
        if trace:
            output += f"\n{LIGHT_BLUE}{trace.rstrip()}{RESET}"

        print(output, file=self._output)
