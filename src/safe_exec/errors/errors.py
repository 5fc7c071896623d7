"""SafeExec error types."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error source categories."""

    REGISTRY = "REGISTRY"
    DISPATCH = "DISPATCH"
    RESULT = "RESULT"
    CONFIG = "CONFIG"


@dataclass
class SafeExecError(Exception):
    """Structured error with context. Base exception for all SafeExec errors.

    Raised for misuse of the engine itself (bad matchers, frozen registry,
    invalid config). Failures of wrapped operations are never converted into
    SafeExecError unless the unhandled policy asks for it.
    """

    # Identity
    code: str  # e.g., "REGISTRY_FROZEN"
    category: ErrorCategory

    # Messages
    message: str  # Human-readable summary
    detail: str | None = None  # Extended explanation
    suggestion: str | None = None  # Actionable fix

    # Metadata
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Set Exception message."""
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Serialize for diagnostics.

        Returns:
            Dictionary representation of the error
        """
        return {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "detail": self.detail,
            "suggestion": self.suggestion,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class ErrorTemplate:
    """Template for creating errors."""

    code: str
    category: ErrorCategory
    message_template: str  # "Unsupported matcher {matcher!r}"
    detail_template: str | None = None
    suggestion_template: str | None = None
