"""Engine types: handler entries, resolutions and dispatch outcomes."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .matchers import Matcher

Handler = Callable[[Any, dict[str, Any]], Any]


@dataclass(frozen=True)
class HandlerEntry:
    """One matcher bound to one handler."""

    matcher: Matcher
    handler: Handler


@dataclass(frozen=True)
class Resolution:
    """Handler chosen for a failure.

    ``index`` is the position of the matching entry, or None for the fallback.
    """

    handler: Handler
    is_fallback: bool = False
    index: int | None = None


@dataclass(frozen=True)
class Resolved:
    """A handler produced a substitute value."""

    value: Any
    is_fallback: bool = False

    @property
    def handled(self) -> bool:
        return True


@dataclass(frozen=True)
class Unhandled:
    """No entry matched and no fallback is registered."""

    failure: Any
    context: dict[str, Any] = field(default_factory=dict)

    @property
    def handled(self) -> bool:
        return False


Outcome = Resolved | Unhandled
