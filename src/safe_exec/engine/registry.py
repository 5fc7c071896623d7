"""Handler registry - ordered matcher/handler entries plus a fallback."""

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from safe_exec.errors import create_error

from .matchers import as_matcher
from .types import Handler, HandlerEntry

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Ordered handler entries. Grows by appending, never shrinks.

    Entries live in a tuple that is replaced on every append, so a dispatch
    iterating ``entries`` always sees one consistent snapshot. ``freeze()``
    forbids further registration.
    """

    def __init__(self) -> None:
        self._entries: tuple[HandlerEntry, ...] = ()
        self._fallback: Handler | None = None
        self._frozen = False

    @property
    def entries(self) -> tuple[HandlerEntry, ...]:
        """Current entries in registration order."""
        return self._entries

    @property
    def fallback(self) -> Handler | None:
        """Catch-all handler, if registered."""
        return self._fallback

    @property
    def frozen(self) -> bool:
        return self._frozen

    def append(self, matcher: Any, handler: Handler) -> "HandlerRegistry":
        """Register a handler after all existing entries.

        Args:
            matcher: A Matcher, or a raw value coerced by ``as_matcher``
            handler: Callable receiving ``(failure, context)``

        Returns:
            This registry

        Raises:
            SafeExecError: REGISTRY_FROZEN, MATCHER_INVALID or HANDLER_INVALID
        """
        self._check_mutable()
        entry = HandlerEntry(as_matcher(matcher), self._check_handler(handler))
        self._entries = (*self._entries, entry)
        logger.debug(
            "Registered %s at position %d",
            type(entry.matcher).__name__,
            len(self._entries) - 1,
        )
        return self

    def append_many(self, pairs: Iterable[tuple[Any, Handler]]) -> "HandlerRegistry":
        """Register several ``(matcher, handler)`` pairs in order.

        All pairs are validated before any is added.
        """
        self._check_mutable()
        new_entries = tuple(
            HandlerEntry(as_matcher(matcher), self._check_handler(handler))
            for matcher, handler in pairs
        )
        self._entries = (*self._entries, *new_entries)
        logger.debug("Registered %d handlers", len(new_entries))
        return self

    def set_fallback(self, handler: Handler) -> "HandlerRegistry":
        """Set the catch-all handler, replacing any previous one."""
        self._check_mutable()
        self._fallback = self._check_handler(handler)
        logger.debug("Registered fallback handler")
        return self

    def freeze(self) -> "HandlerRegistry":
        """Forbid further registration."""
        self._frozen = True
        return self

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HandlerEntry]:
        return iter(self._entries)

    def _check_mutable(self) -> None:
        if self._frozen:
            raise create_error("REGISTRY_FROZEN")

    @staticmethod
    def _check_handler(handler: Any) -> Handler:
        if not callable(handler):
            raise create_error("HANDLER_INVALID", handler=handler)
        return handler
