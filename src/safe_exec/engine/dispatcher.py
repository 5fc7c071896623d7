"""Dispatcher - resolves a failure against the registry and runs the handler."""

import logging
from typing import Any

from .registry import HandlerRegistry
from .types import Outcome, Resolution, Resolved, Unhandled

logger = logging.getLogger(__name__)


class Dispatcher:
    """Walks registry entries in order. First match wins."""

    def __init__(self, registry: HandlerRegistry):
        self._registry = registry

    def resolve(self, failure: object) -> Resolution | None:
        """Find the handler for a failure.

        Args:
            failure: Raw failure value

        Returns:
            Resolution for the first matching entry, the fallback, or None
        """
        for index, entry in enumerate(self._registry.entries):
            if entry.matcher.matches(failure):
                logger.debug(
                    "%s matched %s at position %d",
                    type(failure).__name__,
                    type(entry.matcher).__name__,
                    index,
                )
                return Resolution(entry.handler, is_fallback=False, index=index)

        fallback = self._registry.fallback
        if fallback is not None:
            logger.debug("%s resolved to fallback handler", type(failure).__name__)
            return Resolution(fallback, is_fallback=True)

        return None

    def dispatch(self, failure: object, context: dict[str, Any]) -> Outcome:
        """Resolve and invoke the handler.

        The handler's return value is passed through untouched. Exceptions
        raised by the handler propagate to the caller.

        Args:
            failure: Raw failure value
            context: Context built for this call

        Returns:
            Resolved with the handler's value, or Unhandled
        """
        resolution = self.resolve(failure)
        if resolution is None:
            logger.debug("No handler for %s", type(failure).__name__)
            return Unhandled(failure, context)

        value = resolution.handler(failure, context)
        return Resolved(value, is_fallback=resolution.is_fallback)
