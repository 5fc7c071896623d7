"""SafeExec - declarative failure handling for wrapped operations."""

import logging
import os
import sys
import threading
from collections.abc import Awaitable, Callable, Iterable, Mapping
from pathlib import Path
from typing import Any, NoReturn

from safe_exec.config import ConfigLoader, SafeExecConfig
from safe_exec.errors import create_error
from safe_exec.logging import DiagnosticLogger, LogConfig
from safe_exec.result import ResultLike
from safe_exec.types import UnhandledPolicy

from .context import ADDITIONAL_CONTEXT_KEY, TRACE_KEY, build_result_context, extract_trace
from .dispatcher import Dispatcher
from .registry import HandlerRegistry
from .types import Handler, Outcome, Resolution, Resolved, Unhandled
from .wrapper import AsyncSafeFn, SafeFn

logger = logging.getLogger(__name__)


class SafeExec:
    """Failure classification and dispatch engine.

    Handlers are registered against matchers and consulted in registration
    order whenever a wrapped operation raises:

        engine = (
            SafeExec()
            .catch(ValidationError, lambda err, ctx: {"valid": False})
            .catch("timeout", lambda err, ctx: None)
            .catch_all(lambda err, ctx: {"error": "unknown"})
        )
        safe_query = engine.get_safe_fn(query, {"operation": "query"})

    A failure with no matching handler and no fallback is unhandled. By
    default a diagnostic is written to stderr and the process exits with a
    non-zero status; ``UnhandledPolicy.RAISE`` raises SafeExecError instead,
    and ``dispatch()`` returns the outcome without escalating.
    """

    def __init__(
        self,
        handlers: Iterable[tuple[Any, Handler]] | None = None,
        *,
        config: SafeExecConfig | None = None,
        diagnostics: DiagnosticLogger | None = None,
    ):
        """Initialize engine.

        Args:
            handlers: Initial ``(matcher, handler)`` pairs, in order
            config: Engine configuration (defaults to SafeExecConfig())
            diagnostics: Logger for unhandled failures (built from config if omitted)
        """
        self.config = config or SafeExecConfig()
        self._registry = HandlerRegistry()
        self._dispatcher = Dispatcher(self._registry)
        self._diagnostics = diagnostics or DiagnosticLogger(
            LogConfig(
                format=self.config.diagnostics.format,
                truncate_at=self.config.diagnostics.truncate_at,
                include_traceback=self.config.diagnostics.include_traceback,
            )
        )
        if handlers:
            self.catch_many(handlers)

    @classmethod
    def from_config(
        cls,
        path: str | Path | None = None,
        handlers: Iterable[tuple[Any, Handler]] | None = None,
    ) -> "SafeExec":
        """Create an engine from a YAML configuration file.

        Args:
            path: Config file path (resolved by ConfigLoader when omitted)
            handlers: Initial ``(matcher, handler)`` pairs

        Returns:
            Configured SafeExec
        """
        return cls(handlers, config=ConfigLoader().load(path))

    @property
    def registry(self) -> HandlerRegistry:
        return self._registry

    # -- registration -----------------------------------------------------

    def catch(self, matcher: Any, handler: Handler) -> "SafeExec":
        """Register a handler for failures matching ``matcher``."""
        self._registry.append(matcher, handler)
        return self

    def catch_many(self, handlers: Iterable[tuple[Any, Handler]]) -> "SafeExec":
        """Register multiple ``(matcher, handler)`` pairs at once."""
        self._registry.append_many(handlers)
        return self

    def catch_all(self, handler: Handler) -> "SafeExec":
        """Register the fallback handler used when nothing else matches."""
        self._registry.set_fallback(handler)
        return self

    def freeze(self) -> "SafeExec":
        """Finish registration. Later ``catch*`` calls raise REGISTRY_FROZEN."""
        self._registry.freeze()
        return self

    # -- dispatch ---------------------------------------------------------

    def resolve(self, failure: object) -> Resolution | None:
        """Handler that would run for ``failure``, without running it."""
        return self._dispatcher.resolve(failure)

    def dispatch(self, failure: object, context: Mapping[str, Any] | None = None) -> Outcome:
        """Run the matching handler and report the outcome.

        Never escalates: an unresolved failure comes back as Unhandled.
        """
        return self._dispatcher.dispatch(failure, dict(context or {}))

    def settle(self, failure: object, context: dict[str, Any]) -> Any:
        """Dispatch a failure and return the handler's value.

        Unhandled failures are escalated according to ``config.unhandled``.
        """
        outcome = self._dispatcher.dispatch(failure, context)
        if isinstance(outcome, Resolved):
            return outcome.value
        self._escalate(outcome)

    def _escalate(self, outcome: Unhandled) -> NoReturn:
        failure = outcome.failure
        policy = self.config.unhandled.policy

        if policy == UnhandledPolicy.RAISE:
            logger.debug("Raising for unhandled %s", type(failure).__name__)
            error = create_error("UNHANDLED_FAILURE", failure=failure)
            if isinstance(failure, BaseException):
                raise error from failure
            raise error

        additional = outcome.context.get(ADDITIONAL_CONTEXT_KEY) or {}
        trace = additional.get(TRACE_KEY) or extract_trace(failure)
        self._diagnostics.unhandled(failure, trace)
        exit_code = self.config.unhandled.exit_code
        if threading.current_thread() is threading.main_thread():
            sys.exit(exit_code)
        # SystemExit only ends the current thread.
        sys.stdout.flush()
        sys.stderr.flush()
        os._exit(exit_code)

    # -- wrappers ---------------------------------------------------------

    def get_safe_fn(
        self,
        operation: Callable[..., Any],
        static_context: Mapping[str, Any] | None = None,
    ) -> SafeFn:
        """Wrap a synchronous operation.

        Args:
            operation: Raw operation
            static_context: Context merged into every handler call; its
                ``additional_context`` entry is merged into the call's
                ``additional_context``

        Returns:
            Callable with the operation's signature and an ``add_context`` method
        """
        return SafeFn(self, operation, static_context)

    def get_safe_fn_async(
        self,
        operation: Callable[..., Awaitable[Any]],
        static_context: Mapping[str, Any] | None = None,
    ) -> AsyncSafeFn:
        """Wrap an asynchronous operation. See ``get_safe_fn``."""
        return AsyncSafeFn(self, operation, static_context)

    # -- result adapter ---------------------------------------------------

    def unwrap(self, result: ResultLike) -> Any:
        """Return a success's value, or dispatch a failure's error.

        Raises:
            SafeExecError: RESULT_INVALID if ``result`` is not result-like
        """
        if not isinstance(result, ResultLike):
            raise create_error("RESULT_INVALID", result=result)

        try:
            if result.is_ok():
                return result.value  # type: ignore[attr-defined]
            failure = result.error  # type: ignore[attr-defined]
        except AttributeError as e:
            raise create_error("RESULT_INVALID", result=result, detail=str(e)) from e

        return self.settle(failure, build_result_context(failure))

    async def unwrap_async(self, result: Awaitable[ResultLike]) -> Any:
        """Await a result, then ``unwrap`` it."""
        return self.unwrap(await result)
