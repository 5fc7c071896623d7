"""Safe wrappers - callables that route raised failures through the dispatcher."""

import functools
import inspect
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from safe_exec.errors import create_error

from .context import ADDITIONAL_CONTEXT_KEY, build_context

if TYPE_CHECKING:
    from .safe_exec import SafeExec


def _context_layer(layer: str, value: Any) -> dict[str, Any]:
    # Raised at wrap time, never from the failure path of a call.
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise create_error("CONTEXT_INVALID", layer=layer, value=value)
    return dict(value)


class SafeFn:
    """Synchronous safe wrapper.

    Calling it calls the wrapped operation with the same arguments. A value
    is returned unchanged; an ``Exception`` is handed to the owning engine
    and the handler's value is returned instead. ``BaseException`` subclasses
    that are not ``Exception`` (KeyboardInterrupt, SystemExit) pass through.
    """

    def __init__(
        self,
        engine: "SafeExec",
        operation: Callable[..., Any],
        static_context: Mapping[str, Any] | None = None,
        extra_context: Mapping[str, Any] | None = None,
    ):
        """Initialize wrapper.

        Args:
            engine: Engine whose registry resolves failures
            operation: Raw operation to wrap
            static_context: Context bound for the wrapper's lifetime
            extra_context: Extension layer set by ``add_context``
        """
        functools.update_wrapper(self, operation)
        self._engine = engine
        self._operation = operation
        self._static_context = _context_layer("static context", static_context)
        _context_layer(
            ADDITIONAL_CONTEXT_KEY, self._static_context.get(ADDITIONAL_CONTEXT_KEY)
        )
        self._extra_context = _context_layer("extra context", extra_context)

    @property
    def operation(self) -> Callable[..., Any]:
        return self._operation

    def add_context(self, extra: Mapping[str, Any]) -> "SafeFn":
        """Return a new wrapper whose handlers also see ``extra``.

        ``extra`` is merged into ``additional_context`` on top of the static
        context. Each call starts again from the static context: extending an
        extended wrapper replaces the previous extension.
        """
        return type(self)(self._engine, self._operation, self._static_context, extra)

    def _recover(self, failure: Exception, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
        context = build_context(
            failure,
            static=self._static_context,
            extra=self._extra_context,
            args=args,
            kwargs=kwargs,
        )
        return self._engine.settle(failure, context)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        try:
            return self._operation(*args, **kwargs)
        except Exception as failure:
            return self._recover(failure, args, kwargs)

    def __repr__(self) -> str:
        name = getattr(self._operation, "__qualname__", repr(self._operation))
        return f"<{type(self).__name__} {name}>"


class AsyncSafeFn(SafeFn):
    """Asynchronous safe wrapper.

    Awaits the operation's result; failures raised while awaiting are
    dispatched synchronously once the operation settles. Handlers are plain
    functions.
    """

    async def __call__(self, *args: Any, **kwargs: Any) -> Any:  # type: ignore[override]
        try:
            result = self._operation(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
            return result
        except Exception as failure:
            return self._recover(failure, args, kwargs)
