"""Context building: merges static, extension and invocation layers."""

import traceback
from collections.abc import Mapping
from typing import Any

ADDITIONAL_CONTEXT_KEY = "additional_context"
TRACE_KEY = "traceback"


def extract_trace(failure: object) -> str | None:
    """Diagnostic trace of a failure.

    The formatted traceback for a raised exception, otherwise a ``details``
    attribute or key. Exceptions that were never raised fall back to their
    one-line summary; other values without details yield None.
    """
    if isinstance(failure, BaseException) and failure.__traceback__ is not None:
        return "".join(traceback.format_exception(type(failure), failure, failure.__traceback__))
    details = getattr(failure, "details", None)
    if details is None and isinstance(failure, Mapping):
        details = failure.get("details")
    if details is None and isinstance(failure, BaseException):
        return "".join(traceback.format_exception_only(type(failure), failure)).rstrip("\n")
    if details is not None and not isinstance(details, str):
        details = str(details)
    return details


def build_context(
    failure: object,
    static: Mapping[str, Any] | None = None,
    extra: Mapping[str, Any] | None = None,
    args: tuple[Any, ...] = (),
    kwargs: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the context passed to a handler for a failed wrapped call.

    The top level and ``additional_context`` are fresh dicts; values inside
    them (including ``kwargs`` entries) are the caller's own objects.

    Args:
        failure: The captured failure
        static: Context bound when the operation was wrapped
        extra: Layer bound by ``add_context``
        args: Positional arguments of the failing call
        kwargs: Keyword arguments of the failing call

    Returns:
        Fresh context mapping
    """
    static = static or {}
    additional = {
        **(static.get(ADDITIONAL_CONTEXT_KEY) or {}),
        **(extra or {}),
        TRACE_KEY: extract_trace(failure),
    }
    return {
        **static,
        "args": args,
        "kwargs": dict(kwargs or {}),
        ADDITIONAL_CONTEXT_KEY: additional,
    }


def build_result_context(failure: object) -> dict[str, Any]:
    """Context for a failure unwrapped from a result object (no call layer)."""
    return {ADDITIONAL_CONTEXT_KEY: {TRACE_KEY: extract_trace(failure)}}
