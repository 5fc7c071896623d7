"""SafeExec engine - matchers, registry, dispatcher and safe wrappers."""

from .context import build_context, build_result_context, extract_trace
from .dispatcher import Dispatcher
from .matchers import (
    CategoryMatcher,
    Matcher,
    PredicateMatcher,
    ShapeMatcher,
    SubstringMatcher,
    as_matcher,
    category,
    failure_message,
    predicate,
    shape,
    substring,
)
from .registry import HandlerRegistry
from .safe_exec import SafeExec
from .types import Handler, HandlerEntry, Outcome, Resolution, Resolved, Unhandled
from .wrapper import AsyncSafeFn, SafeFn

__all__ = [
    # Engine
    "SafeExec",
    "SafeFn",
    "AsyncSafeFn",
    "Dispatcher",
    "HandlerRegistry",
    # Matchers
    "Matcher",
    "CategoryMatcher",
    "SubstringMatcher",
    "ShapeMatcher",
    "PredicateMatcher",
    "as_matcher",
    "category",
    "substring",
    "shape",
    "predicate",
    "failure_message",
    # Types
    "Handler",
    "HandlerEntry",
    "Resolution",
    "Resolved",
    "Unhandled",
    "Outcome",
    # Context
    "build_context",
    "build_result_context",
    "extract_trace",
]
