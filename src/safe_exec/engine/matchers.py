"""Failure matchers: the four classification rules a handler can be bound to."""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from safe_exec.errors import create_error
from safe_exec.types import MatcherKind

# Values compared by type and value in shape matching. Enum members compare
# through their value; bool never equals a number. Everything else is compared
# by identity.
_SCALARS = (str, bytes, int, float, complex, bool, type(None))


class Matcher(ABC):
    """Base class for failure matchers."""

    kind: MatcherKind

    @abstractmethod
    def matches(self, failure: object) -> bool:
        """Check if this matcher classifies the failure.

        Args:
            failure: Raw failure value (usually an exception)

        Returns:
            True if the failure matches
        """


@dataclass(frozen=True)
class CategoryMatcher(Matcher):
    """Matches failures whose type is ``category`` or a subclass of it."""

    category: type
    kind: MatcherKind = field(default=MatcherKind.CATEGORY, init=False)

    def matches(self, failure: object) -> bool:
        return isinstance(failure, self.category)


@dataclass(frozen=True)
class SubstringMatcher(Matcher):
    """Matches failures whose message contains ``text`` (case-sensitive)."""

    text: str
    kind: MatcherKind = field(default=MatcherKind.SUBSTRING, init=False)

    def matches(self, failure: object) -> bool:
        return self.text in failure_message(failure)


@dataclass(frozen=True)
class ShapeMatcher(Matcher):
    """Matches structured failures carrying every field of ``fields``.

    Mappings are looked up by key, other objects by attribute. Scalars must
    have the same type and value; any other expected value must be the very
    same object.
    """

    fields: Mapping[str, Any]
    kind: MatcherKind = field(default=MatcherKind.SHAPE, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def matches(self, failure: object) -> bool:
        if isinstance(failure, _SCALARS):
            return False

        for key, expected in self.fields.items():
            if isinstance(failure, Mapping):
                if key not in failure:
                    return False
                actual = failure[key]
            else:
                if not isinstance(key, str) or not hasattr(failure, key):
                    return False
                actual = getattr(failure, key)
            if not _strict_equal(actual, expected):
                return False
        return True


@dataclass(frozen=True)
class PredicateMatcher(Matcher):
    """Matches failures for which ``predicate(failure)`` is truthy."""

    predicate: Callable[[object], bool]
    kind: MatcherKind = field(default=MatcherKind.PREDICATE, init=False)

    def matches(self, failure: object) -> bool:
        return bool(self.predicate(failure))


def failure_message(failure: object) -> str:
    """Human-readable message of a failure.

    A ``message`` attribute (or mapping key) wins over the string rendering.
    """
    message = getattr(failure, "message", None)
    if isinstance(message, str):
        return message
    if isinstance(failure, Mapping):
        message = failure.get("message")
        if isinstance(message, str):
            return message
    return str(failure)


def _strict_equal(actual: object, expected: object) -> bool:
    if actual is expected:
        return True
    actual = _plain(actual)
    expected = _plain(expected)
    if isinstance(actual, bool) or isinstance(expected, bool):
        return type(actual) is bool and type(expected) is bool and actual == expected
    if isinstance(expected, _SCALARS):
        return type(actual) is type(expected) and actual == expected
    return False


def _plain(value: object) -> object:
    return value.value if isinstance(value, Enum) else value


# Explicit constructors. Registering through these removes any guesswork
# about what a callable stands for.


def category(cls: type) -> CategoryMatcher:
    """Match failures by type (``isinstance``)."""
    if not isinstance(cls, type):
        raise create_error("MATCHER_INVALID", matcher=cls, detail="category() requires a class")
    return CategoryMatcher(cls)


def substring(text: str) -> SubstringMatcher:
    """Match failures whose message contains ``text``."""
    if not isinstance(text, str):
        raise create_error("MATCHER_INVALID", matcher=text, detail="substring() requires a str")
    return SubstringMatcher(text)


def shape(fields: Mapping[str, Any] | None = None, **kwargs: Any) -> ShapeMatcher:
    """Match structured failures by fields, e.g. ``shape(status=404)``."""
    if fields is not None and not isinstance(fields, Mapping):
        raise create_error("MATCHER_INVALID", matcher=fields, detail="shape() requires a mapping")
    return ShapeMatcher({**(fields or {}), **kwargs})


def predicate(fn: Callable[[object], bool]) -> PredicateMatcher:
    """Match failures with an arbitrary boolean function."""
    if not callable(fn):
        raise create_error("MATCHER_INVALID", matcher=fn, detail="predicate() requires a callable")
    return PredicateMatcher(fn)


def as_matcher(value: Any) -> Matcher:
    """Coerce a registration value into a tagged matcher.

    Classes are categories, strings are substrings, mappings are shapes and
    any other callable is a predicate. Called once, at registration.

    Raises:
        SafeExecError: MATCHER_INVALID for anything else
    """
    if isinstance(value, Matcher):
        return value
    if isinstance(value, type):
        return CategoryMatcher(value)
    if isinstance(value, str):
        return SubstringMatcher(value)
    if isinstance(value, Mapping):
        return ShapeMatcher(value)
    if callable(value):
        return PredicateMatcher(value)
    raise create_error("MATCHER_INVALID", matcher=value)
