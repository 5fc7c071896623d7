"""Unit tests for HandlerRegistry."""

import pytest

from safe_exec.engine.matchers import SubstringMatcher, category
from safe_exec.engine.registry import HandlerRegistry
from safe_exec.errors import SafeExecError


def handler(failure, context):
    return "handled"


class TestRegistration:
    """append / append_many / set_fallback."""

    def test_starts_empty(self):
        registry = HandlerRegistry()
        assert len(registry) == 0
        assert registry.fallback is None
        assert not registry.frozen

    def test_append_preserves_order(self):
        registry = HandlerRegistry()
        registry.append("first", handler).append("second", handler)

        texts = [entry.matcher.text for entry in registry]
        assert texts == ["first", "second"]

    def test_append_returns_registry(self):
        registry = HandlerRegistry()
        assert registry.append("x", handler) is registry

    def test_append_coerces_matcher(self):
        registry = HandlerRegistry().append("timeout", handler)
        assert isinstance(registry.entries[0].matcher, SubstringMatcher)

    def test_append_many(self):
        registry = HandlerRegistry()
        registry.append("a", handler)
        registry.append_many([("b", handler), (category(KeyError), handler)])

        assert len(registry) == 3
        assert registry.entries[2].matcher.category is KeyError

    def test_append_many_is_all_or_nothing(self):
        registry = HandlerRegistry()
        with pytest.raises(SafeExecError):
            registry.append_many([("ok", handler), (404, handler)])
        assert len(registry) == 0

    def test_set_fallback_replaces_previous(self):
        def other(failure, context):
            return "other"

        registry = HandlerRegistry().set_fallback(handler).set_fallback(other)
        assert registry.fallback is other

    def test_rejects_non_callable_handler(self):
        with pytest.raises(SafeExecError) as exc_info:
            HandlerRegistry().append("x", "not a handler")
        assert exc_info.value.code == "HANDLER_INVALID"

        with pytest.raises(SafeExecError):
            HandlerRegistry().set_fallback(None)


class TestSnapshots:
    """Entries are replaced, never mutated in place."""

    def test_entries_snapshot_unaffected_by_later_append(self):
        registry = HandlerRegistry().append("a", handler)
        snapshot = registry.entries

        registry.append("b", handler)

        assert len(snapshot) == 1
        assert len(registry.entries) == 2


class TestFreeze:
    """No registration after freeze()."""

    def test_freeze_blocks_all_mutators(self):
        registry = HandlerRegistry().append("a", handler).freeze()

        assert registry.frozen
        for mutate in (
            lambda: registry.append("b", handler),
            lambda: registry.append_many([("c", handler)]),
            lambda: registry.set_fallback(handler),
        ):
            with pytest.raises(SafeExecError) as exc_info:
                mutate()
            assert exc_info.value.code == "REGISTRY_FROZEN"

        assert len(registry) == 1
        assert registry.fallback is None
