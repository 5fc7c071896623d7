"""Unit tests for the asynchronous safe wrapper."""

import asyncio

import pytest

from safe_exec import AsyncSafeFn


class NetworkError(Exception):
    pass


class TestAsyncSafeFn:
    """get_safe_fn_async behaves like get_safe_fn across an await."""

    @pytest.mark.asyncio
    async def test_returns_value(self, engine):
        async def add(a, b):
            return a + b

        safe = engine.get_safe_fn_async(add)

        assert isinstance(safe, AsyncSafeFn)
        assert await safe(2, 3) == 5

    @pytest.mark.asyncio
    async def test_handles_failure_after_suspension(self, engine):
        engine.catch("async division", lambda e, ctx: 0)

        async def divide(a, b):
            await asyncio.sleep(0)
            if b == 0:
                raise ZeroDivisionError("async division by zero")
            return a / b

        safe = engine.get_safe_fn_async(divide)

        assert await safe(10, 2) == 5
        assert await safe(10, 0) == 0

    @pytest.mark.asyncio
    async def test_category_matching(self, engine):
        engine.catch(NetworkError, lambda e, ctx: {"id": "unknown", "name": "Guest"})

        async def fetch_user(user_id):
            raise NetworkError("Failed to fetch user")

        assert await engine.get_safe_fn_async(fetch_user)("123") == {
            "id": "unknown",
            "name": "Guest",
        }

    @pytest.mark.asyncio
    async def test_args_in_context(self, engine):
        seen = {}

        def handler(failure, context):
            seen.update(context)
            return "handled"

        engine.catch("error", handler)

        async def operation(a, b):
            raise RuntimeError("error")

        await engine.get_safe_fn_async(operation, {"operation": "fetch"})(42, "async")

        assert seen["args"] == (42, "async")
        assert seen["operation"] == "fetch"
        assert "RuntimeError: error" in seen["additional_context"]["traceback"]

    @pytest.mark.asyncio
    async def test_add_context(self, engine):
        seen = {}

        def handler(failure, context):
            seen.update(context["additional_context"])
            return "handled"

        engine.catch_all(handler)

        async def operation():
            raise RuntimeError("anything")

        extended = engine.get_safe_fn_async(operation).add_context({"request_id": "123"})

        assert isinstance(extended, AsyncSafeFn)
        assert await extended() == "handled"
        assert seen["request_id"] == "123"

    @pytest.mark.asyncio
    async def test_failure_raised_before_awaitable_created(self, engine):
        engine.catch(TypeError, lambda e, ctx: "sync raise")

        def not_really_async(x):
            raise TypeError("bad argument")

        assert await engine.get_safe_fn_async(not_really_async)(1) == "sync raise"

    @pytest.mark.asyncio
    async def test_plain_value_passed_through(self, engine):
        assert await engine.get_safe_fn_async(lambda: "plain")() == "plain"

    @pytest.mark.asyncio
    async def test_cancellation_not_captured(self, engine):
        engine.catch_all(lambda e, ctx: "swallowed")

        async def cancelled():
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await engine.get_safe_fn_async(cancelled)()

    @pytest.mark.asyncio
    async def test_concurrent_calls_have_independent_contexts(self, engine):
        seen = []
        engine.catch_all(lambda e, ctx: seen.append(ctx) or ctx["args"][0])

        async def operation(n):
            await asyncio.sleep(0)
            raise RuntimeError(f"failure {n}")

        safe = engine.get_safe_fn_async(operation)
        results = await asyncio.gather(*(safe(n) for n in range(5)))

        assert results == [0, 1, 2, 3, 4]
        assert len({id(ctx) for ctx in seen}) == 5
