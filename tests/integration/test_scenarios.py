"""End-to-end scenarios for SafeExec."""

import json

import pytest

from safe_exec import Err, Ok, SafeExec, SafeExecError, category, predicate, shape, substring


class ValidationError(Exception):
    pass


class DatabaseError(Exception):
    pass


class HTTPError(Exception):
    def __init__(self, status, message=""):
        super().__init__(message)
        self.status = status
        self.message = message


@pytest.mark.integration
class TestScenarios:
    """Behavior a caller relies on."""

    def test_timeout_substring(self, engine):
        engine.catch("timeout", lambda e, ctx: "T")

        def request():
            raise TimeoutError("Request timeout occurred")

        assert engine.get_safe_fn(request)() == "T"

    def test_categories_with_fallback(self, engine):
        engine.catch(ValidationError, lambda e, ctx: {"valid": False})
        engine.catch(DatabaseError, lambda e, ctx: {"data": []})
        engine.catch_all(lambda e, ctx: {"error": "unknown"})

        def validate():
            raise ValidationError("invalid input")

        def query():
            raise DatabaseError("connection failed")

        def other():
            raise RuntimeError("something else")

        assert engine.get_safe_fn(validate)() == {"valid": False}
        assert engine.get_safe_fn(query)() == {"data": []}
        assert engine.get_safe_fn(other)() == {"error": "unknown"}

    def test_shape_with_fallback(self, engine):
        engine.catch({"status": 404}, lambda e, ctx: "not found")
        engine.catch_all(lambda e, ctx: "fallback")

        def api_call(status):
            raise HTTPError(status, "x")

        safe = engine.get_safe_fn(api_call)
        assert safe(404) == "not found"
        assert safe(403) == "fallback"

    def test_no_handlers_terminates(self, engine, capsys):
        def operation():
            raise RuntimeError("fatal")

        with pytest.raises(SystemExit) as exc_info:
            engine.get_safe_fn(operation)()

        assert exc_info.value.code != 0
        assert "fatal" in capsys.readouterr().err

    def test_add_context_merges_layers(self, engine):
        seen = {}

        def handler(failure, context):
            seen.update(context)
            return None

        engine.catch_all(handler)

        def save(record, retries):
            raise RuntimeError("write failed")

        safe = engine.get_safe_fn(save, {"additional_context": {"operation": "op"}})
        safe.add_context({"user_id": "u1"})({"id": 1}, 3)

        assert seen["additional_context"]["operation"] == "op"
        assert seen["additional_context"]["user_id"] == "u1"
        assert seen["args"] == ({"id": 1}, 3)


@pytest.mark.integration
class TestRealWorld:
    """Wrapping library calls."""

    def test_json_parsing(self, engine):
        engine.catch(json.JSONDecodeError, lambda e, ctx: {})
        safe_parse = engine.get_safe_fn(json.loads)

        assert safe_parse('{"name": "test"}') == {"name": "test"}
        assert safe_parse("invalid json") == {}

    def test_file_read(self, engine, tmp_path):
        engine.catch(FileNotFoundError, lambda e, ctx: None)
        engine.catch(PermissionError, lambda e, ctx: None)
        existing = tmp_path / "file.txt"
        existing.write_text("content")

        safe_read = engine.get_safe_fn(lambda path: path.read_text())

        assert safe_read(existing) == "content"
        assert safe_read(tmp_path / "missing.txt") is None

    def test_explicit_matchers_and_shared_registry(self, engine):
        engine.catch_many(
            [
                (category(ZeroDivisionError), lambda e, ctx: 0),
                (shape(status=500), lambda e, ctx: {"server_error": True}),
                (
                    predicate(lambda e: getattr(e, "status", 0) >= 400),
                    lambda e, ctx: {"client": True},
                ),
                (substring("ENOENT"), lambda e, ctx: ""),
            ]
        ).freeze()

        def divide(a, b):
            return a / b

        def api(status):
            raise HTTPError(status)

        safe_divide = engine.get_safe_fn(divide)
        safe_api = engine.get_safe_fn(api)

        assert safe_divide(10, 2) == 5
        assert safe_divide(10, 0) == 0
        assert safe_api(500) == {"server_error": True}
        assert safe_api(418) == {"client": True}
        with pytest.raises(SafeExecError):
            engine.catch("late", lambda e, ctx: None)

    def test_result_values(self, engine):
        engine.catch("DB_ERROR", lambda e, ctx: [])

        assert engine.unwrap(Ok([{"id": 1, "name": "test"}])) == [{"id": 1, "name": "test"}]
        assert engine.unwrap(Err(RuntimeError("DB_ERROR"))) == []

    @pytest.mark.asyncio
    async def test_async_api_calls(self, engine):
        engine.catch("timeout", lambda e, ctx: "timeout_fallback")
        engine.catch("network", lambda e, ctx: "offline_fallback")
        engine.catch_all(lambda e, ctx: "unknown_error")

        async def fetch_user(user_id):
            if user_id == "timeout":
                raise TimeoutError("timeout error")
            if user_id == "network":
                raise ConnectionError("network error")
            return {"id": user_id, "name": "User"}

        fetch = engine.get_safe_fn_async(fetch_user)

        assert await fetch("123") == {"id": "123", "name": "User"}
        assert await fetch("timeout") == "timeout_fallback"
        assert await fetch("network") == "offline_fallback"
