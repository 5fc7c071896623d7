"""Two-variant result interface consumed by ``SafeExec.unwrap``.

Any object with ``is_ok()`` qualifies: successes expose ``value``, failures
expose ``error``. ``Ok`` and ``Err`` are minimal implementations.

Example:
    ```python
    from safe_exec import SafeExec
    from safe_exec.result import Err, Ok

    engine = SafeExec().catch("DB_ERROR", lambda err, ctx: [])
    engine.unwrap(Ok([1, 2]))  # [1, 2]
    engine.unwrap(Err(RuntimeError("DB_ERROR")))  # []
    ```
"""

from dataclasses import dataclass
from typing import Any, Literal, Protocol, runtime_checkable


@runtime_checkable
class ResultLike(Protocol):
    """Success/failure discriminant."""

    def is_ok(self) -> bool: ...


@dataclass(frozen=True, slots=True)
class Ok:
    """Successful computation holding ``value``."""

    value: Any

    def is_ok(self) -> Literal[True]:
        return True

    def is_err(self) -> Literal[False]:
        return False


@dataclass(frozen=True, slots=True)
class Err:
    """Failed computation holding ``error``."""

    error: Any

    def is_ok(self) -> Literal[False]:
        return False

    def is_err(self) -> Literal[True]:
        return True


Result = Ok | Err
