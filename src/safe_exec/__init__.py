"""SafeExec - declarative "if the failure looks like X, do Y" handling.

Wrap a fallible callable once, register handlers against failure
categories, message substrings, field shapes or predicates, and call the
wrapper exactly like the callable it wraps.
"""

from safe_exec.engine import (
    AsyncSafeFn,
    Resolved,
    SafeExec,
    SafeFn,
    Unhandled,
    category,
    predicate,
    shape,
    substring,
)
from safe_exec.errors import SafeExecError
from safe_exec.result import Err, Ok

__version__ = "1.0.0"
__all__ = [
    "__version__",
    "SafeExec",
    "SafeFn",
    "AsyncSafeFn",
    "Resolved",
    "Unhandled",
    "SafeExecError",
    "category",
    "substring",
    "shape",
    "predicate",
    "Ok",
    "Err",
]
