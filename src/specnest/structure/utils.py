"""
Utility functions for declaration and invocation of user callables.

This module contains helpers shared by the group builder and the scope
resolver that don't have circular import dependencies.
"""

import inspect
import keyword
from typing import Any, Callable

from specnest.exceptions import InvalidHelperNameError

# Names owned by ExampleScope itself; helpers may not shadow them
RESERVED_HELPER_NAMES = frozenset(
    {
        "expect",
        "expect_deferred",
        "is_expected",
        "described_target",
        "resolve",
        "resolver",
        "successes",
        "example",
    }
)


def validate_helper_name(name: str) -> None:
    """
    Validate a helper name at declaration time.

    Helper names double as attribute names on the example scope, so they
    must be identifiers and must not collide with the scope's own API.

    Params:
        name: The helper name to validate

    Raises:
        InvalidHelperNameError: If the name is empty, not an identifier,
            a keyword, private, or reserved
    """
    if not name or not isinstance(name, str):
        raise InvalidHelperNameError(str(name), "must be a non-empty string")

    if not name.isidentifier() or keyword.iskeyword(name):
        raise InvalidHelperNameError(name, "must be a valid Python identifier")

    if name.startswith("_"):
        raise InvalidHelperNameError(name, "must not start with an underscore")

    if name in RESERVED_HELPER_NAMES:
        raise InvalidHelperNameError(name, "is reserved by the example scope")


def positional_arity(func: Callable[..., Any], limit: int) -> int:
    """
    Count how many leading positional arguments `func` can take, up to `limit`.

    Params:
        func: The callable to inspect
        limit: Maximum number of arguments the caller is able to supply

    Returns:
        Number of positional arguments to pass; `limit` when the callable
        accepts `*args` or its signature cannot be inspected
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return limit

    count = 0
    for param in signature.parameters.values():
        if param.kind == inspect.Parameter.VAR_POSITIONAL:
            return limit
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return min(count, limit)


def call_with_arity(func: Callable[..., Any], *args: Any) -> Any:
    """Call `func` with as many of `args` as its signature accepts."""
    return func(*args[: positional_arity(func, len(args))])
