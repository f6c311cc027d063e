"""Identity-based handler bookkeeping shared by the bus and the store."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

Handler = Callable[..., Any]


def same_handler(left: Handler, right: Handler) -> bool:
    """Return True when both references denote the same handler.

    Plain callables compare by identity. Bound methods are created fresh on
    every attribute access, so two bound methods match when they are bound to
    the same instance and wrap the same function object. Builtin methods such
    as ``list.append`` carry no ``__func__``; they match on instance, method
    type and method name. Value equality of handlers is never consulted.
    """
    if left is right:
        return True
    left_self = getattr(left, "__self__", None)
    if left_self is None or getattr(right, "__self__", None) is not left_self:
        return False
    left_func = getattr(left, "__func__", None)
    if left_func is not None:
        return getattr(right, "__func__", None) is left_func
    return type(left) is type(right) and getattr(left, "__name__", None) == getattr(
        right, "__name__", object()
    )


def find_handler(handlers: Sequence[Handler], handler: Handler) -> int:
    """Return the position of ``handler`` in ``handlers`` or -1."""
    for index, candidate in enumerate(handlers):
        if same_handler(candidate, handler):
            return index
    return -1
