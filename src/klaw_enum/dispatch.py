"""Handler maps and handler invocation for match, match_async and guards.

A handler map arrives as a mapping and/or keyword arguments keyed by variant
name, with ``_`` as the catch-all. It is normalized into ``Arms`` so the
fallback lives in its own slot and can never be mistaken for a tag.

Handlers are called with ``(payload, variant)`` and the fallback with
``(variant)``. A callable that declares fewer positional parameters receives
only the leading arguments it requires (defaulted parameters keep their
defaults), so all of these are valid arms:

    lambda: 'loading'
    lambda payload: payload.finished_at
    lambda payload, variant: variant.to_wire()
"""

from __future__ import annotations

import inspect
import types
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from klaw_enum.errors import FALLBACK

__all__ = ['Arms', 'collect_arms', 'invoke']

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


@dataclass(slots=True, frozen=True)
class Arms:
    """Normalized handler map.

    Attributes:
        handlers: Variant name -> handler called with ``(payload, variant)``.
        fallback: Catch-all handler called with ``(variant)``, if any.
    """

    handlers: Mapping[str, Callable[..., Any]] = field(default_factory=dict)
    fallback: Callable[..., Any] | None = None

    def select(self, tag: str) -> tuple[Callable[..., Any], bool] | None:
        """Pick the arm for tag.

        Returns:
            ``(handler, is_fallback)``, or None when nothing applies.
        """
        handler = self.handlers.get(tag)
        if handler is not None:
            return handler, False
        if self.fallback is not None:
            return self.fallback, True
        return None


def collect_arms(
    arms: Mapping[str, Callable[..., Any]] | None,
    handlers: Mapping[str, Callable[..., Any]],
) -> Arms:
    """Merge a positional handler mapping with keyword handlers.

    Keyword handlers win over mapping entries with the same key.

    Raises:
        TypeError: If a handler is not callable.
    """
    merged: dict[str, Callable[..., Any]] = dict(arms) if arms is not None else {}
    merged.update(handlers)
    for key, handler in merged.items():
        if not callable(handler):
            msg = f'Handler for {key!r} must be callable, got {type(handler).__name__}'
            raise TypeError(msg)
    fallback = merged.pop(FALLBACK, None)
    return Arms(handlers=merged, fallback=fallback)


def _positional_capacity(fn: Callable[..., Any]) -> int | None:
    """How many required positional arguments fn takes; None means unbounded.

    Parameters with defaults are never filled, so ``def area(radius, scale=1.0)``
    receives only the payload.
    """
    if isinstance(fn, types.FunctionType):
        code = fn.__code__
        if code.co_flags & inspect.CO_VARARGS:
            return None
        return code.co_argcount - len(fn.__defaults__ or ())
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        # builtins without introspectable signatures get the leading argument
        return 1
    count = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in _POSITIONAL and param.default is inspect.Parameter.empty:
            count += 1
    return count


def invoke(fn: Callable[..., Any], *args: Any) -> Any:
    """Call fn with as many leading args as it requires."""
    capacity = _positional_capacity(fn)
    if capacity is None or capacity >= len(args):
        return fn(*args)
    return fn(*args[:capacity])
