"""Tagged values and their dispatch methods.

A ``Variant`` is an immutable ``(tag, payload)`` pair plus a handle to the
factory that built it. Dispatch (``match``, ``match_async``,
``match_exhaustive``, ``if_``, ``if_not``) is a pure function of the pair and
the caller's handlers, so a value can be shared freely between threads and
tasks.

Example:
    ```python
    Status = enum('Status', {'Loading': None, 'Ready': datetime})

    status = Status.Ready(datetime.now())
    status.match(Loading=lambda: 'waiting', Ready=lambda at: f'done at {at}')
    status.if_('Ready')  # True
    status.to_wire()  # {'tag': 'Ready', 'data': datetime(...)}
    ```
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from klaw_enum._logging import get_logger
from klaw_enum.dispatch import Arms, collect_arms, invoke
from klaw_enum.errors import FALLBACK, MissingHandlerError

if TYPE_CHECKING:
    from klaw_enum.factory import VariantFactory

__all__ = ['Handler', 'Variant']

type Handler = Callable[..., Any]

logger = get_logger(__name__)


@dataclass(slots=True, frozen=True, eq=False, match_args=False)
class Variant:
    """One value of a tagged union.

    Two values are equal when they share the concrete class, the owning
    factory, the tag and the payload. Values of different enums never
    compare equal, even when their tags and payloads coincide.

    Attributes:
        tag: Variant name.
        payload: Data carried by the variant (None for unit variants).
        factory: The factory that built this value, used to construct
            siblings and to reach the schema.
    """

    tag: str
    payload: Any
    factory: VariantFactory = field(repr=False)

    __match_args__ = ('tag', 'payload')

    @classmethod
    def _create(cls, tag: str, payload: Any, factory: VariantFactory) -> Any:
        """Build an instance of cls without going through a subclass __init__."""
        obj = object.__new__(cls)
        Variant.__init__(obj, tag, payload, factory)
        return obj

    @property
    def data(self) -> Any:
        """Alias of payload."""
        return self.payload

    def key(self) -> str:
        """Return the tag."""
        return self.tag

    # --- Serialization ---

    def to_wire(self) -> dict[str, Any]:
        """Project to the ``{'tag': ..., 'data': ...}`` wire form."""
        return {'tag': self.tag, 'data': self.payload}

    def to_keyed(self) -> dict[str, Any]:
        """Project to the single-key ``{tag: payload}`` form."""
        return {self.tag: self.payload}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Variant) or type(other) is not type(self):
            return NotImplemented
        return self.factory is other.factory and self.tag == other.tag and self.payload == other.payload

    def __hash__(self) -> int:
        return hash((id(self.factory), self.tag, self.payload))

    # --- Dispatch ---

    def _select(self, arms: Arms) -> Any:
        chosen = arms.select(self.tag)
        if chosen is None:
            logger.debug('missing_handler', tag=self.tag, enum=self.factory.name)
            raise MissingHandlerError(self.tag)
        handler, is_fallback = chosen
        if is_fallback:
            return invoke(handler, self)
        return invoke(handler, self.payload, self)

    def match(self, arms: Mapping[str, Handler] | None = None, /, **handlers: Handler) -> Any:
        """Dispatch on the tag.

        Handlers may be passed as a mapping, as keyword arguments, or both.
        The arm for the active tag is called with ``(payload, variant)``;
        without one, the ``_`` arm is called with ``(variant)``. Arms for
        other tags are never consulted, so extra keys are harmless.

        Args:
            arms: Mapping of variant name (or ``_``) to handler.
            **handlers: Handlers by keyword; these win over ``arms``.

        Returns:
            Whatever the selected handler returns.

        Raises:
            MissingHandlerError: Neither the tag nor ``_`` has a handler.
        """
        return self._select(collect_arms(arms, handlers))

    async def match_async(self, arms: Mapping[str, Handler] | None = None, /, **handlers: Handler) -> Any:
        """Async variant of match.

        The selected handler may be a coroutine function or return any
        awaitable; its result is awaited. Plain return values pass through.
        """
        result = self._select(collect_arms(arms, handlers))
        if inspect.isawaitable(result):
            return await result
        return result

    def match_exhaustive(self, arms: Mapping[str, Handler] | None = None, /, **handlers: Handler) -> Any:
        """Dispatch requiring a handler for every declared variant.

        Raises:
            TypeError: If a ``_`` fallback is supplied.
            MissingHandlerError: If any declared variant (or, for dynamic
                factories, the active tag) has no handler.
        """
        collected = collect_arms(arms, handlers)
        if collected.fallback is not None:
            msg = "match_exhaustive() does not accept a '_' fallback"
            raise TypeError(msg)
        schema = self.factory.schema
        required = schema.names if schema.is_closed else (self.tag,)
        missing = [name for name in required if name not in collected.handlers]
        if missing:
            logger.debug('missing_handler', tag=self.tag, missing=missing, enum=self.factory.name)
            raise MissingHandlerError(self.tag, missing)
        return invoke(collected.handlers[self.tag], self.payload, self)

    # --- Guards ---

    def _check_guard_tag(self, tag: str) -> None:
        if tag == FALLBACK:
            msg = "Guards take a variant name, not the '_' fallback"
            raise TypeError(msg)

    def if_(
        self,
        tag: str,
        success: Handler | None = None,
        failure: Handler | None = None,
    ) -> Any:
        """Run success when the tag matches, failure otherwise.

        ``success`` receives ``(payload, variant)``; ``failure`` receives
        ``(variant)``. A handler returning None yields True (success) or
        False (failure); any other return value is passed through.

        Returns:
            True/False without handlers, otherwise the handler's result.
        """
        self._check_guard_tag(tag)
        if self.tag == tag:
            if success is None:
                return True
            result = invoke(success, self.payload, self)
            return True if result is None else result
        if failure is None:
            return False
        result = invoke(failure, self)
        return False if result is None else result

    def if_not(
        self,
        tag: str,
        success: Handler | None = None,
        failure: Handler | None = None,
    ) -> Any:
        """Mirror image of if_: success runs when the tag does not match.

        ``success`` receives ``(variant)``; ``failure`` receives
        ``(payload, variant)``.
        """
        self._check_guard_tag(tag)
        if self.tag != tag:
            if success is None:
                return True
            result = invoke(success, self)
            return True if result is None else result
        if failure is None:
            return False
        result = invoke(failure, self.payload, self)
        return False if result is None else result

    def __repr__(self) -> str:
        if self.payload is None:
            return f'{self.factory.name}.{self.tag}()'
        return f'{self.factory.name}.{self.tag}({self.payload!r})'
