"""Option type: Some[T] | Nothing for optional values.

``Some`` and ``Nothing`` are variants of the closed ``{Some, None}`` schema.
The empty variant keeps the wire tag ``"None"``; in Python it is spelled
``Nothing`` (a ``NothingType`` singleton) since ``None`` is taken.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, NoReturn

from klaw_enum.errors import UnwrapError
from klaw_enum.factory import VariantFactory
from klaw_enum.schema import UNIT
from klaw_enum.variant import Variant

if TYPE_CHECKING:
    from klaw_enum.result import Result

__all__ = ['OPTION', 'Nothing', 'NothingType', 'Option', 'OptionFactory', 'Some', 'from_optional']


def _expect_option(value: Any, where: str) -> Any:
    if not isinstance(value, Some | NothingType):
        msg = f'{where}() callback must return Some or Nothing, got {type(value).__name__}'
        raise TypeError(msg)
    return value


class Some[T](Variant):
    """Some variant of Option containing a value of type T.

    Examples:
        >>> Some(42).ok_or('missing')
        Ok(42)
        >>> some = Some(42)
        >>> some.filter(lambda x: x > 100)
        Nothing
    """

    __slots__ = ()
    __match_args__ = ('value',)

    def __init__(self, value: T) -> None:
        Variant.__init__(self, 'Some', value, OPTION)

    @property
    def value(self) -> T:
        """The contained value."""
        return self.payload

    def is_some(self) -> bool:
        """Return True since this is Some."""
        return True

    def is_none(self) -> bool:
        """Return False since this is Some."""
        return False

    def unwrap(self) -> T:
        return self.payload

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self.payload

    def unwrap_or_else(self, f: Callable[[], T]) -> T:  # noqa: ARG002
        return self.payload

    def expect(self, _msg: str) -> T:
        return self.payload

    def map[U](self, f: Callable[[T], U]) -> Some[U]:
        """Apply f to the contained value, keeping it wrapped in Some."""
        return Some(f(self.payload))

    def map_or[U](self, default: U, f: Callable[[T], U]) -> U:  # noqa: ARG002
        return f(self.payload)

    def and_then[U](self, f: Callable[[T], Option[U]]) -> Option[U]:
        """Apply a function that returns an Option to the contained value.

        Raises:
            TypeError: If f does not return Some or Nothing.
        """
        return _expect_option(f(self.payload), 'and_then')

    def or_else(self, _f: Callable[[], Option[T]]) -> Some[T]:
        return self

    def filter(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Keep the value only if predicate(value) is truthy.

        Returns:
            self if the predicate holds, else Nothing.
        """
        if predicate(self.payload):
            return self
        return Nothing

    def ok_or(self, _err: Any) -> Result[T, Any]:
        """Convert to Result, returning Ok(value)."""
        from klaw_enum.result import Ok

        return Ok(self.payload)

    def ok_or_else(self, _f: Callable[[], Any]) -> Result[T, Any]:
        """Convert to Result, returning Ok(value) without calling f."""
        from klaw_enum.result import Ok

        return Ok(self.payload)

    def __repr__(self) -> str:
        return f'Some({self.payload!r})'


class NothingType(Variant):
    """Empty variant of Option (wire tag ``"None"``).

    Use the ``Nothing`` constant; every instance compares equal to it.

    Examples:
        >>> Nothing.unwrap_or(0)
        0
        >>> Nothing.to_wire()
        {'tag': 'None', 'data': None}
    """

    __slots__ = ()
    __match_args__ = ()

    def __init__(self) -> None:
        Variant.__init__(self, 'None', None, OPTION)

    def is_some(self) -> bool:
        return False

    def is_none(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raise since there is no value.

        Raises:
            UnwrapError: Always.
        """
        raise UnwrapError('Called unwrap() on Option.None')

    def unwrap_or[T](self, default: T) -> T:
        return default

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        return f()

    def expect(self, msg: str) -> NoReturn:
        raise UnwrapError(msg)

    def map(self, _f: Callable[[Any], Any]) -> NothingType:
        return self

    def map_or[U](self, default: U, _f: Callable[[Any], U]) -> U:
        return default

    def and_then(self, _f: Callable[[Any], Any]) -> NothingType:
        """Return Nothing without calling f."""
        return self

    def or_else[T](self, f: Callable[[], Option[T]]) -> Option[T]:
        """Return the Option produced by f.

        Raises:
            TypeError: If f does not return Some or Nothing.
        """
        return _expect_option(f(), 'or_else')

    def filter(self, _predicate: Callable[[Any], bool]) -> NothingType:
        return self

    def ok_or[E](self, err: E) -> Result[Any, E]:
        """Convert to Result, returning Err(err)."""
        from klaw_enum.result import Err

        return Err(err)

    def ok_or_else[E](self, f: Callable[[], E]) -> Result[Any, E]:
        """Convert to Result, returning Err(f())."""
        from klaw_enum.result import Err

        return Err(f())

    def __repr__(self) -> str:
        return 'Nothing'


type Option[T] = Some[T] | NothingType


class OptionFactory(VariantFactory):
    """Factory for the closed ``{Some, None}`` schema.

    Use the ``OPTION`` instance. The empty variant is constructed with
    ``OPTION.construct('None')`` or ``OPTION['None']()`` and is always the
    ``Nothing`` singleton.
    """

    def __init__(self) -> None:
        super().__init__({'Some': Any, 'None': UNIT}, name='Option')

    def variant_class(self, tag: str) -> type[Variant]:
        return Some if tag == 'Some' else NothingType

    def _build(self, tag: str, payload: Any) -> Variant:
        if tag == 'None':
            self._check_payload(tag, payload)
            return Nothing
        return super()._build(tag, payload)


OPTION = OptionFactory()

Nothing: NothingType = NothingType()
"""Singleton instance representing the absence of a value."""


def from_optional[T](value: T | None) -> Option[T]:
    """Wrap a nullable value: None becomes Nothing, anything else Some(value)."""
    if value is None:
        return Nothing
    return Some(value)
