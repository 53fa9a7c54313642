"""Result type: Ok[T] | Err[E] for explicit error handling.

``Ok`` and ``Err`` are ordinary variants of the closed ``{Ok, Err}`` schema,
so ``match``, ``if_``, ``to_wire`` and ``RESULT.parse`` work on them like on
any other tagged value. The concrete class is chosen by tag when the value is
built; each class implements the adapter methods for its side.

Example:
    ```python
    from klaw_enum import Err, Ok

    def parse_port(raw: str) -> Result[int, str]:
        if raw.isdigit():
            return Ok(int(raw))
        return Err(f'not a port: {raw}')

    parse_port('80').map(lambda p: p + 1).unwrap()  # 81
    parse_port('x').unwrap_or(8080)  # 8080
    parse_port('x').match(Ok=lambda p: p, Err=lambda e: -1)  # -1
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, NoReturn

from klaw_enum.errors import UnwrapError
from klaw_enum.factory import VariantFactory
from klaw_enum.variant import Variant

if TYPE_CHECKING:
    from klaw_enum.option import Option

__all__ = ['RESULT', 'Err', 'Ok', 'Result', 'ResultFactory', 'collect']


def _expect_result(value: Any, where: str) -> Any:
    if not isinstance(value, Ok | Err):
        msg = f'{where}() callback must return Ok or Err, got {type(value).__name__}'
        raise TypeError(msg)
    return value


class Ok[T](Variant):
    """Success variant of Result containing a value of type T.

    Examples:
        >>> port = Ok(8080)
        >>> port.map(lambda p: p + 1)
        Ok(8081)
        >>> port.match(Ok=lambda p: p, Err=lambda: 0)
        8080
    """

    __slots__ = ()
    __match_args__ = ('value',)

    def __init__(self, value: T) -> None:
        Variant.__init__(self, 'Ok', value, RESULT)

    @property
    def value(self) -> T:
        """The contained success value."""
        return self.payload

    def is_ok(self) -> bool:
        """Return True since this is Ok."""
        return True

    def is_err(self) -> bool:
        """Return False since this is Ok."""
        return False

    def unwrap(self) -> T:
        """Return the contained Ok value."""
        return self.payload

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        """Return the contained Ok value, ignoring the default."""
        return self.payload

    def unwrap_or_else(self, f: Callable[[], T]) -> T:  # noqa: ARG002
        """Return the contained Ok value without calling f."""
        return self.payload

    def unwrap_err(self) -> NoReturn:
        """Raise since there is no error to return.

        Raises:
            UnwrapError: Always, carrying the Ok value.
        """
        raise UnwrapError(f'Called unwrap_err() on Ok: {self.payload!r}', self.payload)

    def expect(self, _msg: str) -> T:
        """Return the contained Ok value, ignoring the message."""
        return self.payload

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Apply f to the contained value.

        Returns:
            Ok containing the result of f.
        """
        return Ok(f(self.payload))

    def map_err(self, _f: Callable[[Any], Any]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def map_or[U](self, default: U, f: Callable[[T], U]) -> U:  # noqa: ARG002
        """Return f applied to the contained value."""
        return f(self.payload)

    def and_then[U, E](self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Apply a function that returns a Result to the contained value.

        Raises:
            TypeError: If f does not return Ok or Err.
        """
        return _expect_result(f(self.payload), 'and_then')

    def or_else(self, _f: Callable[[Any], Result[T, Any]]) -> Ok[T]:
        """Return self unchanged since this is Ok."""
        return self

    def ok(self) -> Option[T]:
        """Convert to Option, returning Some(value)."""
        from klaw_enum.option import Some

        return Some(self.payload)

    def err(self) -> Option[Any]:
        """Convert to Option, returning Nothing since this is Ok."""
        from klaw_enum.option import Nothing

        return Nothing

    def __repr__(self) -> str:
        return f'Ok({self.payload!r})'


class Err[E](Variant):
    """Error variant of Result containing an error of type E.

    Examples:
        >>> missing = Err('no such key')
        >>> missing.unwrap_or('default')
        'default'
        >>> missing.err()
        Some('no such key')
    """

    __slots__ = ()
    __match_args__ = ('error',)

    def __init__(self, error: E) -> None:
        Variant.__init__(self, 'Err', error, RESULT)

    @property
    def error(self) -> E:
        """The contained error value."""
        return self.payload

    def is_ok(self) -> bool:
        """Return False since this is Err."""
        return False

    def is_err(self) -> bool:
        """Return True since this is Err."""
        return True

    def unwrap(self) -> NoReturn:
        """Raise the contained error.

        Exceptions are re-raised as they are, so the original failure keeps
        its type and traceback. Other error values are wrapped.

        Raises:
            BaseException: The contained error, if it is an exception.
            UnwrapError: Otherwise, carrying the error value.
        """
        if isinstance(self.payload, BaseException):
            raise self.payload
        raise UnwrapError(f'Called unwrap() on Err: {self.payload!r}', self.payload)

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Err."""
        return default

    def unwrap_or_else[T](self, f: Callable[[], T]) -> T:
        """Compute and return a default value since this is Err."""
        return f()

    def unwrap_err(self) -> E:
        """Return the contained error."""
        return self.payload

    def expect(self, msg: str) -> NoReturn:
        """Raise an UnwrapError with a custom message.

        Raises:
            UnwrapError: Always, chained from the error if it is an exception.
        """
        cause = self.payload if isinstance(self.payload, BaseException) else None
        raise UnwrapError(f'{msg}: {self.payload!r}', self.payload) from cause

    def map(self, _f: Callable[[Any], Any]) -> Err[E]:
        """Return self unchanged since this is Err."""
        return self

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Apply f to the contained error.

        Returns:
            Err containing the transformed error.
        """
        return Err(f(self.payload))

    def map_or[U](self, default: U, _f: Callable[[Any], U]) -> U:
        """Return the default since this is Err."""
        return default

    def and_then(self, _f: Callable[[Any], Any]) -> Err[E]:
        """Return self unchanged since this is Err; f is never called."""
        return self

    def or_else[T, F](self, f: Callable[[E], Result[T, F]]) -> Result[T, F]:
        """Apply a recovery function to the error.

        Raises:
            TypeError: If f does not return Ok or Err.
        """
        return _expect_result(f(self.payload), 'or_else')

    def ok(self) -> Option[Any]:
        """Convert to Option, discarding the error."""
        from klaw_enum.option import Nothing

        return Nothing

    def err(self) -> Option[E]:
        """Convert to Option, returning Some(error)."""
        from klaw_enum.option import Some

        return Some(self.payload)

    def __repr__(self) -> str:
        return f'Err({self.payload!r})'


type Result[T, E = Exception] = Ok[T] | Err[E]


class ResultFactory(VariantFactory):
    """Factory for the closed ``{Ok, Err}`` schema.

    Use the ``RESULT`` instance: ``RESULT.Ok(1)``, ``RESULT.parse(wire)``.
    """

    def __init__(self) -> None:
        super().__init__({'Ok': Any, 'Err': Any}, name='Result')

    def variant_class(self, tag: str) -> type[Variant]:
        return Ok if tag == 'Ok' else Err


RESULT = ResultFactory()


def collect[T, E](results: Iterable[Result[T, E]]) -> Result[list[T], E]:
    """Collect an iterable of Results into a Result of list.

    Stops at the first Err and returns it.

    Examples:
        >>> collect([Ok(1), Ok(2), Ok(3)])
        Ok([1, 2, 3])
        >>> collect([Ok(1), Err('fail'), Ok(3)])
        Err('fail')
    """
    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.payload)
    return Ok(values)
