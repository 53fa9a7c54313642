"""Fold exceptions into Result values: try_sync, try_async, try_into.

``try_sync``/``try_async`` run a callable once and return ``Ok(value)`` or
``Err(exception)``. ``try_into``/``try_into_async`` are decorators that wrap
an existing raising function so every call returns a Result. The caught
exception is stored in the ``Err`` unchanged.

Only ``Exception`` subclasses are caught by default. Cancellation and
interpreter exits (``BaseException``) always propagate.

``Try`` and ``TryInto`` group the same functions under ``sync``/``async_``.

Example:
    ```python
    Try.sync(lambda: int('42'))  # Ok(42)
    Try.sync(lambda: int('x'))  # Err(ValueError(...))

    parse_int = try_into(int)
    parse_int('x').is_err()  # True

    @try_into_async(exceptions=(OSError,))
    async def read(path: str) -> bytes: ...
    ```
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from typing import Any, overload

import wrapt

from klaw_enum._logging import get_logger
from klaw_enum.result import Err, Ok, Result

__all__ = ['Try', 'TryInto', 'try_async', 'try_into', 'try_into_async', 'try_sync']

logger = get_logger(__name__)

_DEFAULT_CATCH: tuple[type[BaseException], ...] = (Exception,)


def _captured(e: BaseException) -> Err[Any]:
    logger.debug('try_captured', exc_type=type(e).__name__)
    return Err(e)


def try_sync[T](
    fn: Callable[[], T],
    *,
    exceptions: tuple[type[BaseException], ...] = _DEFAULT_CATCH,
) -> Result[T, Exception]:
    """Call fn and fold its outcome into a Result.

    Args:
        fn: Zero-argument callable.
        exceptions: Exception types to capture. Defaults to (Exception,).

    Returns:
        Ok(return value) or Err(captured exception).
    """
    try:
        return Ok(fn())
    except exceptions as e:
        return _captured(e)


async def try_async[T](
    fn: Callable[[], Awaitable[T]],
    *,
    exceptions: tuple[type[BaseException], ...] = _DEFAULT_CATCH,
) -> Result[T, Exception]:
    """Await fn() and fold its outcome into a Result.

    Exceptions raised by fn before it produces an awaitable are captured
    as well. A plain (non-awaitable) return value is wrapped as-is.

    Args:
        fn: Zero-argument callable returning an awaitable.
        exceptions: Exception types to capture. Defaults to (Exception,).

    Returns:
        Ok(resolved value) or Err(captured exception).
    """
    try:
        value = fn()
        if inspect.isawaitable(value):
            value = await value
        return Ok(value)
    except exceptions as e:
        return _captured(e)


@overload
def try_into[**P, T](func: Callable[P, T], /) -> Callable[P, Result[T, Exception]]: ...


@overload
def try_into(
    func: None = None,
    /,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Result[Any, Any]]]: ...


def try_into(
    func: Callable[..., Any] | None = None,
    /,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Any:
    """Decorator that makes a raising function return a Result.

    Can be used with or without arguments:
        @try_into
        def risky(): ...

        @try_into(exceptions=(ValueError,))
        def specific(): ...

        parse = try_into(int)

    The wrapper keeps the wrapped function's signature and metadata.
    """
    catch = exceptions if exceptions is not None else _DEFAULT_CATCH

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Result[Any, Any]:
        return try_sync(lambda: wrapped(*args, **kwargs), exceptions=catch)

    if func is not None:
        return wrapper(func)
    return wrapper


@overload
def try_into_async[**P, T](
    func: Callable[P, Awaitable[T]], /
) -> Callable[P, Awaitable[Result[T, Exception]]]: ...


@overload
def try_into_async(
    func: None = None,
    /,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Callable[[Callable[..., Awaitable[Any]]], Callable[..., Awaitable[Result[Any, Any]]]]: ...


def try_into_async(
    func: Callable[..., Awaitable[Any]] | None = None,
    /,
    *,
    exceptions: tuple[type[BaseException], ...] | None = None,
) -> Any:
    """Async decorator that makes a raising coroutine function return a Result.

    Usage mirrors try_into. The wrapper is a coroutine function.
    """
    catch = exceptions if exceptions is not None else _DEFAULT_CATCH

    @wrapt.decorator
    async def wrapper(
        wrapped: Callable[..., Awaitable[Any]],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Result[Any, Any]:
        return await try_async(lambda: wrapped(*args, **kwargs), exceptions=catch)

    if func is not None:
        return wrapper(func)
    return wrapper


class Try:
    """Namespace for one-shot capture: ``Try.sync(fn)``, ``await Try.async_(fn)``."""

    sync = staticmethod(try_sync)
    async_ = staticmethod(try_async)


class TryInto:
    """Namespace for wrapping functions: ``TryInto.sync(fn)``, ``TryInto.async_(fn)``."""

    sync = staticmethod(try_into)
    async_ = staticmethod(try_into_async)
