"""Error taxonomy for variant construction, dispatch and unwrapping.

These are programmer errors (schema misuse, incomplete matches, unwrapping an
empty value). Expected failures travel as ``Err``/``Nothing`` values instead.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

__all__ = [
    'EnumError',
    'MissingHandlerError',
    'PayloadError',
    'ReservedTagError',
    'SchemaError',
    'UnknownVariantError',
    'UnwrapError',
    'WireFormatError',
]

FALLBACK = '_'
"""Reserved handler key for the catch-all arm. Never a valid variant name."""


class EnumError(Exception):
    """Base class for every error raised by klaw-enum."""


class ReservedTagError(EnumError, ValueError):
    """The reserved fallback name was used as a variant name."""

    def __init__(self, tag: str = FALLBACK) -> None:
        self.tag = tag
        super().__init__(f"'{tag}' is reserved as a fallback key.")


class SchemaError(EnumError, ValueError):
    """A variant schema declaration is malformed."""


class UnknownVariantError(EnumError, LookupError):
    """A tag is not a member of a closed schema."""

    def __init__(self, tag: Any, known: Iterable[str] = ()) -> None:
        self.tag = tag
        self.known = tuple(known)
        msg = f'Unexpected variant {tag!r}'
        if self.known:
            msg = f'{msg} (expected one of: {", ".join(self.known)})'
        super().__init__(msg)


class MissingHandlerError(EnumError, LookupError):
    """No handler for the active tag and no fallback arm."""

    def __init__(self, tag: str, missing: Iterable[str] | None = None) -> None:
        self.tag = tag
        self.missing = tuple(missing) if missing is not None else (tag,)
        if self.missing == (tag,):
            msg = f"No handler for variant '{tag}' and no '_' fallback"
        else:
            msg = f'Non-exhaustive match, missing handlers for: {", ".join(self.missing)}'
        super().__init__(msg)


class UnwrapError(EnumError):
    """unwrap() was called on an Err or on Nothing.

    Attributes:
        error: The carried error value, or None for an empty Option.
    """

    def __init__(self, message: str, error: Any = None) -> None:
        self.error = error
        super().__init__(message)


class WireFormatError(EnumError, ValueError):
    """Serialized input does not have the ``{tag, data}`` shape."""


class PayloadError(EnumError, TypeError):
    """A payload does not fit the descriptor declared for its tag."""

    def __init__(self, tag: str, message: str) -> None:
        self.tag = tag
        super().__init__(f'Invalid payload for variant {tag!r}: {message}')
