"""Variant schemas and the wire form of a tagged value.

A schema is the ordered set of variant names an enum declares, each with a
payload descriptor:

    - a type (or any type expression msgspec can convert into),
    - ``None`` for a unit variant that carries no payload,
    - ``typing.Any`` when the payload type is not declared.

A closed schema lists its names up front. An open schema (``VariantSchema.open()``)
lists nothing and accepts any non-reserved tag; it backs dynamic factories.

Usage:
    >>> schema = VariantSchema({'Loading': None, 'Ready': datetime})
    >>> schema.names
    ('Loading', 'Ready')
    >>> schema.is_unit('Loading')
    True
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

import msgspec

from klaw_enum.errors import FALLBACK, ReservedTagError, SchemaError

__all__ = [
    'UNIT',
    'VariantSchema',
    'WireVariant',
    'check_tag',
]

UNIT: None = None
"""Payload descriptor for variants without data."""


def check_tag(tag: object) -> str:
    """Validate a single variant name.

    Raises:
        ReservedTagError: If tag is the fallback key ``_``.
        SchemaError: If tag is not a non-empty string.
    """
    if tag == FALLBACK:
        raise ReservedTagError(FALLBACK)
    if not isinstance(tag, str) or not tag:
        msg = f'Variant names must be non-empty strings, got {tag!r}'
        raise SchemaError(msg)
    return tag


class VariantSchema:
    """Ordered, immutable mapping of variant name to payload descriptor.

    Args:
        variants: Mapping of name to descriptor, or an iterable of names
            (every payload is then ``Any``). ``None`` builds an open schema.

    Raises:
        ReservedTagError: If ``_`` is declared.
        SchemaError: On empty, non-string or duplicate names.
    """

    __slots__ = ('_closed', '_variants')

    def __init__(self, variants: Mapping[str, Any] | Iterable[str] | None = None) -> None:
        if variants is None:
            self._closed = False
            self._variants: Mapping[str, Any] = MappingProxyType({})
            return

        pairs = variants.items() if isinstance(variants, Mapping) else ((name, Any) for name in variants)
        declared: dict[str, Any] = {}
        for name, descriptor in pairs:
            check_tag(name)
            if name in declared:
                msg = f'Duplicate variant name {name!r}'
                raise SchemaError(msg)
            declared[name] = descriptor
        if not declared:
            msg = 'A closed schema needs at least one variant'
            raise SchemaError(msg)

        self._closed = True
        self._variants = MappingProxyType(declared)

    @classmethod
    def open(cls) -> VariantSchema:
        """Create a schema that accepts any non-reserved tag."""
        return cls(None)

    @property
    def is_closed(self) -> bool:
        """True when the schema lists its variant names explicitly."""
        return self._closed

    @property
    def names(self) -> tuple[str, ...]:
        """Declared variant names in declaration order (empty when open)."""
        return tuple(self._variants)

    @property
    def variants(self) -> Mapping[str, Any]:
        """Read-only view of name -> payload descriptor."""
        return self._variants

    def payload_type(self, tag: str) -> Any:
        """Return the payload descriptor for tag (``Any`` when undeclared)."""
        return self._variants.get(tag, Any)

    def is_unit(self, tag: str) -> bool:
        """True when tag is declared without payload."""
        return tag in self._variants and self._variants[tag] is UNIT

    def accepts(self, tag: str) -> bool:
        """True when a value may carry this tag."""
        return tag in self._variants if self._closed else tag != FALLBACK

    def __contains__(self, tag: object) -> bool:
        return tag in self._variants

    def __iter__(self) -> Iterator[str]:
        return iter(self._variants)

    def __len__(self) -> int:
        return len(self._variants)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VariantSchema):
            return NotImplemented
        return self._closed == other._closed and dict(self._variants) == dict(other._variants)

    def __hash__(self) -> int:
        return hash((self._closed, tuple(self._variants)))

    def __repr__(self) -> str:
        if not self._closed:
            return 'VariantSchema.open()'
        body = ', '.join(f'{name!r}: {_describe(desc)}' for name, desc in self._variants.items())
        return f'VariantSchema({{{body}}})'


def _describe(descriptor: Any) -> str:
    if descriptor is UNIT:
        return 'None'
    return getattr(descriptor, '__name__', None) or repr(descriptor)


class WireVariant(msgspec.Struct, frozen=True, gc=False):
    """Serializable ``{tag, data}`` projection of a tagged value.

    This is the only shape that crosses a serialization boundary. ``data``
    is ``None`` for unit variants.

    Attributes:
        tag: Variant name.
        data: Payload, left undecoded until the owning factory converts it.
    """

    tag: str
    data: Any = None
