"""Variant factories: construction, parsing and schema metadata.

Two modes share one implementation:

    - pre-bound: the variant names are known up front (a closed schema or an
      explicit ``keys`` list). Constructors are resolved once at creation and
      ``construct``/``parse`` reject undeclared tags.
    - dynamic: nothing is declared. ``factory.<Name>`` resolves a constructor
      on every attribute access and any non-reserved tag is accepted, including
      by ``parse``. That makes dynamic ``parse`` a deserializer, not a
      validator: use a pre-bound factory at trust boundaries.

Both modes build identical ``Variant`` values.

Example:
    ```python
    Status = enum('Status', {'Loading': None, 'Ready': datetime})
    Status.Loading()
    Status.parse({'tag': 'Ready', 'data': finished_at})

    Events = VariantFactory(name='Events')  # dynamic
    Events.Clicked({'x': 1})
    ```
"""

from __future__ import annotations

import keyword
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, Literal

import msgspec

from klaw_enum._config import get_config
from klaw_enum._logging import get_logger
from klaw_enum.codec import Codec, get_codec
from klaw_enum.errors import FALLBACK, PayloadError, ReservedTagError, UnknownVariantError, WireFormatError
from klaw_enum.schema import VariantSchema, WireVariant, check_tag
from klaw_enum.variant import Variant

__all__ = ['Constructor', 'VariantFactory', 'enum']

type Constructor = Callable[..., Variant]

logger = get_logger(__name__)


class VariantFactory:
    """Builds and parses the values of one tagged union.

    Args:
        schema: A VariantSchema, a mapping of name to payload descriptor, or
            None for a dynamic factory.
        keys: Explicit variant names to pre-bind. Given alone, builds a
            closed schema with undeclared payload types.
        name: Display name used in reprs and log events.

    Raises:
        ReservedTagError: If ``_`` is declared.
        UnknownVariantError: If keys names a variant the schema lacks.
    """

    def __init__(
        self,
        schema: VariantSchema | Mapping[str, Any] | None = None,
        *,
        keys: Iterable[str] | None = None,
        name: str = 'Enum',
    ) -> None:
        resolved = schema if isinstance(schema, VariantSchema) else VariantSchema(schema)
        if keys is not None:
            keys = tuple(keys)
            if resolved.is_closed:
                for key in keys:
                    check_tag(key)
                    if key not in resolved:
                        raise UnknownVariantError(key, resolved.names)
                resolved = VariantSchema({key: resolved.payload_type(key) for key in keys})
            else:
                resolved = VariantSchema(keys)

        self._schema = resolved
        self._name = name
        self._constructors: dict[str, Constructor] = {}

        if resolved.is_closed:
            for tag in resolved.names:
                constructor = self._bind(tag)
                self._constructors[tag] = constructor
                if _bindable(tag) and not hasattr(type(self), tag):
                    setattr(self, tag, constructor)

        logger.debug(
            'factory_created',
            enum=name,
            mode='prebound' if self.is_prebound else 'dynamic',
            tags=list(resolved.names),
        )

    # --- Metadata ---

    @property
    def name(self) -> str:
        """Display name of the enum."""
        return self._name

    @property
    def schema(self) -> VariantSchema:
        """The schema this factory builds values for."""
        return self._schema

    @property
    def tags(self) -> tuple[str, ...]:
        """Declared variant names (empty for a dynamic factory)."""
        return self._schema.names

    @property
    def is_prebound(self) -> bool:
        """True when the variant set was supplied up front."""
        return self._schema.is_closed

    def variant_class(self, tag: str) -> type[Variant]:
        """Concrete Variant subclass for tag. Adapters override this."""
        return Variant

    # --- Construction ---

    def _bind(self, tag: str) -> Constructor:
        def constructor(payload: Any = None) -> Variant:
            return self._build(tag, payload)

        constructor.__name__ = tag
        constructor.__qualname__ = f'{self._name}.{tag}'
        return constructor

    def _check_member(self, tag: Any) -> str:
        if tag == FALLBACK:
            raise ReservedTagError(FALLBACK)
        if not self._schema.is_closed:
            return check_tag(tag)
        if not self._schema.accepts(tag):
            logger.debug('unknown_variant', tag=tag, enum=self._name)
            raise UnknownVariantError(tag, self._schema.names)
        return tag

    def _check_payload(self, tag: str, payload: Any) -> None:
        if self._schema.is_unit(tag):
            if payload is not None:
                raise PayloadError(tag, f'unit variant takes no payload, got {payload!r}')
            return
        descriptor = self._schema.payload_type(tag)
        if descriptor is Any or not get_config().validate_payloads:
            return
        try:
            msgspec.convert(payload, descriptor, from_attributes=True)
        except (msgspec.ValidationError, TypeError) as e:
            raise PayloadError(tag, str(e)) from e

    def _build(self, tag: str, payload: Any) -> Variant:
        self._check_payload(tag, payload)
        return self.variant_class(tag)._create(tag, payload, self)

    def construct(self, tag: str, payload: Any = None) -> Variant:
        """Build the variant named tag.

        Args:
            tag: Variant name.
            payload: Data for the variant; omit for unit variants.

        Returns:
            A new immutable Variant.

        Raises:
            ReservedTagError: If tag is ``_``.
            UnknownVariantError: If tag is not declared (pre-bound mode).
            PayloadError: If the payload does not fit the declared descriptor.
        """
        return self._build(self._check_member(tag), payload)

    def __getitem__(self, tag: str) -> Constructor:
        """Return the constructor for tag."""
        constructor = self._constructors.get(tag)
        if constructor is not None:
            return constructor
        return self._bind(self._check_member(tag))

    def __getattr__(self, name: str) -> Constructor:
        # Only reached when normal lookup fails: pre-bound constructors are
        # instance attributes, so this is the dynamic path.
        if name.startswith('_'):
            raise AttributeError(name)
        if self._schema.is_closed:
            msg = f'{self._name!r} has no variant {name!r}'
            raise AttributeError(msg)
        return self._bind(name)

    # --- Parsing ---

    def parse(self, wire: Mapping[str, Any] | WireVariant) -> Variant:
        """Rebuild a Variant from its ``{tag, data}`` wire form.

        Args:
            wire: Mapping with ``tag`` and optional ``data`` keys, or a
                WireVariant.

        Raises:
            WireFormatError: If wire has no string ``tag``.
            UnknownVariantError: If the tag is undeclared (pre-bound mode).
        """
        if isinstance(wire, WireVariant):
            tag, data = wire.tag, wire.data
        elif isinstance(wire, Mapping):
            if 'tag' not in wire:
                msg = f"Wire value has no 'tag' key: {wire!r}"
                raise WireFormatError(msg)
            tag, data = wire['tag'], wire.get('data')
        else:
            msg = f'Expected a mapping with tag/data keys, got {type(wire).__name__}'
            raise WireFormatError(msg)
        if not isinstance(tag, str):
            msg = f'Wire tag must be a string, got {tag!r}'
            raise WireFormatError(msg)
        return self.construct(tag, data)

    def parse_keyed(self, keyed: Mapping[str, Any]) -> Variant:
        """Rebuild a Variant from the single-key ``{tag: payload}`` form.

        Raises:
            WireFormatError: Unless keyed has exactly one key.
        """
        if not isinstance(keyed, Mapping) or len(keyed) != 1:
            count = len(keyed) if isinstance(keyed, Mapping) else 0
            msg = f'Expected exactly 1 variant key, got {count}'
            raise WireFormatError(msg)
        ((tag, payload),) = keyed.items()
        return self.construct(tag, payload)

    # --- Codec ---

    def encode(self, value: Variant, *, format: Literal['json', 'msgpack'] = 'json') -> bytes:  # noqa: A002
        """Serialize a value's wire form to bytes."""
        return get_codec(format).encode(WireVariant(value.tag, value.payload))

    def decode(self, buf: bytes | bytearray | memoryview, *, format: Literal['json', 'msgpack'] = 'json') -> Variant:  # noqa: A002
        """Deserialize bytes produced by encode().

        The payload is converted into the type declared for its tag (closed
        schemas with a concrete descriptor); otherwise it is kept as decoded.

        Raises:
            WireFormatError: If buf is not a valid wire value.
            UnknownVariantError: If the tag is undeclared (pre-bound mode).
            PayloadError: If the payload cannot be converted.
        """
        codec: Codec = get_codec(format)
        wire = codec.decode(buf)
        tag = self._check_member(wire.tag)
        descriptor = self._schema.payload_type(tag)
        data = wire.data
        if descriptor is not Any and not self._schema.is_unit(tag):
            try:
                data = msgspec.convert(data, descriptor)
            except msgspec.ValidationError as e:
                raise PayloadError(tag, str(e)) from e
        return self._build(tag, data)

    # --- Container protocol ---

    def __contains__(self, tag: object) -> bool:
        return tag in self._schema

    def __iter__(self) -> Iterator[str]:
        return iter(self._schema)

    def __repr__(self) -> str:
        mode = 'prebound' if self.is_prebound else 'dynamic'
        return f'<VariantFactory {self._name} ({mode}) {list(self.tags)}>'


def _bindable(tag: str) -> bool:
    return tag.isidentifier() and not keyword.iskeyword(tag) and not tag.startswith('_')


def enum(
    name: str,
    variants: VariantSchema | Mapping[str, Any] | Iterable[str] | None = None,
    /,
    **payloads: Any,
) -> VariantFactory:
    """Declare a tagged union.

    Variants come from a mapping of name to payload descriptor, an iterable of
    names, keyword arguments, or any combination. With nothing declared the
    factory is dynamic.

    Example:
        ```python
        Shape = enum('Shape', Circle=float, Square=float, Empty=None)
        Shape.Circle(1.5).match(Circle=lambda r: 3.14 * r * r, _=lambda: 0.0)
        ```
    """
    if isinstance(variants, VariantSchema):
        if payloads:
            msg = 'enum() takes either a VariantSchema or keyword payloads, not both'
            raise TypeError(msg)
        return VariantFactory(variants, name=name)

    declared: dict[str, Any] = {}
    if isinstance(variants, Mapping):
        declared.update(variants)
    elif variants is not None:
        declared.update(dict.fromkeys(variants, Any))
    declared.update(payloads)
    return VariantFactory(declared or None, name=name)
