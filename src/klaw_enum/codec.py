"""Codecs for the ``{tag, data}`` wire form.

JSON and MessagePack are supported through msgspec. Encoders are not
thread-safe, so each thread gets its own; decoders are reentrant and shared.

Usage:
    >>> codec = get_codec('json')
    >>> codec.encode(WireVariant('Ready', {'n': 1}))
    b'{"tag":"Ready","data":{"n":1}}'
    >>> codec.decode(b'{"tag":"Loading"}')
    WireVariant(tag='Loading', data=None)
"""

from __future__ import annotations

import threading
from typing import Any, Literal

import msgspec

from klaw_enum.errors import WireFormatError
from klaw_enum.schema import WireVariant

__all__ = ['Codec', 'Format', 'get_codec']

type Format = Literal['json', 'msgpack']


class Codec:
    """Thread-safe encoder/decoder pair for one wire format.

    Attributes:
        format: Either "json" or "msgpack".
    """

    __slots__ = ('_decoder', '_encoder_type', '_local', 'format')

    def __init__(self, format: Format = 'json') -> None:  # noqa: A002
        """Initialize the codec with thread-local encoder storage."""
        if format == 'json':
            self._encoder_type: Any = msgspec.json.Encoder
            self._decoder: Any = msgspec.json.Decoder(WireVariant)
        elif format == 'msgpack':
            self._encoder_type = msgspec.msgpack.Encoder
            self._decoder = msgspec.msgpack.Decoder(WireVariant)
        else:
            msg = f"Unknown wire format {format!r}, expected 'json' or 'msgpack'"
            raise ValueError(msg)
        self.format = format
        self._local = threading.local()

    @property
    def _encoder(self) -> Any:
        """Get or create the thread-local encoder."""
        encoder = getattr(self._local, 'encoder', None)
        if encoder is None:
            encoder = self._encoder_type()
            self._local.encoder = encoder
        return encoder

    def encode(self, wire: WireVariant) -> bytes:
        """Encode a wire value to bytes.

        Raises:
            WireFormatError: If the payload is not serializable.
        """
        try:
            return self._encoder.encode(wire)
        except (TypeError, msgspec.EncodeError) as e:
            msg = f'Cannot encode variant {wire.tag!r}: {e}'
            raise WireFormatError(msg) from e

    def decode(self, buf: bytes | bytearray | memoryview) -> WireVariant:
        """Decode bytes into a wire value.

        Raises:
            WireFormatError: If buf is malformed or lacks a string tag.
        """
        try:
            return self._decoder.decode(buf)
        except msgspec.DecodeError as e:
            msg = f'Malformed {self.format} wire value: {e}'
            raise WireFormatError(msg) from e


_codecs: dict[str, Codec] = {}
_codecs_lock = threading.Lock()


def get_codec(format: Format = 'json') -> Codec:  # noqa: A002
    """Get the process-wide codec for a format, creating it on first use."""
    codec = _codecs.get(format)
    if codec is None:
        with _codecs_lock:
            codec = _codecs.get(format)
            if codec is None:
                codec = Codec(format)
                _codecs[format] = codec
    return codec
