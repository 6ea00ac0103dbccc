"""SSH wire format primitives.

Every composite value in the OpenSSH key format is a fixed sequence of
big-endian ``uint32`` values and length-prefixed strings. Nothing is
self-describing beyond the length prefix, so readers and writers share the
schema through the order of the fields they declare.
"""

import struct
from typing import Any, Callable, Iterable, Tuple, Union

from edkey.errors import KeyFormatError

UINT32_MAX = 0xFFFFFFFF

BytesLike = Union[bytes, bytearray, memoryview, str]
Field = Tuple[Callable[[Any], bytes], Any]


def encode_u32(n: int) -> bytes:
    """Encode ``n`` as a 4-byte big-endian unsigned integer."""
    if not 0 <= n <= UINT32_MAX:
        raise ValueError(f"Value {n} does not fit in an unsigned 32-bit integer")
    return struct.pack(">I", n)


def _as_bytes(data: BytesLike) -> bytes:
    if isinstance(data, str):
        return data.encode('utf-8')
    return bytes(data)


def encode_bytes(data: BytesLike) -> bytes:
    """
    Encode a wire string: 32-bit length followed by the raw bytes.

    Text is UTF-8 encoded first, so the prefix always counts bytes.
    """
    raw = _as_bytes(data)
    return encode_u32(len(raw)) + raw


def encode_raw(data: BytesLike) -> bytes:
    """Encode trailing bytes with no length prefix."""
    return _as_bytes(data)


def encode_record(fields: Iterable[Field]) -> bytes:
    """
    Concatenate the encodings of a declared record.

    Args:
        fields: ``(encoder, value)`` pairs in wire order

    Returns:
        The encoded record
    """
    return b"".join(encoder(value) for encoder, value in fields)


class WireReader:
    """Sequential reader over an SSH wire-format buffer."""

    def __init__(self, data: bytes):
        self._data = memoryview(bytes(data))
        self._offset = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def _take(self, size: int, what: str) -> bytes:
        if size > self.remaining:
            raise KeyFormatError(
                f"Truncated {what}: need {size} bytes, {self.remaining} left"
            )
        chunk = self._data[self._offset:self._offset + size].tobytes()
        self._offset += size
        return chunk

    def read_u32(self) -> int:
        return struct.unpack(">I", self._take(4, "uint32"))[0]

    def read_bytes(self) -> bytes:
        length = self.read_u32()
        return self._take(length, "string")

    def read_rest(self) -> bytes:
        return self._take(self.remaining, "tail")
