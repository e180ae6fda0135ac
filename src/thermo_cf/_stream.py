"""Byte-stream primitives with explicit offsets.

Every helper seeks to an absolute offset before reading, so no decoder step
depends on where a previous step left the stream cursor.
"""

from __future__ import annotations

import string
import struct
from typing import Literal

from thermo_cf._exceptions import TruncatedStreamError
from thermo_cf._protocols.stream import BinaryStreamProtocol

NumericKind = Literal[
    "int8",
    "uint8",
    "int16",
    "uint16",
    "int32",
    "uint32",
    "int64",
    "uint64",
    "float32",
    "float64",
]
ByteOrder = Literal["<", ">"]
CharWidth = Literal[1, 2]

_STRUCT_CODES: dict[NumericKind, str] = {
    "int8": "b",
    "uint8": "B",
    "int16": "h",
    "uint16": "H",
    "int32": "i",
    "uint32": "I",
    "int64": "q",
    "uint64": "Q",
    "float32": "f",
    "float64": "d",
}

_ENCODINGS: dict[CharWidth, str] = {
    1: "latin-1",
    2: "utf-16-le",
}

# Whitespace plus the NUL padding instruments write after short strings
_STRIP_CHARS = string.whitespace + "\x00"

MAX_STRING_CHARS = 512


def stream_size(stream: BinaryStreamProtocol) -> int:
    """Return total stream length in bytes, restoring the cursor."""
    current = stream.tell()
    size = stream.seek(0, 2)
    stream.seek(current)
    return size


def read_bytes(stream: BinaryStreamProtocol, offset: int, count: int) -> bytes:
    """Read up to count bytes starting at offset.

    Returns fewer bytes when the stream ends first.
    """
    stream.seek(offset)
    return stream.read(count)


def read_exact(stream: BinaryStreamProtocol, offset: int, count: int, context: str) -> bytes:
    """Read exactly count bytes starting at offset.

    Args:
        stream: Source stream.
        offset: Absolute byte offset.
        count: Number of bytes required.
        context: Name of the value being read, used in the error message.

    Returns:
        The requested bytes.

    Raises:
        TruncatedStreamError: If the stream ends before count bytes.
    """
    data = read_bytes(stream, offset, count)
    if len(data) != count:
        raise TruncatedStreamError(
            context,
            f"expected {count} bytes at offset {offset}, got {len(data)}",
        )
    return data


def numeric_size(kind: NumericKind) -> int:
    """Return the width of a numeric kind in bytes."""
    return struct.calcsize("<" + _STRUCT_CODES[kind])


def unpack_numeric(data: bytes, offset: int, kind: NumericKind, byteorder: ByteOrder) -> int | float:
    """Unpack one value from an in-memory buffer."""
    value: int | float = struct.unpack_from(byteorder + _STRUCT_CODES[kind], data, offset)[0]
    return value


def read_numeric(
    stream: BinaryStreamProtocol,
    offset: int,
    kind: NumericKind,
    *,
    byteorder: ByteOrder = ">",
) -> int | float:
    """Read one fixed-width numeric value at an absolute offset.

    Header fields in .CF files are big-endian, hence the default.

    Args:
        stream: Source stream.
        offset: Absolute byte offset.
        kind: Numeric type to decode.
        byteorder: "<" for little-endian, ">" for big-endian.

    Returns:
        Decoded int or float.

    Raises:
        TruncatedStreamError: If the stream ends before the value.
    """
    data = read_exact(stream, offset, numeric_size(kind), kind)
    return unpack_numeric(data, 0, kind, byteorder)


def read_pascal_string(
    stream: BinaryStreamProtocol,
    offset: int,
    width: CharWidth = 1,
    *,
    max_chars: int = MAX_STRING_CHARS,
) -> str:
    """Read a length-prefixed string at an absolute offset.

    One unsigned byte gives the character count, followed by that many
    little-endian characters of the given width. Only bytes actually present
    are decoded, so a length prefix running past the end of the stream yields
    the available prefix of the string.

    Args:
        stream: Source stream.
        offset: Absolute offset of the length byte.
        width: Bytes per character (1 or 2).
        max_chars: Decoded lengths above this are treated as corrupt.

    Returns:
        Trimmed string, or "" when absent or corrupt.
    """
    prefix = read_bytes(stream, offset, 1)
    if not prefix:
        return ""

    payload = read_bytes(stream, offset + 1, prefix[0] * width)
    usable = len(payload) - len(payload) % width
    text = payload[:usable].decode(_ENCODINGS[width], errors="replace")

    if len(text) > max_chars:
        return ""

    return text.strip(_STRIP_CHARS)


__all__ = [
    "MAX_STRING_CHARS",
    "ByteOrder",
    "CharWidth",
    "NumericKind",
    "numeric_size",
    "read_bytes",
    "read_exact",
    "read_numeric",
    "read_pascal_string",
    "stream_size",
    "unpack_numeric",
]
