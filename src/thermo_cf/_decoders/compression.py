"""Delta and double-delta codecs for compressed signal blocks.

Both codecs consume a block from a start offset to end of stream, write into
an output buffer pre-sized to half the block length (every value costs at
least two bytes) and truncate that buffer to the values actually produced.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from thermo_cf._exceptions import TruncatedStreamError
from thermo_cf._protocols.stream import BinaryStreamProtocol
from thermo_cf._stream import NumericKind, numeric_size, read_bytes, stream_size, unpack_numeric

# Delta value announcing a 32-bit absolute value
DELTA_RESET = -32768

# Second difference announcing a 48-bit absolute value
DOUBLE_DELTA_RESET = 32767

_RUN_LENGTH_MASK = 0x0FFF
_HIGH_WORD_SCALE = 2**32


def _read_block(stream: BinaryStreamProtocol, offset: int) -> bytes:
    """Read everything from offset to end of stream."""
    remaining = max(stream_size(stream) - offset, 0)
    return read_bytes(stream, offset, remaining)


def _allocate(block: bytes) -> npt.NDArray[np.int64]:
    return np.zeros(len(block) // 2, dtype=np.int64)


def _truncate(buffer: npt.NDArray[np.int64], count: int) -> list[int]:
    """Drop the unwritten tail of a pre-sized buffer."""
    values: list[int] = buffer[:count].tolist()
    return values


def _unpack_int(block: bytes, position: int, kind: NumericKind, context: str) -> int:
    size = numeric_size(kind)
    if position + size > len(block):
        raise TruncatedStreamError(
            context,
            f"expected {size} bytes at block offset {position}, got {len(block) - position}",
        )
    return int(unpack_numeric(block, position, kind, ">"))


def decode_delta(stream: BinaryStreamProtocol, offset: int) -> list[int]:
    """Decode a run-length delta block.

    Each run starts with a big-endian control word: a zero top nibble ends the
    block, otherwise the low 12 bits give the run length. Each run element is
    a big-endian int16 delta added to the running value; the DELTA_RESET delta
    is followed by an int32 absolute value instead.

    Args:
        stream: Source stream.
        offset: Absolute offset of the first control word.

    Returns:
        Absolute values in order.

    Raises:
        TruncatedStreamError: If a run ends mid-value.
    """
    block = _read_block(stream, offset)
    buffer = _allocate(block)
    count = 0
    position = 0
    baseline = 0

    while position + 2 <= len(block):
        control = _unpack_int(block, position, "uint16", "delta control")
        position += 2
        if control >> 12 == 0:
            break

        current = baseline
        for _ in range(control & _RUN_LENGTH_MASK):
            delta = _unpack_int(block, position, "int16", "delta value")
            position += 2
            if delta == DELTA_RESET:
                current = _unpack_int(block, position, "int32", "delta reset")
                position += 4
            else:
                current += delta
            buffer[count] = current
            count += 1

        baseline = current

    return _truncate(buffer, count)


def decode_double_delta(stream: BinaryStreamProtocol, offset: int) -> list[int]:
    """Decode a double-delta block.

    Every step is a big-endian int16 second difference accumulated into the
    first difference, which is accumulated into the value. DOUBLE_DELTA_RESET
    is followed by an int16 high word and uint32 low word giving the absolute
    value as high * 2**32 + low; the first difference restarts at zero.

    Args:
        stream: Source stream.
        offset: Absolute offset of the first step.

    Returns:
        Absolute values in order.

    Raises:
        TruncatedStreamError: If a reset payload is cut short.
    """
    block = _read_block(stream, offset)
    buffer = _allocate(block)
    count = 0
    position = 0
    value = 0
    step = 0

    while position + 2 <= len(block):
        second = _unpack_int(block, position, "int16", "double delta value")
        position += 2
        if second == DOUBLE_DELTA_RESET:
            high = _unpack_int(block, position, "int16", "double delta reset")
            low = _unpack_int(block, position + 2, "uint32", "double delta reset")
            position += 6
            value = high * _HIGH_WORD_SCALE + low
            step = 0
        else:
            step += second
            value += step
        buffer[count] = value
        count += 1

    return _truncate(buffer, count)


def decode_double_array(stream: BinaryStreamProtocol, offset: int) -> list[float]:
    """Read little-endian float64 values from offset to end of stream.

    A trailing partial value is ignored.
    """
    block = _read_block(stream, offset)
    usable = len(block) - len(block) % 8
    if usable == 0:
        return []
    values: list[float] = np.frombuffer(block[:usable], dtype="<f8").tolist()
    return values


__all__ = [
    "DELTA_RESET",
    "DOUBLE_DELTA_RESET",
    "decode_delta",
    "decode_double_array",
    "decode_double_delta",
]
