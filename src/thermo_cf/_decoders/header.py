"""Header location and version dispatch for .CF files.

Signal blocks sit at variable positions, so they are found by scanning for
internal class-name markers; the format version is a length-prefixed string
at the start of the file.
"""

from __future__ import annotations

import re

from thermo_cf._protocols.stream import BinaryStreamProtocol
from thermo_cf._stream import read_bytes, read_pascal_string
from thermo_cf.config import DEFAULT_SEARCH_WINDOW
from thermo_cf.logging import get_logger

logger = get_logger(__name__)

SCAN_STORAGE_MARKER = b"CRawDataScanStorage"

_NUMERIC_TAG = re.compile(r"[+-]?\d+(?:\.\d*)?")


def find_signature(
    stream: BinaryStreamProtocol,
    signature: bytes,
    *,
    start: int = 0,
    window: int = DEFAULT_SEARCH_WINDOW,
) -> int | None:
    """Scan forward for a byte signature using bounded read windows.

    Each window is searched for the first signature byte. The candidate is
    re-read in full, rejected early on its last byte, then compared. After a
    rejected candidate the scan restarts one byte later, so windows overlap
    and a signature straddling a window boundary is still found.

    Args:
        stream: Source stream.
        signature: Bytes to locate.
        start: Absolute offset to begin scanning from.
        window: Bytes read per scan step.

    Returns:
        Offset of the first signature byte, or None if not present.

    Raises:
        ValueError: If signature is empty or window is not positive.
    """
    if not signature:
        raise ValueError("signature must not be empty")
    if window < 1:
        raise ValueError(f"window must be positive, got {window}")

    first = signature[0]
    position = start

    while True:
        chunk = read_bytes(stream, position, window)
        if not chunk:
            return None

        index = chunk.find(first)
        if index < 0:
            position += len(chunk)
            continue

        candidate = position + index
        probe = read_bytes(stream, candidate, len(signature))
        if probe[-1:] == signature[-1:] and probe == signature:
            logger.debug("Found %r at offset %d", signature, candidate)
            return candidate

        position = candidate + 1


def read_version(stream: BinaryStreamProtocol) -> str:
    """Read the format version tag at offset 0.

    Returns:
        The numeric tag as a string, or "" when the tag is not numeric.
    """
    tag = read_pascal_string(stream, 0, 1)
    if _NUMERIC_TAG.fullmatch(tag) is None:
        logger.debug("Unrecognized version tag %r", tag)
        return ""
    return tag


__all__ = [
    "SCAN_STORAGE_MARKER",
    "find_signature",
    "read_version",
]
