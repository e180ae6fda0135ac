"""Test hooks and synthetic file builders for thermo_cf.

This module provides hooks for testing without mocking or monkeypatching.
Production code calls hooks directly; tests set hooks to fakes.

Usage:
    from thermo_cf.testing import hooks, reset_hooks

    # In tests:
    def test_something() -> None:
        hooks.list_directory = _fake_listing
        # ... test code ...

    # Use reset_hooks() in conftest.py fixtures to restore defaults.

The builders at the bottom produce .CF byte strings and compressed blocks
from plain values, so tests need no binary fixtures.
"""

from __future__ import annotations

import struct
from collections.abc import Callable, Sequence
from pathlib import Path

from thermo_cf._protocols.hashing import DigestProtocol

# ---------------------------------------------------------------------------
# Type aliases for hooks
# ---------------------------------------------------------------------------

ListDirectoryFn = Callable[[Path], list[Path] | None]
IsReadableFn = Callable[[Path], bool]
NewDigestFn = Callable[[], DigestProtocol]


# ---------------------------------------------------------------------------
# Hooks container
# ---------------------------------------------------------------------------


class _HooksContainer:
    """Container for all hookable functions.

    Hooks are set to production implementations at module load time.
    Tests override hooks to use fakes.
    """

    list_directory: ListDirectoryFn
    is_readable: IsReadableFn
    new_digest: NewDigestFn


hooks = _HooksContainer()


# ---------------------------------------------------------------------------
# Production implementations
# ---------------------------------------------------------------------------


def _prod_list_directory(directory: Path) -> list[Path] | None:
    """Production implementation: sorted regular files in a directory.

    Returns None when the path is not a directory or cannot be listed.
    """
    if not directory.is_dir():
        return None
    try:
        return sorted(entry for entry in directory.iterdir() if entry.is_file())
    except OSError:
        return None


def _prod_is_readable(path: Path) -> bool:
    """Production implementation: check read permission."""
    import os

    return os.access(path, os.R_OK)


def _prod_new_digest() -> DigestProtocol:
    """Production implementation: create an MD5 digest.

    Raises ValueError where MD5 is disabled (FIPS builds).
    """
    import hashlib

    return hashlib.md5(usedforsecurity=False)


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------


def _init_production_hooks() -> None:
    """Initialize hooks to production implementations.

    Called at module load time and by reset_hooks().
    """
    hooks.list_directory = _prod_list_directory
    hooks.is_readable = _prod_is_readable
    hooks.new_digest = _prod_new_digest


def reset_hooks() -> None:
    """Reset all hooks to production implementations.

    Use in conftest.py autouse fixture for test isolation.
    """
    _init_production_hooks()


_init_production_hooks()


# ---------------------------------------------------------------------------
# Synthetic .CF builders
# ---------------------------------------------------------------------------

_HEADER_SIZE = 4608
_NUMERIC_CODES = {"int16": ">h", "int32": ">i", "float32": ">f"}


def encode_pascal(text: str, width: int = 1) -> bytes:
    """Encode a length-prefixed string with 1- or 2-byte characters."""
    encoding = "latin-1" if width == 1 else "utf-16-le"
    return bytes([len(text)]) + text.encode(encoding)


def _put(header: bytearray, offset: int, data: bytes) -> None:
    end = offset + len(data)
    if end > len(header):
        header.extend(b"\x00" * (end - len(header)))
    header[offset:end] = data


def build_cf_bytes(
    version: str,
    *,
    text: dict[str, str] | None = None,
    numeric: dict[str, int | float] | None = None,
    scans: Sequence[tuple[float, float, float]] | None = None,
    scan_count: int | None = None,
    header_size: int = _HEADER_SIZE,
) -> bytes:
    """Build a synthetic .CF file.

    Args:
        version: Version tag written at offset 0.
        text: Text field values, placed at the offsets of every layout table
            that knows the field for this version.
        numeric: Numeric field values, placed the same way.
        scans: (time_seconds, channel_a, channel_b) rows for the scan table.
        scan_count: Scan count to write instead of len(scans).
        header_size: Minimum header length before the scan table.

    Returns:
        File contents.
    """
    from thermo_cf._decoders.header import SCAN_STORAGE_MARKER
    from thermo_cf._decoders.layouts import (
        EXTENDED_LAYOUTS,
        METADATA_LAYOUTS,
        TIME_RANGE_LAYOUTS,
        UNITS_LAYOUTS,
    )
    from thermo_cf._decoders.signal import SCAN_COUNT_OFFSET, SCAN_TABLE_OFFSET

    header = bytearray(header_size)
    _put(header, 0, encode_pascal(version))

    text_values = text if text is not None else {}
    numeric_values = numeric if numeric is not None else {}
    for tables in (METADATA_LAYOUTS, EXTENDED_LAYOUTS, UNITS_LAYOUTS, TIME_RANGE_LAYOUTS):
        layout = tables.get(version)
        if layout is None:
            continue
        for name, offset in layout["text"].items():
            if name in text_values:
                _put(header, offset, encode_pascal(text_values[name], layout["width"]))
        for name, field in layout["numeric"].items():
            if name in numeric_values:
                _put(header, field["offset"], struct.pack(_NUMERIC_CODES[field["kind"]], numeric_values[name]))

    if scans is None and scan_count is None:
        return bytes(header)

    rows = scans if scans is not None else []
    count = scan_count if scan_count is not None else len(rows)
    table = bytearray(SCAN_STORAGE_MARKER)
    table.extend(b"\x00" * SCAN_COUNT_OFFSET)
    table.extend(struct.pack("<H", count))
    table.extend(b"\x00" * (SCAN_TABLE_OFFSET - SCAN_COUNT_OFFSET - 2))
    for time_s, channel_a, channel_b in rows:
        table.extend(struct.pack("<fdd", time_s, channel_a, channel_b))

    return bytes(header) + bytes(table)


def encode_delta(values: Sequence[int], *, run_length: int = 0x0FFF) -> bytes:
    """Encode values as a run-length delta block ending in a zero control word.

    Deltas outside the int16 range (or equal to the reset sentinel) are
    written as absolute int32 resets.
    """
    out = bytearray()
    current = 0
    for start in range(0, len(values), run_length):
        run = values[start : start + run_length]
        out.extend(struct.pack(">H", 0x1000 | len(run)))
        for value in run:
            delta = value - current
            if -32767 <= delta <= 32767:
                out.extend(struct.pack(">h", delta))
            else:
                out.extend(struct.pack(">hi", -32768, value))
            current = value
    out.extend(struct.pack(">H", 0))
    return bytes(out)


def encode_double_delta(values: Sequence[int]) -> bytes:
    """Encode values as a double-delta block.

    Second differences outside the int16 range (or equal to the reset
    sentinel) are written as absolute high/low resets.
    """
    out = bytearray()
    value = 0
    step = 0
    for target in values:
        new_step = target - value
        second = new_step - step
        if -32768 <= second <= 32766:
            out.extend(struct.pack(">h", second))
            step = new_step
        else:
            high = target >> 32
            out.extend(struct.pack(">hhI", 32767, high, target - (high << 32)))
            step = 0
        value = target
    return bytes(out)


__all__ = [
    "IsReadableFn",
    "ListDirectoryFn",
    "NewDigestFn",
    "build_cf_bytes",
    "encode_delta",
    "encode_double_delta",
    "encode_pascal",
    "hooks",
    "reset_hooks",
]
