"""Strictly typed decoder for Thermo chromatography .CF files.

This library provides:
- Header metadata decoding for the narrow (1-byte) and wide (UTF-16LE)
  format families
- Scan table decoding into time and per-channel intensity lists
- Delta and double-delta codecs for compressed signal blocks
- Batch import of files and directory trees, with a `thermo-cf` CLI

All data structures use TypedDicts for strict typing.
"""

from __future__ import annotations

# Decoders
from thermo_cf._decoders import (
    classify_instrument,
    decode_delta,
    decode_double_array,
    decode_double_delta,
    find_signature,
    parse_date,
)

# Errors
from thermo_cf._exceptions import (
    DecodingError,
    ThermoCFError,
    ThermoCFReadError,
    TruncatedStreamError,
    UnsupportedFormatError,
)

# Batch
from thermo_cf.batch import BatchResult, discover_files, import_files

# Readers
from thermo_cf.readers import CF_EXTENSIONS, ThermoCFReader, compute_checksum

# Types
from thermo_cf.types import ContentScope, ErrorResult, ThermoCFRecord

__all__ = [
    "CF_EXTENSIONS",
    "BatchResult",
    "ContentScope",
    "DecodingError",
    "ErrorResult",
    "ThermoCFError",
    "ThermoCFReadError",
    "ThermoCFReader",
    "ThermoCFRecord",
    "TruncatedStreamError",
    "UnsupportedFormatError",
    "classify_instrument",
    "compute_checksum",
    "decode_delta",
    "decode_double_array",
    "decode_double_delta",
    "discover_files",
    "find_signature",
    "import_files",
    "parse_date",
]
