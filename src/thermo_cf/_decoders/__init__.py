"""Decoder functions for converting .CF bytes to typed structures.

Internal package: header location, version layouts, metadata, signal tables,
compression codecs and post-processing.
"""

from __future__ import annotations

from thermo_cf._decoders.compression import (
    decode_delta,
    decode_double_array,
    decode_double_delta,
)
from thermo_cf._decoders.header import SCAN_STORAGE_MARKER, find_signature, read_version
from thermo_cf._decoders.metadata import decode_fields, decode_metadata
from thermo_cf._decoders.postprocess import (
    classify_instrument,
    infer_channel,
    lookup_sequence,
    parse_date,
)
from thermo_cf._decoders.signal import (
    build_time_axis,
    compute_sampling_rate,
    decode_signal,
    read_strided,
)

__all__ = [
    "SCAN_STORAGE_MARKER",
    "build_time_axis",
    "classify_instrument",
    "compute_sampling_rate",
    "decode_delta",
    "decode_double_array",
    "decode_double_delta",
    "decode_fields",
    "decode_metadata",
    "decode_signal",
    "find_signature",
    "infer_channel",
    "lookup_sequence",
    "parse_date",
    "read_strided",
    "read_version",
]
