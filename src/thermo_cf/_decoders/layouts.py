"""Fixed-offset field layouts for each .CF format version.

Each layout is plain data: text fields map to the offset of their length
byte, numeric fields to an offset and big-endian type. Versions in the same
family share one layout object. Lookups happen once per decode.
"""

from __future__ import annotations

from typing import TypedDict

from thermo_cf._stream import CharWidth, NumericKind


class NumericField(TypedDict):
    """Fixed-width big-endian numeric field."""

    offset: int
    kind: NumericKind


class FieldLayout(TypedDict):
    """Set of fields read from one version family.

    Attributes:
        width: Bytes per character for every text field.
        text: Field name to offset of the length-prefixed string.
        numeric: Field name to numeric field descriptor.
    """

    width: CharWidth
    text: dict[str, int]
    numeric: dict[str, NumericField]


NARROW_VERSIONS: frozenset[str] = frozenset({"2", "8", "81", "30", "31"})
WIDE_VERSIONS: frozenset[str] = frozenset({"130", "131", "179", "181"})

MS_VERSIONS: frozenset[str] = frozenset({"2"})
FID_VERSIONS: frozenset[str] = frozenset({"8", "81", "179", "181"})
LC_VERSIONS: frozenset[str] = frozenset({"30", "31", "130", "131"})

# Sequence position fields sit at the same offsets in both families
_SEQUENCE_FIELDS: dict[str, NumericField] = {
    "seqindex": NumericField(offset=252, kind="int16"),
    "vial": NumericField(offset=254, kind="int16"),
    "replicate": NumericField(offset=256, kind="int16"),
}

NARROW_METADATA = FieldLayout(
    width=1,
    text={
        "file_info": 4,
        "sample_name": 24,
        "sample_info": 86,
        "operator": 148,
        "datetime": 178,
        "instmodel": 208,
        "inlet": 218,
        "method_name": 228,
    },
    numeric=_SEQUENCE_FIELDS,
)

WIDE_METADATA = FieldLayout(
    width=2,
    text={
        "file_info": 347,
        "sample_name": 858,
        "sample_info": 1369,
        "operator": 1880,
        "datetime": 2391,
        "instmodel": 2492,
        "inlet": 2533,
        "method_name": 2574,
    },
    numeric=_SEQUENCE_FIELDS,
)

METADATA_LAYOUTS: dict[str, FieldLayout] = {
    **{version: NARROW_METADATA for version in NARROW_VERSIONS},
    **{version: WIDE_METADATA for version in WIDE_VERSIONS},
}

EXTENDED_LAYOUTS: dict[str, FieldLayout] = {
    "30": FieldLayout(
        width=1,
        text={"data_source": 322, "firmware_rev": 355, "software_rev": 405},
        numeric={"glp_flag": NumericField(offset=318, kind="int32")},
    ),
}
EXTENDED_LAYOUTS["130"] = EXTENDED_LAYOUTS["179"] = FieldLayout(
    width=2,
    text={"data_source": 3089, "firmware_rev": 3601, "software_rev": 3802},
    numeric={"glp_flag": NumericField(offset=3085, kind="int32")},
)

# Version 2 files carry no unit strings
FIXED_UNITS: dict[str, dict[str, str]] = {
    "2": {"intensity_units": "counts", "channel_units": "m/z"},
}

_NARROW_UNITS = FieldLayout(
    width=1,
    text={"intensity_units": 580, "channel_units": 596},
    numeric={},
)
_WIDE_UNITS = FieldLayout(
    width=2,
    text={"intensity_units": 4172, "channel_units": 4213},
    numeric={},
)

UNITS_LAYOUTS: dict[str, FieldLayout] = {
    "8": _NARROW_UNITS,
    "81": _NARROW_UNITS,
    "30": _NARROW_UNITS,
    "31": FieldLayout(
        width=1,
        text={"intensity_units": 326, "channel_units": 344},
        numeric={},
    ),
    "130": _WIDE_UNITS,
    "179": _WIDE_UNITS,
    "181": _WIDE_UNITS,
    "131": FieldLayout(
        width=2,
        text={"intensity_units": 3093, "channel_units": 3136},
        numeric={},
    ),
}

# Header time range in milliseconds
_FLOAT_RANGE = FieldLayout(
    width=1,
    text={},
    numeric={
        "start_time": NumericField(offset=282, kind="float32"),
        "end_time": NumericField(offset=286, kind="float32"),
    },
)
_INT_RANGE = FieldLayout(
    width=1,
    text={},
    numeric={
        "start_time": NumericField(offset=282, kind="int32"),
        "end_time": NumericField(offset=286, kind="int32"),
    },
)

TIME_RANGE_LAYOUTS: dict[str, FieldLayout] = {
    "81": _FLOAT_RANGE,
    "179": _FLOAT_RANGE,
    "181": _FLOAT_RANGE,
    "2": _INT_RANGE,
    "8": _INT_RANGE,
    "30": _INT_RANGE,
    "130": _INT_RANGE,
}

KNOWN_VERSIONS: frozenset[str] = NARROW_VERSIONS | WIDE_VERSIONS


__all__ = [
    "EXTENDED_LAYOUTS",
    "FID_VERSIONS",
    "FIXED_UNITS",
    "KNOWN_VERSIONS",
    "LC_VERSIONS",
    "METADATA_LAYOUTS",
    "MS_VERSIONS",
    "NARROW_METADATA",
    "NARROW_VERSIONS",
    "TIME_RANGE_LAYOUTS",
    "UNITS_LAYOUTS",
    "WIDE_METADATA",
    "WIDE_VERSIONS",
    "FieldLayout",
    "NumericField",
]
