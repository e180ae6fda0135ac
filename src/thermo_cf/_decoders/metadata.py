"""Header metadata decoding for .CF files.

Reads the version tag, then every field of the version's layout tables, and
finally applies the post-processors. Unknown or unparseable versions leave
the header fields empty; they never raise.
"""

from __future__ import annotations

from pathlib import Path

from thermo_cf._decoders.header import read_version
from thermo_cf._decoders.layouts import (
    EXTENDED_LAYOUTS,
    FID_VERSIONS,
    FIXED_UNITS,
    KNOWN_VERSIONS,
    METADATA_LAYOUTS,
    TIME_RANGE_LAYOUTS,
    UNITS_LAYOUTS,
    FieldLayout,
)
from thermo_cf._decoders.postprocess import (
    classify_instrument,
    infer_channel,
    lookup_sequence,
    parse_date,
)
from thermo_cf._protocols.stream import BinaryStreamProtocol
from thermo_cf._stream import read_numeric, read_pascal_string
from thermo_cf.logging import get_logger
from thermo_cf.types.record import ThermoCFRecord

logger = get_logger(__name__)

TIME_UNITS = "minutes"
DEFAULT_FID_CHANNEL_UNITS = "char"

_MS_PER_MINUTE = 60_000.0


def decode_fields(
    stream: BinaryStreamProtocol,
    layout: FieldLayout,
) -> tuple[dict[str, str], dict[str, int | float]]:
    """Read every field of a layout.

    Args:
        stream: Source stream.
        layout: Field offsets and types for one version family.

    Returns:
        (text_fields, numeric_fields) keyed by field name.

    Raises:
        TruncatedStreamError: If a numeric field lies past end of stream.
    """
    text = {
        name: read_pascal_string(stream, offset, layout["width"])
        for name, offset in layout["text"].items()
    }
    numeric = {
        name: read_numeric(stream, field["offset"], field["kind"])
        for name, field in layout["numeric"].items()
    }
    return text, numeric


def _decode_identity(stream: BinaryStreamProtocol, layout: FieldLayout, record: ThermoCFRecord) -> None:
    text, numeric = decode_fields(stream, layout)
    record["file_info"] = text["file_info"]
    record["sample_name"] = text["sample_name"]
    record["sample_info"] = text["sample_info"]
    record["operator"] = text["operator"]
    record["datetime"] = text["datetime"]
    record["instmodel"] = text["instmodel"]
    record["inlet"] = text["inlet"]
    record["method_name"] = text["method_name"]
    record["seqindex"] = int(numeric["seqindex"])
    record["vial"] = int(numeric["vial"])
    record["replicate"] = int(numeric["replicate"])


def _decode_extended(stream: BinaryStreamProtocol, layout: FieldLayout, record: ThermoCFRecord) -> None:
    text, numeric = decode_fields(stream, layout)
    record["glp_flag"] = int(numeric["glp_flag"])
    record["data_source"] = text["data_source"]
    record["firmware_rev"] = text["firmware_rev"]
    record["software_rev"] = text["software_rev"]


def _decode_units(stream: BinaryStreamProtocol, version: str, record: ThermoCFRecord) -> None:
    fixed = FIXED_UNITS.get(version)
    layout = UNITS_LAYOUTS.get(version)
    if fixed is not None:
        units = fixed
    elif layout is not None:
        units, _ = decode_fields(stream, layout)
    else:
        return

    record["time_units"] = TIME_UNITS
    record["intensity_units"] = units["intensity_units"]
    record["channel_units"] = units["channel_units"]


def _decode_time_range(stream: BinaryStreamProtocol, version: str, record: ThermoCFRecord) -> None:
    layout = TIME_RANGE_LAYOUTS.get(version)
    if layout is None:
        record["start_time"] = None
        record["end_time"] = None
        return

    _, numeric = decode_fields(stream, layout)
    record["start_time"] = float(numeric["start_time"]) / _MS_PER_MINUTE
    record["end_time"] = float(numeric["end_time"]) / _MS_PER_MINUTE


def decode_metadata(stream: BinaryStreamProtocol, record: ThermoCFRecord) -> ThermoCFRecord:
    """Decode header metadata into record.

    Args:
        stream: Source stream positioned anywhere.
        record: Record with file identity set; updated in place.

    Returns:
        The same record.

    Raises:
        TruncatedStreamError: If the header is shorter than its layout.
    """
    version = read_version(stream)
    record["file_version"] = version
    if not version:
        return record

    if version not in KNOWN_VERSIONS:
        logger.debug("No header layout for version %s", version, extra={"file_version": version})
    else:
        _decode_identity(stream, METADATA_LAYOUTS[version], record)

    extended = EXTENDED_LAYOUTS.get(version)
    if extended is not None:
        _decode_extended(stream, extended, record)

    _decode_units(stream, version, record)

    if version in FID_VERSIONS:
        record["channel"] = infer_channel(version, record["file_name"])
        if not record["channel_units"]:
            record["channel_units"] = DEFAULT_FID_CHANNEL_UNITS

    _decode_time_range(stream, version, record)

    sequence_name, sequence_path = lookup_sequence(Path(record["file_path"]))
    record["sequence_name"] = sequence_name
    record["sequence_path"] = sequence_path

    if record["datetime"]:
        record["datetime"], record["datevalue"] = parse_date(record["datetime"])

    record["instrument"] = classify_instrument(
        version,
        record["file_info"],
        record["inlet"],
        record["instmodel"],
        record["channel_units"],
    )

    record["instmodel"] = record["instmodel"].upper()
    record["inlet"] = record["inlet"].upper()
    record["operator"] = record["operator"].upper()

    return record


__all__ = [
    "DEFAULT_FID_CHANNEL_UNITS",
    "TIME_UNITS",
    "decode_fields",
    "decode_metadata",
]
