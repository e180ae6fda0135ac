"""TypedDict definition for a decoded .CF file.

One ThermoCFRecord is produced per file. The record owns all of its fields;
signal arrays are plain Python lists so records serialize to JSON directly.
"""

from __future__ import annotations

from typing import TypedDict


class ThermoCFRecord(TypedDict):
    """Decoded contents of one Thermo .CF file.

    Attributes:
        file_path: Directory containing the file.
        file_name: File name including extension.
        file_size: Size in bytes.
        file_checksum: Uppercase MD5 hex digest, "" if unavailable.
        file_version: Format version tag, "" if unparseable.
        file_info: Free-text file description.
        sample_name: Sample identifier.
        sample_info: Sample description.
        operator: Operator name (upper-cased).
        datetime: Acquisition date, ISO 8601 when recognized.
        datevalue: Acquisition time as POSIX seconds (naive time read as UTC).
        instrument: Derived instrument class, e.g. "LC/DAD".
        instmodel: Instrument model (upper-cased).
        inlet: Inlet description (upper-cased).
        method_name: Acquisition method name.
        sequence_name: Name of the sibling sequence file, if any.
        sequence_path: Name of the containing sequence directory.
        seqindex: Position in the sequence.
        vial: Vial number.
        replicate: Replicate number.
        injvol: Injection volume (not stored by .CF files).
        glp_flag: GLP flag for versions that carry it.
        data_source: Data source string for versions that carry it.
        firmware_rev: Firmware revision for versions that carry it.
        software_rev: Software revision for versions that carry it.
        channel: FID channel letter inferred from the file name.
        num_scans: Scan count read from the scan table.
        start_time: First retention time (minutes).
        end_time: Last retention time (minutes).
        sampling_rate: Scans per second, rounded to 2 decimals.
        time: Retention times in minutes.
        intensity: One list per channel, each aligned with time.
        channels: Channel indices of the intensity lists.
        time_units: Units of time.
        intensity_units: Units of intensity.
        channel_units: Units of the channel axis.
    """

    file_path: str
    file_name: str
    file_size: int
    file_checksum: str
    file_version: str
    file_info: str
    sample_name: str
    sample_info: str
    operator: str
    datetime: str
    datevalue: float | None
    instrument: str
    instmodel: str
    inlet: str
    method_name: str
    sequence_name: str
    sequence_path: str
    seqindex: int | None
    vial: int | None
    replicate: int | None
    injvol: float | None
    glp_flag: int | None
    data_source: str
    firmware_rev: str
    software_rev: str
    channel: str
    num_scans: int | None
    start_time: float | None
    end_time: float | None
    sampling_rate: float | None
    time: list[float]
    intensity: list[list[float]]
    channels: list[int]
    time_units: str
    intensity_units: str
    channel_units: str


def make_record(file_path: str, file_name: str, file_size: int) -> ThermoCFRecord:
    """Create a record with file identity set and every decoded field empty."""
    return ThermoCFRecord(
        file_path=file_path,
        file_name=file_name,
        file_size=file_size,
        file_checksum="",
        file_version="",
        file_info="",
        sample_name="",
        sample_info="",
        operator="",
        datetime="",
        datevalue=None,
        instrument="",
        instmodel="",
        inlet="",
        method_name="",
        sequence_name="",
        sequence_path="",
        seqindex=None,
        vial=None,
        replicate=None,
        injvol=None,
        glp_flag=None,
        data_source="",
        firmware_rev="",
        software_rev="",
        channel="",
        num_scans=None,
        start_time=None,
        end_time=None,
        sampling_rate=None,
        time=[],
        intensity=[],
        channels=[],
        time_units="",
        intensity_units="",
        channel_units="",
    )


__all__ = [
    "ThermoCFRecord",
    "make_record",
]
