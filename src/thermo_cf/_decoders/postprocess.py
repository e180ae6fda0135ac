"""Post-processing of decoded header strings.

Date normalization, instrument classification, FID channel inference and
the sibling sequence-file lookup. All functions are pure apart from
lookup_sequence, which lists the directory through hooks.list_directory.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path

from thermo_cf._decoders.layouts import FID_VERSIONS, LC_VERSIONS, MS_VERSIONS
from thermo_cf.logging import get_logger
from thermo_cf.testing import hooks

logger = get_logger(__name__)

ISO_FORMAT = "%Y-%m-%dT%H:%M:%S"

SEQUENCE_EXTENSION = ".S"

# Regional formats written by different instrument software versions.
# Each regex must match the whole trimmed string. The date and time groups
# are rejoined with one space before strptime.
_DATE_FORMATS: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(rf"(?P<date>{date})\s*(?P<time>{time})"), date_format)
    for date, time, date_format in (
        (r"\d{1,2} \w{3} \d{1,2}", r"\d{1,2}:\d{2} \w{2}", "%d %b %y %I:%M %p"),
        (r"\d{2} \w{3} \d{2}", r"\d{2}:\d{2}", "%d %b %y %H:%M"),
        (r"\d{2}/\d{2}/\d{2}", r"\d{2}:\d{2}:\d{2} \w{2}", "%m/%d/%y %I:%M:%S %p"),
        (r"\d{1,2}/\d{1,2}/\d{2}", r"\d{1,2}:\d{2}:\d{2}", "%m/%d/%y %H:%M:%S"),
        (r"\d{2}/\d{2}/\d{4}", r"\d{2}:\d{2}", "%m/%d/%Y %H:%M"),
        (r"\d{1,2}/\d{1,2}/\d{4}", r"\d{1,2}:\d{2}:\d{2} \w{2}", "%m/%d/%Y %I:%M:%S %p"),
        (r"\d{2}\.\d{2}\.\d{4}", r"\d{2}:\d{2}:\d{2}", "%m.%d.%Y %H:%M:%S"),
        (r"\d{2}-\w{3}-\d{2}", r"\d{2}:\d{2}:\d{2}", "%d-%b-%y %H:%M:%S"),
        (r"\d{2}-\w{3}-\d{2},", r"\d{2}:\d{2}:\d{2}", "%d-%b-%y, %H:%M:%S"),
    )
)

# (label, keywords) in priority order, then the fallback label
_InstrumentTable = tuple[tuple[tuple[str, tuple[str, ...]], ...], str]

_MS_TABLE: _InstrumentTable = (
    (
        ("CE/MS", ("CE",)),
        ("LC/MS", ("LC",)),
        ("GC/MS", ("GC",)),
    ),
    "MS",
)

_FID_TABLE: _InstrumentTable = (
    (("GC/FID", ("GC",)),),
    "GC",
)

_LC_TABLE: _InstrumentTable = (
    (
        ("LC/DAD", ("DAD", "1315", "4212", "7117")),
        ("LC/VWD", ("VWD", "1314", "7114")),
        ("LC/MWD", ("MWD", "1365")),
        ("LC/FLD", ("FLD", "1321")),
        ("LC/ELSD", ("ELS", "4260", "7102")),
        ("LC/RID", ("RID", "1362")),
        ("LC/ADC", ("ADC", "35900")),
        ("CE", ("CE",)),
    ),
    "LC",
)

_FID_CHANNELS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"FID1A", re.IGNORECASE), "A"),
    (re.compile(r"FID2B", re.IGNORECASE), "B"),
)


def parse_date(text: str) -> tuple[str, float | None]:
    """Normalize an acquisition date string to ISO 8601.

    Args:
        text: Date/time string as stored in the file header.

    Returns:
        (iso_string, posix_seconds). When no known format applies the input
        is returned unchanged with None. Naive times are read as UTC.
    """
    trimmed = text.strip()
    for pattern, date_format in _DATE_FORMATS:
        match = pattern.fullmatch(trimmed)
        if match is None:
            continue
        candidate = " ".join(f"{match.group('date')} {match.group('time')}".split())
        try:
            parsed = datetime.strptime(candidate, date_format)
        except ValueError:
            logger.debug("Date %r matched %s but did not parse", text, date_format)
            continue
        return parsed.strftime(ISO_FORMAT), parsed.replace(tzinfo=timezone.utc).timestamp()

    return text, None


def _instrument_table(version: str) -> _InstrumentTable | None:
    if version in MS_VERSIONS:
        return _MS_TABLE
    if version in FID_VERSIONS:
        return _FID_TABLE
    if version in LC_VERSIONS:
        return _LC_TABLE
    return None


def classify_instrument(
    version: str,
    file_info: str,
    inlet: str,
    instmodel: str,
    channel_units: str,
) -> str:
    """Infer the instrument class from decoded header strings.

    Keywords are matched case-insensitively against the concatenated strings;
    the first matching class in priority order wins.

    Args:
        version: Format version tag.
        file_info: Decoded file description.
        inlet: Decoded inlet string.
        instmodel: Decoded instrument model.
        channel_units: Decoded channel units.

    Returns:
        Instrument label such as "LC/DAD" or "GC/FID", or "" when the strings
        are empty or the version has no classification table.
    """
    haystack = f"{file_info}{inlet}{instmodel}{channel_units}".upper()
    if not haystack:
        return ""

    table = _instrument_table(version)
    if table is None:
        return ""

    classes, fallback = table
    for label, keywords in classes:
        if any(keyword in haystack for keyword in keywords):
            return label
    return fallback


def infer_channel(version: str, file_name: str) -> str:
    """Infer the FID channel letter from the file name (FID versions only)."""
    if version not in FID_VERSIONS:
        return ""
    for pattern, channel in _FID_CHANNELS:
        if pattern.search(file_name) is not None:
            return channel
    return ""


def lookup_sequence(directory: Path, *, extension: str = SEQUENCE_EXTENSION) -> tuple[str, str]:
    """Find the sequence file sitting next to a data file.

    Args:
        directory: Directory containing the data file.
        extension: Sequence file extension, matched case-insensitively.

    Returns:
        (sequence_name, sequence_path): stem of the first matching sibling
        file and the name of the directory. ("", "") when the directory
        cannot be listed.
    """
    if str(directory) in ("", "."):
        return "", ""

    try:
        entries = hooks.list_directory(directory)
    except OSError as e:
        logger.debug("Cannot list %s for a sequence file: %s", directory, e)
        return "", ""
    if entries is None:
        return "", ""

    suffix = extension.lower()
    for entry in entries:
        if entry.suffix.lower() == suffix:
            return entry.stem, directory.name

    return "", directory.name


__all__ = [
    "ISO_FORMAT",
    "SEQUENCE_EXTENSION",
    "classify_instrument",
    "infer_channel",
    "lookup_sequence",
    "parse_date",
]
