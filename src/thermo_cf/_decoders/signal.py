"""Signal decoding for .CF scan tables.

The scan table follows the CRawDataScanStorage marker. Each scan is stored
row-wise as a float32 time in seconds followed by one float64 per channel,
all little-endian. Columns are recovered with strided numpy views.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from thermo_cf._decoders.header import SCAN_STORAGE_MARKER, find_signature
from thermo_cf._protocols.stream import BinaryStreamProtocol
from thermo_cf._stream import read_exact, read_numeric
from thermo_cf.config import DEFAULT_SEARCH_WINDOW
from thermo_cf.logging import get_logger
from thermo_cf.types.record import ThermoCFRecord

logger = get_logger(__name__)

# Offsets relative to the end of the marker
SCAN_COUNT_OFFSET = 60
SCAN_TABLE_OFFSET = 97

CHANNEL_COUNT = 2
CHANNEL_INDICES: tuple[int, ...] = (2, 3)
TIME_BYTES = 4
VALUE_BYTES = 8
SCAN_STRIDE = TIME_BYTES + CHANNEL_COUNT * VALUE_BYTES

MIN_SCANS = 1
MAX_SCANS = 1_000_000_000

TIME_UNITS = "minutes"
INTENSITY_UNITS = "mV"
CHANNEL_UNITS = "m/z"


def read_strided(
    stream: BinaryStreamProtocol,
    offset: int,
    count: int,
    dtype: npt.DTypeLike,
    stride: int,
) -> npt.NDArray[np.float64]:
    """Read count values of dtype spaced stride bytes apart.

    Args:
        stream: Source stream.
        offset: Absolute offset of the first value.
        count: Number of values.
        dtype: numpy dtype including byte order, e.g. "<f4" or ">i2".
        stride: Distance in bytes between consecutive values.

    Returns:
        Contiguous float64 array of length count.

    Raises:
        TruncatedStreamError: If the stream ends before the last value.
        ValueError: If stride is smaller than the item size.
    """
    item = np.dtype(dtype)
    if stride < item.itemsize:
        raise ValueError(f"stride {stride} is smaller than item size {item.itemsize}")
    if count <= 0:
        return np.empty(0, dtype=np.float64)

    span = (count - 1) * stride + item.itemsize
    data = read_exact(stream, offset, span, f"{count} x {item.str} values")
    view: npt.NDArray[np.generic] = np.ndarray(
        shape=(count,),
        dtype=item,
        buffer=data,
        offset=0,
        strides=(stride,),
    )
    return view.astype(np.float64)


def compute_sampling_rate(time: Sequence[float] | npt.NDArray[np.float64]) -> float | None:
    """Return scans per second for a time axis in minutes.

    The reciprocal of the mean step in seconds, rounded to 2 decimals.
    None when fewer than two points or a zero mean step.
    """
    values = np.asarray(time, dtype=np.float64)
    if values.size < 2:
        return None
    mean_step = float(np.mean(np.diff(values * 60.0)))
    if mean_step == 0.0:
        return None
    return round(1.0 / mean_step, 2)


def build_time_axis(start: float, stop: float, count: int) -> list[float]:
    """Return an evenly spaced time axis; just the endpoints when count <= 2."""
    if count > 2:
        axis: list[float] = np.linspace(start, stop, count).tolist()
        return axis
    return [start, stop]


def decode_signal(
    stream: BinaryStreamProtocol,
    record: ThermoCFRecord,
    *,
    window: int = DEFAULT_SEARCH_WINDOW,
) -> ThermoCFRecord:
    """Decode the scan table into time and intensity lists.

    Args:
        stream: Source stream.
        record: Record to populate; updated in place.
        window: Read window for the marker search.

    Returns:
        The same record. Left unchanged when the marker is missing or the
        scan count is outside [MIN_SCANS, MAX_SCANS].

    Raises:
        TruncatedStreamError: If the scan table is cut short.
    """
    marker = find_signature(stream, SCAN_STORAGE_MARKER, window=window)
    if marker is None:
        logger.debug("Scan storage marker not found", extra={"file_name": record["file_name"]})
        return record

    base = marker + len(SCAN_STORAGE_MARKER)
    num_scans = int(read_numeric(stream, base + SCAN_COUNT_OFFSET, "uint16", byteorder="<"))
    if num_scans < MIN_SCANS or num_scans > MAX_SCANS:
        logger.debug(
            "Invalid scan count %d",
            num_scans,
            extra={"file_name": record["file_name"], "num_scans": num_scans},
        )
        return record

    table = base + SCAN_TABLE_OFFSET
    time = read_strided(stream, table, num_scans, "<f4", SCAN_STRIDE) / 60.0
    intensity = [
        read_strided(stream, table + TIME_BYTES + channel * VALUE_BYTES, num_scans, "<f8", SCAN_STRIDE)
        for channel in range(CHANNEL_COUNT)
    ]

    record["num_scans"] = num_scans
    record["time"] = time.tolist()
    record["intensity"] = [values.tolist() for values in intensity]
    record["channels"] = list(CHANNEL_INDICES)
    record["time_units"] = TIME_UNITS
    record["intensity_units"] = INTENSITY_UNITS
    record["channel_units"] = CHANNEL_UNITS
    record["start_time"] = float(time.min())
    record["end_time"] = float(time.max())
    record["sampling_rate"] = compute_sampling_rate(time)

    logger.debug(
        "Decoded %d scans",
        num_scans,
        extra={"file_name": record["file_name"], "num_scans": num_scans},
    )
    return record


__all__ = [
    "CHANNEL_COUNT",
    "CHANNEL_INDICES",
    "MAX_SCANS",
    "MIN_SCANS",
    "SCAN_COUNT_OFFSET",
    "SCAN_STRIDE",
    "SCAN_TABLE_OFFSET",
    "build_time_axis",
    "compute_sampling_rate",
    "decode_signal",
    "read_strided",
]
