"""Tests for _decoders.signal module."""

from __future__ import annotations

import io
import struct

import numpy as np
import pytest

from thermo_cf._decoders.signal import (
    CHANNEL_INDICES,
    SCAN_STRIDE,
    build_time_axis,
    compute_sampling_rate,
    decode_signal,
    read_strided,
)
from thermo_cf._exceptions import TruncatedStreamError
from thermo_cf.testing import build_cf_bytes
from thermo_cf.types.record import ThermoCFRecord, make_record

SAMPLE_SCANS: list[tuple[float, float, float]] = [
    (0.0, 1.5, -2.0),
    (6.0, 2.5, -1.0),
    (12.0, 3.5, 0.0),
    (18.0, 4.5, 1.0),
]


def _record() -> ThermoCFRecord:
    return make_record("", "RUN01.CF", 0)


class TestReadStrided:
    """Tests for read_strided function."""

    def test_reads_column(self) -> None:
        data = b"".join(struct.pack("<fdd", t, a, b) for t, a, b in SAMPLE_SCANS)
        times = read_strided(io.BytesIO(data), 0, 4, "<f4", SCAN_STRIDE)
        channel_b = read_strided(io.BytesIO(data), 12, 4, "<f8", SCAN_STRIDE)
        assert times.tolist() == [0.0, 6.0, 12.0, 18.0]
        assert channel_b.tolist() == [-2.0, -1.0, 0.0, 1.0]
        assert times.dtype == np.float64

    def test_big_endian(self) -> None:
        data = struct.pack(">h", 1) + b"\x00\x00" + struct.pack(">h", -2)
        assert read_strided(io.BytesIO(data), 0, 2, ">i2", 4).tolist() == [1.0, -2.0]

    def test_zero_count(self) -> None:
        assert read_strided(io.BytesIO(b""), 0, 0, "<f4", 20).size == 0

    def test_last_value_needs_only_itemsize(self) -> None:
        data = struct.pack("<f", 1.0) + b"\x00" * 16 + struct.pack("<f", 2.0)
        assert read_strided(io.BytesIO(data), 0, 2, "<f4", 20).tolist() == [1.0, 2.0]

    def test_truncated_raises(self) -> None:
        data = struct.pack("<f", 1.0) + b"\x00" * 16 + b"\x00\x00"
        with pytest.raises(TruncatedStreamError):
            read_strided(io.BytesIO(data), 0, 2, "<f4", 20)

    def test_stride_smaller_than_item_raises(self) -> None:
        with pytest.raises(ValueError, match="stride"):
            read_strided(io.BytesIO(b"\x00" * 16), 0, 2, "<f8", 4)


class TestComputeSamplingRate:
    """Tests for compute_sampling_rate function."""

    def test_ten_scans_per_minute(self) -> None:
        """Times are in minutes and the rate is in scans per second: 10/min is 0.17 Hz."""
        assert compute_sampling_rate([0.0, 0.1, 0.2, 0.3]) == 0.17

    def test_one_scan_per_second(self) -> None:
        minutes = np.arange(5, dtype=np.float64) / 60.0
        assert compute_sampling_rate(minutes) == 1.0

    def test_single_point(self) -> None:
        assert compute_sampling_rate([1.0]) is None

    def test_constant_time(self) -> None:
        assert compute_sampling_rate([2.0, 2.0, 2.0]) is None


class TestBuildTimeAxis:
    """Tests for build_time_axis function."""

    def test_linear(self) -> None:
        assert build_time_axis(0.0, 1.0, 5) == [0.0, 0.25, 0.5, 0.75, 1.0]

    def test_two_points(self) -> None:
        assert build_time_axis(0.5, 3.0, 2) == [0.5, 3.0]

    def test_count_below_two(self) -> None:
        assert build_time_axis(0.5, 3.0, 0) == [0.5, 3.0]


class TestDecodeSignal:
    """Tests for decode_signal function."""

    def test_decodes_scan_table(self) -> None:
        stream = io.BytesIO(build_cf_bytes("31", scans=SAMPLE_SCANS))
        record = decode_signal(stream, _record())

        assert record["num_scans"] == 4
        assert record["time"] == pytest.approx([0.0, 0.1, 0.2, 0.3])
        assert record["intensity"] == [[1.5, 2.5, 3.5, 4.5], [-2.0, -1.0, 0.0, 1.0]]
        assert record["channels"] == list(CHANNEL_INDICES)
        assert record["time_units"] == "minutes"
        assert record["intensity_units"] == "mV"
        assert record["channel_units"] == "m/z"
        assert record["start_time"] == 0.0
        assert record["end_time"] == pytest.approx(0.3)
        assert record["sampling_rate"] == 0.17

    def test_channel_lengths_match_time(self) -> None:
        stream = io.BytesIO(build_cf_bytes("31", scans=SAMPLE_SCANS))
        record = decode_signal(stream, _record())
        num_scans = record["num_scans"]
        assert num_scans is not None
        for channel in record["intensity"]:
            assert len(channel) == len(record["time"])
        assert len(record["time"]) <= num_scans

    def test_single_scan(self) -> None:
        stream = io.BytesIO(build_cf_bytes("31", scans=[(30.0, 7.0, 8.0)]))
        record = decode_signal(stream, _record())
        assert record["time"] == [0.5]
        assert record["intensity"] == [[7.0], [8.0]]
        assert record["sampling_rate"] is None

    def test_zero_scan_count_leaves_record_empty(self) -> None:
        stream = io.BytesIO(build_cf_bytes("31", scans=SAMPLE_SCANS, scan_count=0))
        record = decode_signal(stream, _record())
        assert record["num_scans"] is None
        assert record["time"] == []
        assert record["intensity"] == []
        assert record["channels"] == []

    def test_missing_marker_leaves_record_empty(self) -> None:
        stream = io.BytesIO(build_cf_bytes("31"))
        record = decode_signal(stream, _record())
        assert record["num_scans"] is None
        assert record["time"] == []

    def test_truncated_table_raises(self) -> None:
        data = build_cf_bytes("31", scans=SAMPLE_SCANS)
        with pytest.raises(TruncatedStreamError):
            decode_signal(io.BytesIO(data[:-5]), _record())

    def test_count_larger_than_table_raises(self) -> None:
        data = build_cf_bytes("31", scans=SAMPLE_SCANS, scan_count=5)
        with pytest.raises(TruncatedStreamError):
            decode_signal(io.BytesIO(data), _record())

    def test_deterministic(self) -> None:
        data = build_cf_bytes("31", scans=SAMPLE_SCANS)
        first = decode_signal(io.BytesIO(data), _record())
        second = decode_signal(io.BytesIO(data), _record())
        assert first == second
