"""Tests for readers.thermo_cf module."""

from __future__ import annotations

import hashlib
import io
import os
import sys
from pathlib import Path

import pytest

from thermo_cf._exceptions import ThermoCFReadError, TruncatedStreamError, UnsupportedFormatError
from thermo_cf._protocols.hashing import DigestProtocol
from thermo_cf.readers.thermo_cf import (
    ThermoCFReader,
    _is_cf_file,
    compute_checksum,
)
from thermo_cf.testing import build_cf_bytes, hooks

# Directory modes are not enforced for root or on Windows
_MODES_IGNORED = sys.platform == "win32" or os.geteuid() == 0


class TestIsCfFile:
    """Tests for _is_cf_file function."""

    def test_uppercase_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "RUN01.CF"
        path.touch()
        assert _is_cf_file(path) is True

    def test_lowercase_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "run01.cf"
        path.touch()
        assert _is_cf_file(path) is True

    def test_other_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "run01.raw"
        path.touch()
        assert _is_cf_file(path) is False

    def test_directory_returns_false(self, tmp_path: Path) -> None:
        path = tmp_path / "run01.CF"
        path.mkdir()
        assert _is_cf_file(path) is False

    def test_nonexistent_file(self, tmp_path: Path) -> None:
        assert _is_cf_file(tmp_path / "missing.CF") is False


class TestComputeChecksum:
    """Tests for compute_checksum function."""

    def test_uppercase_md5(self, tmp_path: Path) -> None:
        path = tmp_path / "data.CF"
        path.write_bytes(b"thermo")
        assert compute_checksum(path) == hashlib.md5(b"thermo").hexdigest().upper()

    def test_digest_unavailable_returns_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "data.CF"
        path.write_bytes(b"thermo")

        def _no_md5() -> DigestProtocol:
            raise ValueError("disabled for FIPS")

        hooks.new_digest = _no_md5
        assert compute_checksum(path) == ""

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ThermoCFReadError):
            compute_checksum(tmp_path / "missing.CF")


class TestThermoCFReaderInit:
    """Tests for ThermoCFReader construction and supports_format."""

    def test_invalid_window(self) -> None:
        with pytest.raises(ValueError, match="window"):
            ThermoCFReader(window=0)

    def test_supports_format(self, tmp_path: Path) -> None:
        cf = tmp_path / "a.CF"
        cf.touch()
        other = tmp_path / "a.txt"
        other.touch()
        reader = ThermoCFReader()
        assert reader.supports_format(cf) is True
        assert reader.supports_format(other) is False


class TestThermoCFReaderDecode:
    """Tests for ThermoCFReader.decode."""

    def test_full_decode(self, sample_lc_stream: io.BytesIO, sample_lc_bytes: bytes) -> None:
        record = ThermoCFReader().decode(sample_lc_stream, len(sample_lc_bytes))

        assert record["file_version"] == "31"
        assert record["instrument"] == "LC/DAD"
        assert record["num_scans"] == 4
        assert record["start_time"] == 0.0
        assert record["sampling_rate"] == 0.17
        assert record["intensity_units"] == "mV"
        assert record["file_name"] == ""

    def test_header_only(self, sample_lc_stream: io.BytesIO, sample_lc_bytes: bytes) -> None:
        record = ThermoCFReader().decode(sample_lc_stream, len(sample_lc_bytes), content="header")

        assert record["sample_name"] == "Blank 01"
        assert record["intensity_units"] == "mAU"
        assert record["num_scans"] is None
        assert record["time"] == []

    def test_data_only(self, sample_lc_stream: io.BytesIO, sample_lc_bytes: bytes) -> None:
        record = ThermoCFReader().decode(sample_lc_stream, len(sample_lc_bytes), content="data")

        assert record["file_version"] == ""
        assert record["sample_name"] == ""
        assert record["num_scans"] == 4
        assert len(record["intensity"]) == 2

    def test_zero_size_returns_empty_record(self) -> None:
        record = ThermoCFReader().decode(io.BytesIO(b""), 0, path=Path("/runs/empty.CF"))

        assert record["file_name"] == "empty.CF"
        assert record["file_path"] == str(Path("/runs"))
        assert record["file_size"] == 0
        assert record["file_version"] == ""
        assert record["time"] == []

    def test_deterministic(self, sample_lc_bytes: bytes) -> None:
        reader = ThermoCFReader()
        first = reader.decode(io.BytesIO(sample_lc_bytes), len(sample_lc_bytes))
        second = reader.decode(io.BytesIO(sample_lc_bytes), len(sample_lc_bytes))
        assert first == second

    def test_invalid_scan_count_keeps_metadata(self) -> None:
        data = build_cf_bytes("31", text={"sample_name": "S"}, scans=[(0.0, 1.0, 2.0)], scan_count=0)
        record = ThermoCFReader().decode(io.BytesIO(data), len(data))

        assert record["sample_name"] == "S"
        assert record["num_scans"] is None
        assert record["intensity"] == []

    def test_truncated_table_raises(self, sample_lc_bytes: bytes) -> None:
        data = sample_lc_bytes[:-10]
        with pytest.raises(TruncatedStreamError):
            ThermoCFReader().decode(io.BytesIO(data), len(data))

    def test_small_window_finds_marker(self, sample_lc_bytes: bytes) -> None:
        record = ThermoCFReader(window=7).decode(io.BytesIO(sample_lc_bytes), len(sample_lc_bytes))
        assert record["num_scans"] == 4


@pytest.mark.integration
class TestThermoCFReaderRead:
    """Tests for ThermoCFReader.read and its scoped variants."""

    def test_read_file(self, sample_lc_file: Path, sample_lc_bytes: bytes) -> None:
        record = ThermoCFReader().read(sample_lc_file)

        assert record["file_name"] == "RUN01.CF"
        assert record["file_path"] == str(sample_lc_file.resolve().parent)
        assert record["file_size"] == len(sample_lc_bytes)
        assert record["file_checksum"] == hashlib.md5(sample_lc_bytes).hexdigest().upper()
        assert record["num_scans"] == 4
        assert record["sample_name"] == "Blank 01"

    def test_read_with_sequence_file(self, sample_lc_file: Path) -> None:
        (sample_lc_file.parent / "Gradient.S").write_bytes(b"")
        record = ThermoCFReader().read(sample_lc_file)

        assert record["sequence_name"] == "Gradient"
        assert record["sequence_path"] == sample_lc_file.resolve().parent.name

    def test_read_header(self, sample_lc_file: Path) -> None:
        record = ThermoCFReader().read_header(sample_lc_file)
        assert record["file_version"] == "31"
        assert record["time"] == []
        assert record["file_checksum"] != ""

    def test_read_data(self, sample_lc_file: Path) -> None:
        record = ThermoCFReader().read_data(sample_lc_file)
        assert record["file_version"] == ""
        assert len(record["time"]) == 4

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "EMPTY.CF"
        path.write_bytes(b"")
        record = ThermoCFReader().read(path)

        assert record["file_size"] == 0
        assert record["file_checksum"] == ""
        assert record["file_version"] == ""

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ThermoCFReadError, match="does not exist"):
            ThermoCFReader().read(tmp_path / "missing.CF")

    def test_wrong_extension_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "run.raw"
        path.write_bytes(b"\x0231")
        with pytest.raises(UnsupportedFormatError):
            ThermoCFReader().read(path)

    def test_directory_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "run.CF"
        path.mkdir()
        with pytest.raises(UnsupportedFormatError):
            ThermoCFReader().read(path)

    def test_sequence_listing_error_keeps_record(self, sample_lc_file: Path) -> None:
        def _denied(path: Path) -> list[Path] | None:
            raise PermissionError(13, "Permission denied", str(path))

        hooks.list_directory = _denied
        record = ThermoCFReader().read(sample_lc_file)

        assert record["sample_name"] == "Blank 01"
        assert record["sequence_name"] == ""
        assert record["num_scans"] == 4

    @pytest.mark.skipif(_MODES_IGNORED, reason="directory modes not enforced")
    def test_unlistable_parent_directory(self, tmp_path: Path, sample_lc_bytes: bytes) -> None:
        run_dir = tmp_path / "run"
        run_dir.mkdir()
        path = run_dir / "RUN01.CF"
        path.write_bytes(sample_lc_bytes)
        run_dir.chmod(0o311)
        try:
            record = ThermoCFReader().read(path)
        finally:
            run_dir.chmod(0o755)

        assert record["sample_name"] == "Blank 01"
        assert record["sequence_path"] == ""
