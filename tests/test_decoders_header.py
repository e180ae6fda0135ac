"""Tests for _decoders.header module."""

from __future__ import annotations

import io

import pytest

from thermo_cf._decoders.header import SCAN_STORAGE_MARKER, find_signature, read_version
from thermo_cf.testing import encode_pascal


class TestFindSignature:
    """Tests for find_signature function."""

    def test_finds_marker(self) -> None:
        data = b"\x00" * 123 + SCAN_STORAGE_MARKER + b"\x00" * 10
        assert find_signature(io.BytesIO(data), SCAN_STORAGE_MARKER) == 123

    def test_marker_at_start(self) -> None:
        assert find_signature(io.BytesIO(SCAN_STORAGE_MARKER), SCAN_STORAGE_MARKER) == 0

    def test_absent_returns_none(self) -> None:
        assert find_signature(io.BytesIO(b"\x00" * 500), SCAN_STORAGE_MARKER) is None

    def test_empty_stream_returns_none(self) -> None:
        assert find_signature(io.BytesIO(b""), b"CR") is None

    def test_marker_straddling_window_boundary(self) -> None:
        data = b"\x00" * 45 + SCAN_STORAGE_MARKER
        assert find_signature(io.BytesIO(data), SCAN_STORAGE_MARKER, window=50) == 45

    def test_partial_match_does_not_hide_later_match(self) -> None:
        data = b"CRawData" + b"xx" + SCAN_STORAGE_MARKER
        assert find_signature(io.BytesIO(data), SCAN_STORAGE_MARKER, window=4) == 10

    def test_overlapping_candidates(self) -> None:
        assert find_signature(io.BytesIO(b"aaab"), b"aab", window=2) == 1

    def test_marker_cut_short_at_end(self) -> None:
        data = b"\x00" * 10 + SCAN_STORAGE_MARKER[:-1]
        assert find_signature(io.BytesIO(data), SCAN_STORAGE_MARKER) is None

    def test_start_offset(self) -> None:
        data = b"AB" + b"\x00" * 5 + b"AB"
        assert find_signature(io.BytesIO(data), b"AB", start=1) == 7

    def test_window_of_one(self) -> None:
        data = b"\x00" * 7 + b"XYZ"
        assert find_signature(io.BytesIO(data), b"XYZ", window=1) == 7

    def test_empty_signature_raises(self) -> None:
        with pytest.raises(ValueError, match="signature"):
            find_signature(io.BytesIO(b"abc"), b"")

    def test_invalid_window_raises(self) -> None:
        with pytest.raises(ValueError, match="window"):
            find_signature(io.BytesIO(b"abc"), b"a", window=0)


class TestReadVersion:
    """Tests for read_version function."""

    def test_numeric_tag(self) -> None:
        assert read_version(io.BytesIO(encode_pascal("130") + b"\x00" * 8)) == "130"

    def test_decimal_tag(self) -> None:
        assert read_version(io.BytesIO(encode_pascal("2.5"))) == "2.5"

    def test_non_numeric_tag(self) -> None:
        assert read_version(io.BytesIO(encode_pascal("ABC"))) == ""

    def test_empty_tag(self) -> None:
        assert read_version(io.BytesIO(b"\x00\x00\x00")) == ""

    def test_empty_stream(self) -> None:
        assert read_version(io.BytesIO(b"")) == ""
