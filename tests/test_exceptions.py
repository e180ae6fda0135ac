"""Tests for _exceptions module."""

from __future__ import annotations

from thermo_cf._exceptions import (
    DecodingError,
    ThermoCFError,
    ThermoCFReadError,
    TruncatedStreamError,
    UnsupportedFormatError,
)


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_unsupported_format(self) -> None:
        error = UnsupportedFormatError("/runs/a.raw", "Not a Thermo .CF file")
        assert isinstance(error, ThermoCFError)
        assert error.path == "/runs/a.raw"
        assert error.message == "Not a Thermo .CF file"
        assert str(error) == "Not a Thermo .CF file: /runs/a.raw"

    def test_read_error(self) -> None:
        error = ThermoCFReadError("/runs/a.CF", "File does not exist")
        assert isinstance(error, ThermoCFError)
        assert str(error) == "File does not exist: /runs/a.CF"

    def test_decoding_error(self) -> None:
        error = DecodingError("scan table", "bad stride")
        assert error.context == "scan table"
        assert str(error) == "scan table: bad stride"

    def test_truncated_is_decoding_error(self) -> None:
        error = TruncatedStreamError("int32", "expected 4 bytes at offset 10, got 2")
        assert isinstance(error, DecodingError)
        assert isinstance(error, ThermoCFError)
        assert error.context == "int32"
