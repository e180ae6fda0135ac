"""Exception hierarchy for the thermo_cf library.

Format problems inside a file degrade to empty fields; only I/O failures and
truncated data propagate. Callers handle those per file.
"""

from __future__ import annotations


class ThermoCFError(Exception):
    """Base exception for thermo_cf library.

    All library exceptions inherit from this base class.
    """


class UnsupportedFormatError(ThermoCFError):
    """Raised when a path is not a Thermo .CF file.

    Attributes:
        path: The path that could not be read.
        message: Description of why the format is unsupported.
    """

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class ThermoCFReadError(ThermoCFError):
    """Raised when a .CF file cannot be opened or read.

    Attributes:
        path: The .CF file path.
        message: Description of the failure.
    """

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class DecodingError(ThermoCFError):
    """Raised when data decoding or validation fails.

    This indicates malformed or unexpected data in an otherwise readable file.

    Attributes:
        context: Description of what was being decoded.
        message: Description of the decoding failure.
    """

    def __init__(self, context: str, message: str) -> None:
        self.context = context
        self.message = message
        super().__init__(f"{context}: {message}")


class TruncatedStreamError(DecodingError):
    """Raised when the stream ends before a required value.

    Attributes:
        context: Description of what was being decoded.
        message: Description including expected and available byte counts.
    """


__all__ = [
    "DecodingError",
    "ThermoCFError",
    "ThermoCFReadError",
    "TruncatedStreamError",
    "UnsupportedFormatError",
]
