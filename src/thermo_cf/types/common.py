"""Common type definitions for thermo_cf library.

Provides shared literals and the per-file error result used by batch imports.
"""

from __future__ import annotations

from typing import Literal, TypedDict

# Which parts of a .CF file to decode
ContentScope = Literal["all", "header", "data"]


class ErrorResult(TypedDict):
    """Result entry for a file that failed to decode.

    Attributes:
        status: Always "error".
        error_type: Exception class name.
        message: Human-readable error description.
        path: File path that caused the error.
    """

    status: Literal["error"]
    error_type: str
    message: str
    path: str


def make_error(error_type: str, message: str, path: str) -> ErrorResult:
    """Create an error result.

    Args:
        error_type: The exception class name.
        message: Human-readable description.
        path: File path that caused the error.

    Returns:
        ErrorResult TypedDict.
    """
    return ErrorResult(
        status="error",
        error_type=error_type,
        message=message,
        path=path,
    )


__all__ = [
    "ContentScope",
    "ErrorResult",
    "make_error",
]
