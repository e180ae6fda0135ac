"""Type definitions for thermo_cf."""

from __future__ import annotations

from thermo_cf.types.common import ContentScope, ErrorResult, make_error
from thermo_cf.types.record import ThermoCFRecord, make_record

__all__ = [
    "ContentScope",
    "ErrorResult",
    "ThermoCFRecord",
    "make_error",
    "make_record",
]
