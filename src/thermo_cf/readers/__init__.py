"""Reader classes for Thermo .CF files."""

from __future__ import annotations

from thermo_cf.readers.thermo_cf import CF_EXTENSIONS, ThermoCFReader, compute_checksum

__all__ = [
    "CF_EXTENSIONS",
    "ThermoCFReader",
    "compute_checksum",
]
