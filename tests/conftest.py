"""Shared test fixtures and configuration."""

from __future__ import annotations

import io
import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from thermo_cf.testing import build_cf_bytes, reset_hooks

# Scan rows (time in seconds, channel A, channel B) spaced 6 s apart
_SAMPLE_SCANS: list[tuple[float, float, float]] = [
    (0.0, 1.5, -2.0),
    (6.0, 2.5, -1.0),
    (12.0, 3.5, 0.0),
    (18.0, 4.5, 1.0),
]


@pytest.fixture(autouse=True)
def _reset_hooks() -> Generator[None, None, None]:
    """Restore production hooks around every test."""
    reset_hooks()
    yield
    reset_hooks()


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Generator[None, None, None]:
    """Undo handler and level changes made by setup_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def sample_lc_bytes() -> bytes:
    """Version 31 LC/DAD file with a four-scan table."""
    return build_cf_bytes(
        "31",
        text={
            "file_info": "Agilent 1315 DAD",
            "sample_name": "Blank 01",
            "sample_info": "Solvent blank",
            "operator": "jdoe",
            "datetime": "15 Jan 20 10:30 AM",
            "instmodel": "g1315b",
            "inlet": "hplc",
            "method_name": "GRADIENT.M",
            "intensity_units": "mAU",
            "channel_units": "nm",
        },
        numeric={"seqindex": 3, "vial": 12, "replicate": 1},
        scans=_SAMPLE_SCANS,
    )


@pytest.fixture
def sample_lc_stream(sample_lc_bytes: bytes) -> io.BytesIO:
    return io.BytesIO(sample_lc_bytes)


@pytest.fixture
def sample_lc_file(tmp_path: Path, sample_lc_bytes: bytes) -> Path:
    path = tmp_path / "RUN01.CF"
    path.write_bytes(sample_lc_bytes)
    return path


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests reading files from disk",
    )
