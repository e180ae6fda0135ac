"""Batch import of Thermo .CF files.

Expands files and directories into a list of .CF files, decodes each one
independently and collects records alongside per-file errors.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Sequence
from pathlib import Path
from typing import TypedDict

from thermo_cf._exceptions import ThermoCFError
from thermo_cf.config import DEFAULT_DEPTH
from thermo_cf.logging import get_logger
from thermo_cf.readers.thermo_cf import CF_EXTENSIONS, ThermoCFReader
from thermo_cf.testing import hooks
from thermo_cf.types.common import ContentScope, ErrorResult, make_error
from thermo_cf.types.record import ThermoCFRecord

logger = get_logger(__name__)

# Entries with these suffixes are never descended into
SKIPPED_SUFFIXES: frozenset[str] = frozenset({".m", ".git", ".lnk"})

_CONTENT_ALIASES: dict[str, ContentScope] = {
    "all": "all",
    "default": "all",
    "data": "data",
    "signal": "data",
    "metadata": "header",
    "header": "header",
    "info": "header",
}
_VERBOSE_ON: frozenset[str] = frozenset({"on", "true", "1", "yes", "y"})
_VERBOSE_OFF: frozenset[str] = frozenset({"off", "false", "0", "no", "n"})


class BatchResult(TypedDict):
    """Outcome of a batch import.

    Attributes:
        records: Decoded records in discovery order.
        errors: One entry per file that failed.
        elapsed: Wall time in seconds.
        total_bytes: Sum of file sizes of decoded records.
    """

    records: list[ThermoCFRecord]
    errors: list[ErrorResult]
    elapsed: float
    total_bytes: int


def normalize_content(value: str | None) -> ContentScope:
    """Map a content option to "all", "header" or "data"; unknown -> "all"."""
    if value is None:
        return "all"
    return _CONTENT_ALIASES.get(value.strip().lower(), "all")


def normalize_verbose(value: str | bool | None) -> bool:
    """Map a verbosity option to a bool; unknown -> True."""
    if isinstance(value, bool):
        return value
    if value is None:
        return True
    lowered = value.strip().lower()
    if lowered in _VERBOSE_ON:
        return True
    if lowered in _VERBOSE_OFF:
        return False
    return True


def normalize_depth(value: str | int | float | None) -> int:
    """Map a depth option to a non-negative int.

    Strings are parsed as numbers. Negative, NaN, infinite or unparseable
    values fall back to DEFAULT_DEPTH; everything else is rounded.
    """
    if value is None or isinstance(value, bool):
        return DEFAULT_DEPTH
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return DEFAULT_DEPTH
    else:
        number = float(value)

    if math.isnan(number) or math.isinf(number) or number < 0:
        return DEFAULT_DEPTH
    return int(round(number))


def _matches(path: Path, formats: Sequence[str]) -> bool:
    suffix = path.suffix.lower()
    return any(suffix == fmt.lower() for fmt in formats)


def _list_entries(directory: Path) -> list[Path]:
    try:
        return sorted(directory.iterdir())
    except OSError as e:
        logger.warning("Cannot list directory %s: %s", directory, e)
        return []


def discover_files(
    paths: Sequence[str | Path],
    depth: int = DEFAULT_DEPTH,
    formats: Sequence[str] = CF_EXTENSIONS,
) -> list[Path]:
    """Expand files and directories into readable files with a matching extension.

    Directories are expanded breadth-first: their contents first, then up to
    depth further levels of subdirectories.

    Args:
        paths: Files and directories to search.
        depth: Extra subdirectory levels to descend.
        formats: Accepted extensions, compared case-insensitively.

    Returns:
        Files in discovery order, without duplicates.
    """
    files: list[Path] = []
    level: list[Path] = []

    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            level.append(path)
        elif path.is_file():
            files.append(path)
        else:
            logger.debug("Skipping missing path %s", path)

    remaining = depth
    while level and remaining >= 0:
        next_level: list[Path] = []
        for directory in level:
            if directory.suffix.lower() in SKIPPED_SUFFIXES:
                continue
            for entry in _list_entries(directory):
                if entry.is_dir():
                    next_level.append(entry)
                elif _matches(entry, formats):
                    files.append(entry)
        level = next_level
        remaining -= 1

    selected: list[Path] = []
    seen: set[Path] = set()
    for path in files:
        if not _matches(path, formats) or path in seen:
            continue
        seen.add(path)
        if not hooks.is_readable(path):
            logger.debug("Skipping unreadable file %s", path)
            continue
        selected.append(path)

    return selected


def format_bytes(size: int | float) -> str:
    """Format a byte count as "1.5 MB" style text (decimal units)."""
    if size > 1e9:
        return f"{size / 1e9:.1f} GB"
    if size > 1e6:
        return f"{size / 1e6:.1f} MB"
    if size > 1e3:
        return f"{size / 1e3:.1f} KB"
    return f"{size / 1e3:.3f} KB"


def format_elapsed(seconds: float) -> str:
    """Format seconds as "12.3 sec", or "2.5 min" above one minute."""
    if seconds > 60:
        return f"{seconds / 60:.1f} min"
    return f"{seconds:.1f} sec"


def _status_path(path: Path) -> str:
    return f"../{path.parent.name}/{path.name}"


def import_files(
    paths: Sequence[str | Path],
    *,
    depth: int = DEFAULT_DEPTH,
    content: ContentScope = "all",
    verbose: bool = True,
    reader: ThermoCFReader | None = None,
) -> BatchResult:
    """Decode every .CF file found under paths.

    A failure in one file is recorded in errors and never stops the batch.

    Args:
        paths: Files and directories to import.
        depth: Extra subdirectory levels to descend.
        content: "all", "header" or "data".
        verbose: Log progress at INFO when True, DEBUG otherwise.
        reader: Reader to use; a default ThermoCFReader when None.

    Returns:
        BatchResult TypedDict.
    """
    active = reader if reader is not None else ThermoCFReader()
    level = logging.INFO if verbose else logging.DEBUG

    files = discover_files(paths, depth)
    result = BatchResult(records=[], errors=[], elapsed=0.0, total_bytes=0)
    if not files:
        logger.log(level, "No files found")
        return result

    logger.log(level, "Importing %d files", len(files))
    total = len(files)
    width = len(str(total))
    started = time.perf_counter()

    for index, path in enumerate(files, start=1):
        try:
            size = path.stat().st_size
        except OSError as e:
            size = 0
            logger.debug("Cannot stat %s: %s", path, e)

        logger.log(
            level,
            "[%s/%d] %s (%s)",
            str(index).zfill(width),
            total,
            _status_path(path),
            format_bytes(size),
            extra={"file_name": path.name, "file_size": size},
        )

        try:
            record = active.read(path, content)
        except (ThermoCFError, ValueError) as e:
            logger.warning("Failed to import %s: %s", path, e, extra={"file_name": path.name})
            result["errors"].append(make_error(type(e).__name__, str(e), str(path)))
            continue

        result["records"].append(record)
        result["total_bytes"] += record["file_size"]

    result["elapsed"] = time.perf_counter() - started
    logger.log(
        level,
        "Files: %d, Elapsed: %s, Bytes: %s",
        len(result["records"]),
        format_elapsed(result["elapsed"]),
        format_bytes(result["total_bytes"]),
        extra={"elapsed_s": result["elapsed"]},
    )
    return result


__all__ = [
    "SKIPPED_SUFFIXES",
    "BatchResult",
    "discover_files",
    "format_bytes",
    "format_elapsed",
    "import_files",
    "normalize_content",
    "normalize_depth",
    "normalize_verbose",
]
