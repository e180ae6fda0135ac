from __future__ import annotations

import os
from typing import TypedDict

from thermo_cf.logging import LogFormat, LogLevel

_VALID_LOG_LEVELS: frozenset[LogLevel] = frozenset(
    {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
)
_VALID_LOG_FORMATS: frozenset[LogFormat] = frozenset({"json", "text"})

DEFAULT_SEARCH_WINDOW = 50
DEFAULT_DEPTH = 1


class ThermoCFSettings(TypedDict):
    log_level: LogLevel
    log_format: LogFormat
    search_window: int
    default_depth: int


def _optional_env_str(key: str) -> str | None:
    value = os.getenv(key)
    if value is None:
        return None
    trimmed = value.strip()
    if trimmed == "":
        return None
    return trimmed


def _parse_int(key: str, default: int) -> int:
    val = _optional_env_str(key)
    if val is None:
        return default
    return int(val)


def _parse_log_level(key: str, default: LogLevel) -> LogLevel:
    val = _optional_env_str(key)
    if val is None:
        return default
    upper = val.upper()
    for level in _VALID_LOG_LEVELS:
        if level == upper:
            return level
    raise ValueError(f"Invalid log level for {key}: {val!r}")


def _parse_log_format(key: str, default: LogFormat) -> LogFormat:
    val = _optional_env_str(key)
    if val is None:
        return default
    lower = val.lower()
    for fmt in _VALID_LOG_FORMATS:
        if fmt == lower:
            return fmt
    raise ValueError(f"Invalid log format for {key}: {val!r}")


def load_settings() -> ThermoCFSettings:
    """Load settings from THERMO_CF_* environment variables.

    Raises:
        ValueError: If a variable is set to an invalid value.
    """
    search_window = _parse_int("THERMO_CF_SEARCH_WINDOW", DEFAULT_SEARCH_WINDOW)
    if search_window < 1:
        raise ValueError(f"THERMO_CF_SEARCH_WINDOW must be positive, got {search_window}")

    default_depth = _parse_int("THERMO_CF_DEPTH", DEFAULT_DEPTH)
    if default_depth < 0:
        raise ValueError(f"THERMO_CF_DEPTH must be >= 0, got {default_depth}")

    return {
        "log_level": _parse_log_level("THERMO_CF_LOG_LEVEL", "INFO"),
        "log_format": _parse_log_format("THERMO_CF_LOG_FORMAT", "text"),
        "search_window": search_window,
        "default_depth": default_depth,
    }


__all__ = [
    "DEFAULT_DEPTH",
    "DEFAULT_SEARCH_WINDOW",
    "ThermoCFSettings",
    "load_settings",
]
