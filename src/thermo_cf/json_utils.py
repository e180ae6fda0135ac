from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol

JSONValue = dict[str, "JSONValue"] | list["JSONValue"] | str | int | float | bool | None

# Input type for dump_json_str - broad enough to accept TypedDict records
# (via Mapping), dict literals with mixed value types, primitives and sequences.
_JSONInputValue = str | int | float | bool | None | Mapping[str, object] | Sequence[object]


class InvalidJsonError(ValueError):
    """Raised when JSON parsing fails."""


class _JsonLoads(Protocol):
    def __call__(self, s: str) -> JSONValue: ...


class _JsonDumps(Protocol):
    def __call__(
        self,
        obj: _JSONInputValue,
        *,
        separators: tuple[str, str] | None = ...,
        indent: int | None = ...,
    ) -> str: ...


def dump_json_str(
    value: _JSONInputValue, *, compact: bool = True, indent: int | None = None
) -> str:
    """Serialize a JSON-compatible value to a JSON string.

    Args:
        value: JSON-serializable value
        compact: If True (default), produce compact JSON without extra whitespace.
                 Ignored if indent is specified.
        indent: If specified, pretty-print with this many spaces of indentation.
    """
    module = __import__("json")
    dumps: _JsonDumps = module.dumps
    if indent is not None:
        return dumps(value, separators=None, indent=indent)
    if compact:
        return dumps(value, separators=(",", ":"), indent=None)
    return dumps(value, separators=None, indent=None)


def load_json_str(raw: str) -> JSONValue:
    """Parse a JSON string.

    Raises:
        InvalidJsonError: If raw is not valid JSON.
    """
    module = __import__("json")
    loads: _JsonLoads = module.loads
    try:
        return loads(raw)
    except ValueError as exc:
        raise InvalidJsonError(str(exc)) from exc


__all__ = [
    "InvalidJsonError",
    "JSONValue",
    "dump_json_str",
    "load_json_str",
]
