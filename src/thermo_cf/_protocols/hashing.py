"""Protocol for hashlib digest objects."""

from __future__ import annotations

from typing import Protocol


class DigestProtocol(Protocol):
    """Subset of the hashlib hash interface used for file checksums."""

    def update(self, data: bytes, /) -> None:
        """Feed bytes into the digest."""
        ...

    def hexdigest(self) -> str:
        """Return the digest as a hex string."""
        ...


__all__ = [
    "DigestProtocol",
]
