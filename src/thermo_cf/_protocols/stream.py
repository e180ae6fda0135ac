"""Protocol for the seekable byte stream consumed by the decoders.

Both open binary files and io.BytesIO satisfy this protocol.
"""

from __future__ import annotations

from typing import Protocol


class BinaryStreamProtocol(Protocol):
    """Readable, seekable binary stream.

    The decoders only borrow the stream: every read starts with an absolute
    seek, so the caller's position is never relied upon.
    """

    def seek(self, offset: int, whence: int = 0, /) -> int:
        """Move to offset relative to whence (0=start, 1=current, 2=end)."""
        ...

    def read(self, size: int = -1, /) -> bytes:
        """Read up to size bytes; fewer at end of stream."""
        ...

    def tell(self) -> int:
        """Return the current absolute position."""
        ...


__all__ = [
    "BinaryStreamProtocol",
]
