"""Thermo .CF file reader implementation.

Decodes header metadata and the scan table of Thermo chromatography .CF
files into a ThermoCFRecord. Format problems inside a file leave fields
empty; I/O failures raise.
"""

from __future__ import annotations

from pathlib import Path

from thermo_cf._decoders.metadata import decode_metadata
from thermo_cf._decoders.signal import decode_signal
from thermo_cf._exceptions import ThermoCFReadError, UnsupportedFormatError
from thermo_cf._protocols.stream import BinaryStreamProtocol
from thermo_cf.config import DEFAULT_SEARCH_WINDOW
from thermo_cf.logging import get_logger
from thermo_cf.testing import hooks
from thermo_cf.types.common import ContentScope
from thermo_cf.types.record import ThermoCFRecord, make_record

logger = get_logger(__name__)

CF_EXTENSIONS: tuple[str, ...] = (".CF",)

_CHUNK_SIZE = 1024 * 1024


def _is_cf_file(path: Path) -> bool:
    """Check if path is a Thermo .CF file."""
    suffix = path.suffix.lower()
    return path.is_file() and any(suffix == ext.lower() for ext in CF_EXTENSIONS)


def compute_checksum(path: Path) -> str:
    """Compute the MD5 checksum of a file.

    Args:
        path: File to hash.

    Returns:
        Uppercase hex digest, or "" when MD5 is unavailable on this platform.

    Raises:
        ThermoCFReadError: If the file cannot be read.
    """
    try:
        digest = hooks.new_digest()
    except ValueError as e:
        logger.warning("MD5 unavailable, checksum left empty: %s", e)
        return ""

    try:
        with path.open("rb") as f:
            for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as e:
        raise ThermoCFReadError(str(path), f"Failed to read file: {e}") from e

    return digest.hexdigest().upper()


class ThermoCFReader:
    """Reader for Thermo .CF files.

    Holds no per-file state; each call borrows its own stream.
    """

    def __init__(self, *, window: int = DEFAULT_SEARCH_WINDOW) -> None:
        """Initialize ThermoCFReader.

        Args:
            window: Read window in bytes for marker searches.
        """
        if window < 1:
            raise ValueError(f"window must be positive, got {window}")
        self._window = window

    def supports_format(self, path: Path) -> bool:
        """Check if path is a Thermo .CF file.

        Args:
            path: Path to check.

        Returns:
            True if path is an existing .CF file.
        """
        return _is_cf_file(path)

    def decode(
        self,
        stream: BinaryStreamProtocol,
        file_size: int,
        *,
        path: Path | None = None,
        content: ContentScope = "all",
    ) -> ThermoCFRecord:
        """Decode an open .CF stream.

        Args:
            stream: Readable, seekable stream; only borrowed for this call.
            file_size: Total stream size in bytes. Zero yields an empty record.
            path: Source path, used for file identity and the sequence lookup.
            content: "all", "header" (metadata only) or "data" (signal only).

        Returns:
            ThermoCFRecord TypedDict.

        Raises:
            TruncatedStreamError: If required bytes are missing.
        """
        file_path = str(path.parent) if path is not None else ""
        file_name = path.name if path is not None else ""
        record = make_record(file_path, file_name, file_size)

        if file_size == 0:
            return record

        if content in ("all", "header"):
            decode_metadata(stream, record)

        if content in ("all", "data"):
            decode_signal(stream, record, window=self._window)

        return record

    def read(self, path: Path, content: ContentScope = "all") -> ThermoCFRecord:
        """Read a .CF file from disk and attach its checksum.

        Args:
            path: Path to .CF file.
            content: "all", "header" or "data".

        Returns:
            ThermoCFRecord TypedDict.

        Raises:
            ThermoCFReadError: If the file is missing or unreadable.
            UnsupportedFormatError: If path is not a .CF file.
            TruncatedStreamError: If the file is cut short.
        """
        source_path = str(path)

        if not path.exists():
            raise ThermoCFReadError(source_path, "File does not exist")

        if not _is_cf_file(path):
            raise UnsupportedFormatError(source_path, "Not a Thermo .CF file")

        resolved = path.resolve()
        try:
            file_size = resolved.stat().st_size
            with resolved.open("rb") as stream:
                record = self.decode(stream, file_size, path=resolved, content=content)
        except OSError as e:
            raise ThermoCFReadError(source_path, f"Failed to read file: {e}") from e

        if file_size > 0:
            record["file_checksum"] = compute_checksum(resolved)

        return record

    def read_header(self, path: Path) -> ThermoCFRecord:
        """Read only the header metadata of a .CF file.

        Args:
            path: Path to .CF file.

        Returns:
            ThermoCFRecord with empty signal fields.
        """
        return self.read(path, "header")

    def read_data(self, path: Path) -> ThermoCFRecord:
        """Read only the scan table of a .CF file.

        Args:
            path: Path to .CF file.

        Returns:
            ThermoCFRecord with empty header fields.
        """
        return self.read(path, "data")


__all__ = [
    "CF_EXTENSIONS",
    "ThermoCFReader",
    "compute_checksum",
]
