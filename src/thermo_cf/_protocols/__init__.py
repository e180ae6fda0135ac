"""Protocol definitions for collaborators of the decoder.

Streams and digests are typed structurally so tests can pass in-memory
buffers and fakes without subclassing.
"""

from __future__ import annotations

from thermo_cf._protocols.hashing import DigestProtocol
from thermo_cf._protocols.stream import BinaryStreamProtocol

__all__ = [
    "BinaryStreamProtocol",
    "DigestProtocol",
]
