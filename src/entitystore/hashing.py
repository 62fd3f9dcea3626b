"""Digest computation for stored entities.

The digest is the sole identity of a stored body: a SHA-1 hex string
computed over the concatenated bytes of the body's chunks. Chunk
boundaries never influence the result, so ``[b"ab", b"c"]`` and
``[b"a", b"bc"]`` map to the same entry.
"""

import hashlib
import re
from typing import Callable, Iterable, Optional, Tuple, Union

Chunk = Union[bytes, bytearray, memoryview, str]

_HEX40 = re.compile(r"^[0-9a-f]{40}$")


def to_bytes(chunk: Chunk) -> bytes:
    """Coerce a body chunk to bytes (text is encoded as UTF-8)."""
    if isinstance(chunk, str):
        return chunk.encode("utf-8")
    return bytes(chunk)


def digest_chunks(
    chunks: Iterable[Chunk],
    sink: Optional[Callable[[bytes], object]] = None,
) -> Tuple[str, int]:
    """Hash chunks in a single pass, optionally forwarding them to a sink.

    Args:
        chunks: Body chunks, consumed exactly once
        sink: Called with every chunk as bytes, e.g. a file's ``write``

    Returns:
        Tuple of (40-character hex digest, total byte count)
    """
    sha1 = hashlib.sha1()
    size = 0
    for chunk in chunks:
        data = to_bytes(chunk)
        sha1.update(data)
        size += len(data)
        if sink is not None:
            sink(data)
    return sha1.hexdigest(), size


def compute_digest(chunks: Iterable[Chunk]) -> Tuple[str, int]:
    """Compute the digest and size of a body.

    Example:
        >>> compute_digest([b"she rode to the sea;"])[0]
        '90a4c84d51a277f3dafc34693ca264531b9f51b6'
    """
    return digest_chunks(chunks)


def is_valid_digest(value: object) -> bool:
    """Check that a value looks like a digest produced by this module.

    Path-deriving backends call this before touching the filesystem so
    that malformed keys are reported as absent and cannot escape the
    store root.
    """
    return isinstance(value, str) and _HEX40.fullmatch(value) is not None


__all__ = [
    "Chunk",
    "compute_digest",
    "digest_chunks",
    "is_valid_digest",
    "to_bytes",
]
