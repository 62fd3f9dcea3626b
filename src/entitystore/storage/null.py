"""Entity store that digests bodies but keeps nothing."""

from typing import Iterable, Optional, Tuple

from ..hashing import Chunk, compute_digest


class NullEntityStore:
    """
    Store that never retains content.

    ``write`` still returns the digest and size so callers (and the
    response codec) behave normally; every lookup reports absence.
    """

    def write(self, chunks: Iterable[Chunk]) -> Tuple[str, int]:
        return compute_digest(chunks)

    def read(self, digest: str) -> Optional[bytes]:
        return None

    def open(self, digest: str) -> Optional[Iterable[bytes]]:
        return None

    def exist(self, digest: str) -> bool:
        return False

    def purge(self, digest: str) -> None:
        return None


__all__ = ["NullEntityStore"]
