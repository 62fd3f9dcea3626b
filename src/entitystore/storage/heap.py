"""In-memory entity store."""

from typing import Iterable, List, MutableMapping, Optional, Tuple

from ..hashing import Chunk, digest_chunks, to_bytes


class HeapEntityStore:
    """
    Entity store backed by an in-process mapping of digest to chunk list.

    Passing ``storage`` injects the mapping explicitly; it is used as-is,
    so writes are visible to the caller. Without it each instance gets a
    private empty dict.

    Note: Data is lost when the process exits.
    """

    def __init__(self, storage: Optional[MutableMapping[str, List[bytes]]] = None):
        self.storage: MutableMapping[str, List[bytes]] = (
            {} if storage is None else storage
        )

    def write(self, chunks: Iterable[Chunk]) -> Tuple[str, int]:
        buf: List[bytes] = []
        digest, size = digest_chunks(chunks, buf.append)
        self.storage[digest] = buf
        return digest, size

    def read(self, digest: str) -> Optional[bytes]:
        parts = self._get(digest)
        if parts is None:
            return None
        return b"".join(parts)

    def open(self, digest: str) -> Optional[List[bytes]]:
        return self._get(digest)

    def exist(self, digest: str) -> bool:
        return self.storage.get(digest) is not None

    def purge(self, digest: str) -> None:
        self.storage.pop(digest, None)

    def _get(self, digest: str) -> Optional[List[bytes]]:
        """Fetch an entry as a fresh list of byte chunks.

        Seeded values may be a single bytes/str value or a list of chunks.
        """
        value = self.storage.get(digest)
        if value is None:
            return None
        if isinstance(value, (bytes, bytearray, str)):
            return [to_bytes(value)]
        return [to_bytes(part) for part in value]

    def __len__(self) -> int:
        return len(self.storage)

    def total_bytes(self) -> int:
        """Total size of stored content."""
        return sum(len(self.read(d) or b"") for d in list(self.storage))


__all__ = ["HeapEntityStore"]
