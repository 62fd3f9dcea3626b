"""Base protocols for entity store implementations."""

from pathlib import Path
from typing import Iterable, Iterator, Optional, Protocol, Tuple, runtime_checkable

from ..constants import READ_CHUNK_SIZE
from ..hashing import Chunk


class EntityStore(Protocol):
    """
    Protocol for entity store implementations.

    Entries are addressed by the digest of their content. Lookups of an
    unknown or malformed digest report absence (``None``/``False``) rather
    than raising; failures of the underlying medium propagate.
    """

    def write(self, chunks: Iterable[Chunk]) -> Tuple[str, int]:
        """
        Store a body, consuming the chunks once.

        Args:
            chunks: Body chunks

        Returns:
            Tuple of (digest, size in bytes)
        """
        ...

    def read(self, digest: str) -> Optional[bytes]:
        """
        Return the full content of an entry.

        Args:
            digest: Entry digest

        Returns:
            Content bytes, or None if absent
        """
        ...

    def open(self, digest: str) -> Optional[Iterable[bytes]]:
        """
        Return a lazily consumable body for an entry.

        Args:
            digest: Entry digest

        Returns:
            Iterable of byte chunks, or None if absent
        """
        ...

    def exist(self, digest: str) -> bool:
        """
        Check if an entry exists without materializing it.

        Args:
            digest: Entry digest

        Returns:
            True if the entry exists
        """
        ...

    def purge(self, digest: str) -> None:
        """
        Remove an entry. Purging an absent entry is not an error.

        Args:
            digest: Entry digest
        """
        ...


@runtime_checkable
class Redirecting(Protocol):
    """Store whose bodies are served by a front-end proxy."""

    def redirect_path(self, digest: str) -> str:
        """Proxy-visible path for an entry."""
        ...


class FileBody:
    """Restartable body backed by a file on disk.

    Every iteration reopens the file, so the same body can be sent more
    than once. ``path`` lets a server hand the file off directly instead
    of streaming it through the application.
    """

    def __init__(self, path: Path, chunk_size: int = READ_CHUNK_SIZE):
        self.path = Path(path)
        self.chunk_size = chunk_size

    def __iter__(self) -> Iterator[bytes]:
        with self.path.open("rb") as f:
            for chunk in iter(lambda: f.read(self.chunk_size), b""):
                yield chunk

    def to_path(self) -> str:
        return str(self.path)

    def close(self) -> None:
        # Files are opened per iteration; nothing is held between them.
        pass

    def __repr__(self) -> str:
        return f"FileBody({str(self.path)!r})"
