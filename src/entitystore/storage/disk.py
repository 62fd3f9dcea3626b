"""Filesystem entity store with hash-based directory sharding.

Bodies are stored one file per entry at ``<root>/<d[:2]>/<d[2:]>``. The
two-character prefix bounds any directory to 256 children however large
the corpus grows.

Writes stream into a temporary file inside the root while hashing, then
atomically promote it with ``os.replace``. Readers therefore see either
no entry or the complete body, and concurrent writers of the same body
converge on identical bytes without locking.
"""

from __future__ import annotations
import contextlib
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Iterable, Iterator, Optional, Tuple, Union

from ..constants import TEMP_PREFIX
from ..hashing import Chunk, digest_chunks, is_valid_digest
from .base import FileBody

logger = logging.getLogger(__name__)

# ---- Platform-specific helpers ---------------------------------------------

def _fsync_dir(path: Path) -> None:
    """Fsync a directory so a rename into it is durable.

    Best effort: Windows and some filesystems don't support directory fsync.
    """
    try:
        flags = os.O_RDONLY
        if hasattr(os, "O_DIRECTORY"):
            flags |= os.O_DIRECTORY

        fd = os.open(str(path), flags)
        try:
            os.fsync(fd)
        finally:
            os.close(fd)
    except OSError:
        logger.debug("Directory fsync not supported for %s", path)

# ---- DiskEntityStore --------------------------------------------------------

class DiskEntityStore:
    """Entity store persisting bodies as files under a root directory.

    Directory Structure:
        <root>/ab/cdef...   (digest "abcdef...")

    Attributes:
        root: Store root directory
    """

    def __init__(self, root: Union[str, Path]):
        """Initialize the store, creating ``root`` and its parents if absent.

        Args:
            root: Store root directory
        """
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, digest: str) -> Path:
        """Get the shard path for a digest.

        Raises:
            ValueError: If digest format is invalid

        Security:
            Validates digest format to prevent path traversal.
        """
        if not is_valid_digest(digest):
            raise ValueError(f"Invalid digest (must be 40 hex chars): {digest!r}")
        return self.root / digest[:2] / digest[2:]

    def _existing_path(self, digest: str) -> Optional[Path]:
        try:
            path = self.path_for(digest)
        except ValueError:
            return None
        return path if path.is_file() else None

    def write(self, chunks: Iterable[Chunk]) -> Tuple[str, int]:
        """Stream a body to disk and publish it under its digest.

        Raises:
            OSError: On medium failures (disk full, permission denied)
        """
        with tempfile.NamedTemporaryFile(
            prefix=TEMP_PREFIX,
            dir=str(self.root),
            delete=False,
        ) as tmp:
            tmppath = Path(tmp.name)
            try:
                digest, size = digest_chunks(chunks, tmp.write)
                tmp.flush()
                os.fsync(tmp.fileno())
            except BaseException:
                tmp.close()
                with contextlib.suppress(OSError):
                    tmppath.unlink()
                raise

        try:
            dst = self.path_for(digest)
            if dst.exists():
                # Same digest means same bytes
                tmppath.unlink()
                logger.debug("Entity already stored: %s", digest)
                return digest, size

            # Entries are immutable and must be readable by a front-end proxy
            os.chmod(tmppath, 0o444)
            dst.parent.mkdir(parents=True, exist_ok=True)
            os.replace(str(tmppath), str(dst))
            _fsync_dir(dst.parent)
            logger.debug("Entity promoted: %s (%d bytes)", dst, size)
        except Exception:
            with contextlib.suppress(OSError):
                tmppath.unlink()
            raise

        return digest, size

    def read(self, digest: str) -> Optional[bytes]:
        path = self._existing_path(digest)
        if path is None:
            return None
        try:
            return path.read_bytes()
        except FileNotFoundError:
            # Purged between the check and the read
            return None

    def open(self, digest: str) -> Optional[FileBody]:
        path = self._existing_path(digest)
        if path is None:
            return None
        return FileBody(path)

    def exist(self, digest: str) -> bool:
        return self._existing_path(digest) is not None

    def purge(self, digest: str) -> None:
        path = self._existing_path(digest)
        if path is None:
            return None
        with contextlib.suppress(FileNotFoundError):
            path.unlink()
            logger.debug("Entity purged: %s", digest)
        return None

    def cleanup_temp_files(self, max_age_hours: float = 1.0) -> int:
        """Remove temporary files left behind by interrupted writes.

        Only files older than ``max_age_hours`` are removed, so writes still
        in flight keep their temporary file.

        Args:
            max_age_hours: Minimum age of a temporary file to remove

        Returns:
            Number of files removed
        """
        cutoff = time.time() - max_age_hours * 3600
        removed = 0

        for tmp in self.root.glob(f"{TEMP_PREFIX}*"):
            try:
                if tmp.is_file() and tmp.stat().st_mtime < cutoff:
                    tmp.unlink()
                    removed += 1
                    logger.debug("Removed stale temp file: %s", tmp)
            except FileNotFoundError:
                # Promoted or removed by its writer meanwhile
                continue

        return removed

    def iter_digests(self) -> Iterator[str]:
        """Yield the digest of every stored entry.

        Temporary files from in-flight writes are skipped.
        """
        for shard in sorted(self.root.iterdir()):
            if not shard.is_dir() or len(shard.name) != 2:
                continue
            for entry in sorted(shard.iterdir()):
                digest = shard.name + entry.name
                if entry.is_file() and is_valid_digest(digest):
                    yield digest


__all__ = ["DiskEntityStore"]
