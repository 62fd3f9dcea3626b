"""Key-value cache entity stores.

One protocol-agnostic backend, ``KeyValueEntityStore``, works over any
client exposing ``contains``/``get``/``put`` (and optionally ``delete``).
Two network adapters provide that shape:

- ``MemcacheClient`` over pymemcache (memcached protocol)
- ``RedisClient`` over redis-py (plain GET/SET)

A platform-provided key-value service that already has the
``contains``/``get``/``put`` shape is injected directly into
``HostKVEntityStore``.

Callers own the client configuration, including I/O timeouts.
"""

import logging
import urllib.parse
from typing import Any, Iterable, List, Literal, Optional, Protocol, Tuple

from ..constants import DEFAULT_MEMCACHED_PORT, MEMCACHED_MAX_KEY_LENGTH
from ..errors import InvalidDescriptorError, UnsupportedOperationError
from ..hashing import Chunk, digest_chunks

PurgePolicy = Literal["raise", "ignore"]

logger = logging.getLogger(__name__)


class CacheClient(Protocol):
    """Minimal client shape required by ``KeyValueEntityStore``.

    ``delete(key)`` is optional; clients without it cannot purge.
    """

    def contains(self, key: str) -> bool:
        ...

    def get(self, key: str) -> Optional[bytes]:
        ...

    def put(self, key: str, value: bytes, ttl: Optional[int] = None) -> Any:
        ...


# ---- Client adapters --------------------------------------------------------

class MemcacheClient:
    """
    Adapter over a pymemcache client.

    Args:
        client: ``pymemcache.client.base.Client`` (or compatible)
        namespace: Optional key prefix
    """

    def __init__(self, client: Any, namespace: str = ""):
        self.client = client
        self.namespace = namespace

    @classmethod
    def from_url(cls, url: str, namespace: str = "") -> "MemcacheClient":
        """
        Connect from ``memcached://host[:port][/namespace]``.

        Raises:
            ImportError: If pymemcache is not installed
            InvalidDescriptorError: If the URL has no host
        """
        try:
            from pymemcache.client.base import Client
        except ImportError:
            raise ImportError(
                "pymemcache required for memcached entity storage. "
                "Install with: pip install 'entitystore[memcached]'"
            )

        parsed = urllib.parse.urlsplit(url)
        if not parsed.hostname:
            raise InvalidDescriptorError(url, "missing memcached host")
        port = parsed.port or DEFAULT_MEMCACHED_PORT
        namespace = namespace or parsed.path.strip("/")
        return cls(Client((parsed.hostname, port)), namespace=namespace)

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}" if self.namespace else key

    def _storable(self, key: str) -> bool:
        """Check a key against memcached's rules (printable ASCII, no spaces, 250 bytes).

        pymemcache raises on keys that break them; such keys can never
        have been stored, so lookups treat them as misses.
        """
        full = self._key(key)
        return (
            isinstance(key, str)
            and len(full) <= MEMCACHED_MAX_KEY_LENGTH
            and all(32 < ord(c) < 127 for c in full)
        )

    def contains(self, key: str) -> bool:
        if not self._storable(key):
            return False
        # Appending nothing succeeds only when the key is present, and
        # avoids transferring the value.
        return bool(self.client.append(self._key(key), b"", noreply=False))

    def get(self, key: str) -> Optional[bytes]:
        if not self._storable(key):
            return None
        return self.client.get(self._key(key))

    def put(self, key: str, value: bytes, ttl: Optional[int] = None) -> Any:
        return self.client.set(self._key(key), value, expire=ttl or 0, noreply=False)

    def delete(self, key: str) -> None:
        if not self._storable(key):
            return None
        self.client.delete(self._key(key), noreply=False)


class RedisClient:
    """
    Adapter over a redis-py client.

    The client must not decode responses; values are raw bytes.

    Args:
        client: ``redis.Redis`` (or compatible)
        namespace: Optional key prefix
    """

    def __init__(self, client: Any, namespace: str = ""):
        self.client = client
        self.namespace = namespace

    @classmethod
    def from_url(cls, url: str, namespace: str = "") -> "RedisClient":
        """
        Connect from ``redis://host[:port][/db]``.

        Raises:
            ImportError: If redis is not installed
            InvalidDescriptorError: If the URL has no host
        """
        try:
            import redis
        except ImportError:
            raise ImportError(
                "redis required for redis entity storage. "
                "Install with: pip install 'entitystore[redis]'"
            )

        parsed = urllib.parse.urlsplit(url)
        if not parsed.hostname:
            raise InvalidDescriptorError(url, "missing redis host")
        # redis-py applies the default port and reads the db from the path
        return cls(redis.Redis.from_url(url, decode_responses=False), namespace=namespace)

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}" if self.namespace else key

    def contains(self, key: str) -> bool:
        return self.client.exists(self._key(key)) > 0

    def get(self, key: str) -> Optional[bytes]:
        return self.client.get(self._key(key))

    def put(self, key: str, value: bytes, ttl: Optional[int] = None) -> Any:
        return self.client.set(self._key(key), value, ex=ttl or None)

    def delete(self, key: str) -> None:
        self.client.delete(self._key(key))


# ---- Entity stores ----------------------------------------------------------

class KeyValueEntityStore:
    """
    Entity store over a key-value cache client.

    The digest is the cache key and the joined body is the value. Writing
    the same body twice overwrites the key with identical bytes.

    Args:
        client: Object with ``contains``/``get``/``put`` (``delete`` optional)
        ttl: Expiry in seconds passed to ``put``; None or 0 means no expiry
        purge_policy: What ``purge`` does when the client has no ``delete``:
            "raise" signals ``UnsupportedOperationError``, "ignore" logs a
            warning and returns
    """

    def __init__(
        self,
        client: CacheClient,
        ttl: Optional[int] = None,
        purge_policy: PurgePolicy = "raise",
    ):
        if purge_policy not in ("raise", "ignore"):
            raise ValueError(f"Invalid purge policy: {purge_policy!r}")
        self.client = client
        self.ttl = ttl
        self.purge_policy = purge_policy

    def write(self, chunks: Iterable[Chunk]) -> Tuple[str, int]:
        buf: List[bytes] = []
        digest, size = digest_chunks(chunks, buf.append)
        self.client.put(digest, b"".join(buf), self.ttl)
        return digest, size

    def read(self, digest: str) -> Optional[bytes]:
        value = self.client.get(digest)
        if value is None:
            logger.debug("Entity miss: %s", digest)
            return None
        return bytes(value)

    def open(self, digest: str) -> Optional[List[bytes]]:
        value = self.read(digest)
        if value is None:
            return None
        return [value]

    def exist(self, digest: str) -> bool:
        return bool(self.client.contains(digest))

    def purge(self, digest: str) -> None:
        delete = getattr(self.client, "delete", None)
        if delete is None:
            if self.purge_policy == "ignore":
                logger.warning(
                    "%s cannot delete; entity %s left in place",
                    type(self.client).__name__, digest,
                )
                return None
            raise UnsupportedOperationError("purge", type(self.client).__name__)
        delete(digest)
        logger.debug("Entity purged: %s", digest)
        return None


class RemoteCacheEntityStore(KeyValueEntityStore):
    """Entity store over a network cache (memcached or redis adapter)."""

    @classmethod
    def from_url(cls, url: str, namespace: str = "", **kwargs: Any) -> "RemoteCacheEntityStore":
        """Connect using a ``memcached://`` or ``redis://`` URL."""
        scheme = urllib.parse.urlsplit(url).scheme
        if scheme in ("memcached", "memcache"):
            return cls(MemcacheClient.from_url(url, namespace), **kwargs)
        if scheme in ("redis", "rediss"):
            return cls(RedisClient.from_url(url, namespace), **kwargs)
        raise InvalidDescriptorError(url, "expected memcached:// or redis:// URL")


class HostKVEntityStore(KeyValueEntityStore):
    """
    Entity store over a platform-provided key-value service.

    The service is injected and only needs ``contains``/``get``/``put``;
    nothing here binds to a specific host runtime.
    """

    def __init__(self, service: CacheClient, ttl: Optional[int] = None,
                 purge_policy: PurgePolicy = "raise"):
        super().__init__(service, ttl=ttl, purge_policy=purge_policy)

    @property
    def service(self) -> CacheClient:
        return self.client


__all__ = [
    "CacheClient",
    "HostKVEntityStore",
    "KeyValueEntityStore",
    "MemcacheClient",
    "PurgePolicy",
    "RedisClient",
    "RemoteCacheEntityStore",
]
