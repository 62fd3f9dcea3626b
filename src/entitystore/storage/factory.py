"""Factory for creating entity store instances from URIs."""

import urllib.parse
from pathlib import Path
from typing import Any, Optional, TYPE_CHECKING

from ..errors import ConfigError, InvalidDescriptorError
from .accel import AccelRedirectEntityStore
from .base import EntityStore
from .cache import HostKVEntityStore, RemoteCacheEntityStore
from .disk import DiskEntityStore
from .heap import HeapEntityStore
from .null import NullEntityStore

if TYPE_CHECKING:
    from ..config import StoreConfig


def _disk_root(uri: str) -> Path:
    """Extract the directory of a ``file:``/``disk:`` URI."""
    parsed = urllib.parse.urlsplit(uri)
    path = urllib.parse.unquote(parsed.netloc + parsed.path)
    if not path:
        raise InvalidDescriptorError(uri, "missing directory path")
    return Path(path).expanduser()


def make_entity_store(
    uri: str,
    ttl: Optional[int] = None,
    purge_policy: str = "raise",
    namespace: str = "",
    host_service: Any = None,
) -> EntityStore:
    """
    Create an entity store from a URI.

    Supported schemes:
        heap:                          in-process dict
        file:<dir>, disk:<dir>         sharded directory tree
        accelredirect:<dir>[#<root>]   directory served via X-Accel-Redirect
        memcached://host[:port][/ns]   memcached
        redis://host[:port][/db]       redis
        hostkv:                        injected ``host_service``
        null:                          digest only, nothing stored

    Args:
        uri: Store URI
        ttl: Expiry for key-value backends
        purge_policy: Purge behavior for clients without delete
        namespace: Key prefix for network caches
        host_service: Platform key-value service for ``hostkv:``

    Returns:
        EntityStore instance

    Raises:
        ConfigError: If the scheme is unknown or required options are missing
    """
    scheme = urllib.parse.urlsplit(uri).scheme.lower()

    if scheme == "heap":
        return HeapEntityStore()

    elif scheme in ("file", "disk"):
        return DiskEntityStore(_disk_root(uri))

    elif scheme == "accelredirect":
        return AccelRedirectEntityStore.resolve(uri)

    elif scheme in ("memcached", "memcache", "redis", "rediss"):
        return RemoteCacheEntityStore.from_url(
            uri, namespace=namespace, ttl=ttl, purge_policy=purge_policy
        )

    elif scheme == "hostkv":
        if host_service is None:
            raise ConfigError("hostkv: entity storage requires a host_service")
        return HostKVEntityStore(host_service, ttl=ttl, purge_policy=purge_policy)

    elif scheme == "null":
        return NullEntityStore()

    else:
        raise ConfigError(f"Entity store scheme '{scheme}' not supported: {uri}")


def make_entity_store_from_config(config: "StoreConfig", host_service: Any = None) -> EntityStore:
    """Create an entity store from a loaded ``StoreConfig``."""
    return make_entity_store(
        config.uri,
        ttl=config.ttl,
        purge_policy=config.purge_policy,
        namespace=config.namespace,
        host_service=host_service,
    )
