"""Storage package: entity store backends."""

from .accel import AccelRedirectConfig, AccelRedirectEntityStore
from .base import EntityStore, FileBody, Redirecting
from .cache import (
    CacheClient,
    HostKVEntityStore,
    KeyValueEntityStore,
    MemcacheClient,
    RedisClient,
    RemoteCacheEntityStore,
)
from .disk import DiskEntityStore
from .factory import make_entity_store, make_entity_store_from_config
from .heap import HeapEntityStore
from .null import NullEntityStore

__all__ = [
    "AccelRedirectConfig",
    "AccelRedirectEntityStore",
    "CacheClient",
    "DiskEntityStore",
    "EntityStore",
    "FileBody",
    "HeapEntityStore",
    "HostKVEntityStore",
    "KeyValueEntityStore",
    "MemcacheClient",
    "NullEntityStore",
    "Redirecting",
    "RedisClient",
    "RemoteCacheEntityStore",
    "make_entity_store",
    "make_entity_store_from_config",
]
