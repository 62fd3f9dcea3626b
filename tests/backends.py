"""Build each entity store backend for parametrized tests."""

from entitystore.storage import (
    AccelRedirectEntityStore,
    DiskEntityStore,
    HeapEntityStore,
    HostKVEntityStore,
    MemcacheClient,
    RedisClient,
    RemoteCacheEntityStore,
)
from tests.fakes import DeletableCacheService, FakeMemcache, FakeRedis

BACKENDS = ["heap", "disk", "accel", "memcached", "redis", "hostkv"]


def build_store(kind, tmp_path):
    if kind == "heap":
        return HeapEntityStore()
    if kind == "disk":
        return DiskEntityStore(tmp_path / "entities")
    if kind == "accel":
        return AccelRedirectEntityStore(tmp_path / "entities", "/cache")
    if kind == "memcached":
        return RemoteCacheEntityStore(MemcacheClient(FakeMemcache()))
    if kind == "redis":
        return RemoteCacheEntityStore(RedisClient(FakeRedis()))
    if kind == "hostkv":
        return HostKVEntityStore(DeletableCacheService())
    raise ValueError(f"Unknown backend: {kind}")
