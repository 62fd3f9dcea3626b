"""Test entity store resolution from URIs."""

from unittest.mock import patch

import pytest

from entitystore.config import StoreConfig
from entitystore.errors import ConfigError
from entitystore.storage import (
    AccelRedirectEntityStore,
    DiskEntityStore,
    HeapEntityStore,
    HostKVEntityStore,
    MemcacheClient,
    NullEntityStore,
    RedisClient,
    RemoteCacheEntityStore,
    make_entity_store,
    make_entity_store_from_config,
)
from tests.fakes import DictCacheService


class TestMakeEntityStore:
    """Test scheme dispatch."""

    def test_heap(self):
        assert isinstance(make_entity_store("heap:"), HeapEntityStore)
        assert isinstance(make_entity_store("heap:/"), HeapEntityStore)

    def test_heap_instances_are_independent(self):
        assert make_entity_store("heap:").storage is not make_entity_store("heap:").storage

    @pytest.mark.parametrize("scheme", ["file", "disk"])
    def test_disk(self, tmp_path, scheme):
        store = make_entity_store(f"{scheme}:{tmp_path}/entities")
        assert type(store) is DiskEntityStore
        assert store.root == tmp_path / "entities"

    def test_file_url_form(self, tmp_path):
        store = make_entity_store(f"file://{tmp_path}/entities")
        assert store.root == tmp_path / "entities"

    def test_disk_missing_path(self):
        with pytest.raises(ConfigError, match="missing directory path"):
            make_entity_store("file:")

    def test_accelredirect(self, tmp_path):
        store = make_entity_store(f"accelredirect:{tmp_path}#internal")
        assert isinstance(store, AccelRedirectEntityStore)
        assert store.root == tmp_path
        assert store.redirect_root == "/internal"

    def test_memcached(self):
        with patch("pymemcache.client.base.Client"):
            store = make_entity_store("memcached://localhost:11211", ttl=5, namespace="ns")
        assert isinstance(store, RemoteCacheEntityStore)
        assert isinstance(store.client, MemcacheClient)
        assert store.client.namespace == "ns"
        assert store.ttl == 5

    def test_redis(self):
        with patch("redis.Redis.from_url"):
            store = make_entity_store("redis://localhost:6379/1", purge_policy="ignore")
        assert isinstance(store.client, RedisClient)
        assert store.purge_policy == "ignore"

    def test_hostkv(self):
        service = DictCacheService()
        store = make_entity_store("hostkv:", host_service=service)
        assert isinstance(store, HostKVEntityStore)
        assert store.service is service

    def test_hostkv_requires_service(self):
        with pytest.raises(ConfigError, match="host_service"):
            make_entity_store("hostkv:")

    def test_null(self):
        assert isinstance(make_entity_store("null:"), NullEntityStore)

    def test_unknown_scheme(self):
        with pytest.raises(ConfigError, match="not supported"):
            make_entity_store("s3://bucket/prefix")


def test_from_config(tmp_path):
    config = StoreConfig(uri="hostkv:", ttl=30, purge_policy="ignore")
    store = make_entity_store_from_config(config, host_service=DictCacheService())

    assert store.ttl == 30
    assert store.purge_policy == "ignore"
