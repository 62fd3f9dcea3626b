"""In-memory stand-ins for cache clients and platform services."""


class DictCacheService:
    """Platform key-value service stand-in: contains/get/put only."""

    def __init__(self):
        self.data = {}
        self.ttls = {}

    def contains(self, key):
        return key in self.data

    def get(self, key):
        return self.data.get(key)

    def put(self, key, value, ttl=None):
        self.data[key] = value
        self.ttls[key] = ttl


class DeletableCacheService(DictCacheService):
    """Service that also supports deletion."""

    def delete(self, key):
        self.data.pop(key, None)


class FakeMemcache:
    """Mimics the subset of pymemcache.client.base.Client we call."""

    def __init__(self):
        self.data = {}
        self.calls = []

    def get(self, key):
        self.calls.append(("get", key))
        return self.data.get(key)

    def set(self, key, value, expire=0, noreply=None):
        self.calls.append(("set", key, expire))
        self.data[key] = value
        return True

    def append(self, key, value, noreply=None):
        self.calls.append(("append", key))
        if key not in self.data:
            return False
        self.data[key] += value
        return True

    def delete(self, key, noreply=None):
        self.calls.append(("delete", key))
        return self.data.pop(key, None) is not None


class FakeRedis:
    """Mimics the subset of redis.Redis we call."""

    def __init__(self):
        self.data = {}
        self.expiry = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value, ex=None):
        self.data[key] = value
        self.expiry[key] = ex
        return True

    def exists(self, *keys):
        return sum(1 for k in keys if k in self.data)

    def delete(self, *keys):
        return sum(1 for k in keys if self.data.pop(k, None) is not None)


