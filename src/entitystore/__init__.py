"""Content-addressed entity store for HTTP response bodies."""

from .codec import ResponseCodec
from .config import StoreConfig, load_store_config
from .constants import DIGEST_HEADER, LENGTH_HEADER, REDIRECT_HEADER
from .errors import (
    ConfigError,
    EntityStoreError,
    InvalidDescriptorError,
    StorageError,
    UnsupportedOperationError,
)
from .hashing import compute_digest
from .response import Response
from .storage import (
    AccelRedirectEntityStore,
    DiskEntityStore,
    EntityStore,
    HeapEntityStore,
    HostKVEntityStore,
    NullEntityStore,
    RemoteCacheEntityStore,
    make_entity_store,
)

__version__ = "0.1.0"

__all__ = [
    "AccelRedirectEntityStore",
    "ConfigError",
    "DIGEST_HEADER",
    "DiskEntityStore",
    "EntityStore",
    "EntityStoreError",
    "HeapEntityStore",
    "HostKVEntityStore",
    "InvalidDescriptorError",
    "LENGTH_HEADER",
    "NullEntityStore",
    "REDIRECT_HEADER",
    "RemoteCacheEntityStore",
    "Response",
    "ResponseCodec",
    "StorageError",
    "StoreConfig",
    "UnsupportedOperationError",
    "compute_digest",
    "load_store_config",
    "make_entity_store",
]
