"""Constants for entitystore."""

# Response header markers (case preserved for the serving layer)
DIGEST_HEADER = "X-Content-Digest"
LENGTH_HEADER = "Content-Length"
REDIRECT_HEADER = "X-Accel-Redirect"

# Proxy-visible root used when an accelredirect descriptor has no fragment
DEFAULT_REDIRECT_ROOT = "/cache"

# Disk backend
READ_CHUNK_SIZE = 8192
TEMP_PREFIX = ".entity-"

# Network caches
DEFAULT_MEMCACHED_PORT = 11211
MEMCACHED_MAX_KEY_LENGTH = 250

# Configuration
APP_NAME = "entitystore"
CONFIG_FILE = "config.yaml"
STORE_URI_ENV = "ENTITYSTORE_URI"
