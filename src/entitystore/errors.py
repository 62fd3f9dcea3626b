"""Custom exceptions for entitystore.

Absence of an entry is never an exception: lookups return ``None`` or
``False``. The types below cover configuration mistakes and capability
gaps. Failures of the underlying medium (``OSError``, client errors)
propagate unchanged.
"""


class EntityStoreError(RuntimeError):
    """Base class for all entity store errors."""
    pass


# Storage Errors
class StorageError(EntityStoreError):
    """Base class for storage-related errors."""
    pass


class UnsupportedOperationError(StorageError):
    """Backend cannot perform the requested operation."""

    def __init__(self, operation: str, backend: str):
        self.operation = operation
        self.backend = backend
        super().__init__(
            f"'{operation}' is not supported by {backend}. "
            f"Set purge_policy='ignore' to accept this capability gap."
        )


# Configuration Errors
class ConfigError(EntityStoreError):
    """Base class for configuration errors."""
    pass


class InvalidDescriptorError(ConfigError):
    """Store URI or descriptor could not be parsed."""

    def __init__(self, uri: str, reason: str):
        self.uri = uri
        self.reason = reason
        super().__init__(f"Invalid store descriptor '{uri}': {reason}")
