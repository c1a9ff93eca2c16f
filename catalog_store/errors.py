"""Exception types raised by the catalog store."""


class CatalogStoreError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgument(CatalogStoreError, ValueError):
    """Malformed query parameters, unknown collection names, bad quantities."""


class StoreError(CatalogStoreError):
    """
    Persistence failure: a payload could not be serialized, a stored payload
    no longer validates, or the storage medium itself failed.
    """

    def __init__(self, message: str, key: str = None):
        super().__init__(message)
        self.key = key
