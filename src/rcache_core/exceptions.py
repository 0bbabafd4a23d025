"""Custom exception hierarchy for rcache."""

from __future__ import annotations


class CacheError(Exception):
    """Base exception for all rcache errors."""


class ExtensionUnavailableError(CacheError):
    """Raised when the Redis driver cannot be imported."""


class ClientNotSetError(CacheError):
    """Raised when a CacheItem operation has no client to run against."""


class NoKeyError(CacheError):
    """Raised when a CacheItem operation is attempted without a key."""


class InvalidPropertyError(CacheError, AttributeError):
    """Raised on access to an attribute CacheItem does not define."""


class PastExpiryError(CacheError, ValueError):
    """Raised when an absolute expiry time has already elapsed."""


class InvalidLifetimeError(CacheError, ValueError):
    """Raised when a lifetime cannot be interpreted as seconds."""


class NotConnectedError(CacheError):
    """Raised when a client is used before connect() succeeded."""
