"""Public interface re-exports for rcache_core."""

from rcache_core.interfaces.client import ClientInterface
from rcache_core.interfaces.logger import CacheLogger

__all__ = [
    "CacheLogger",
    "ClientInterface",
]
