"""Domain model re-exports for rcache_core."""

from rcache_core.models.cache_item import CacheItem

__all__ = ["CacheItem"]
