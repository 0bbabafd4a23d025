"""Abstract cache client interface."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Protocol, runtime_checkable

from rcache_core.expiry import Timeout


@runtime_checkable
class ClientInterface(Protocol):
    """Cache client contract; implementations can be swapped."""

    def connect(self, ip: str | None = None, port: int | None = None) -> bool:
        """Connect to the cache server, falling back to configured ip/port."""
        ...

    def delete(self, key: str | list[str]) -> ClientInterface:
        """Delete one key or a list of keys."""
        ...

    def exists(self, key: str) -> bool:
        """Check if the key exists."""
        ...

    def get(self, key: str) -> Any | None:  # noqa: ANN401
        """Return the decoded value, or None if the key is absent."""
        ...

    def get_all(self) -> dict[str, Any]:
        """Return every cached item keyed by name."""
        ...

    def purge(self) -> bool:
        """Remove all cached items."""
        ...

    def set(self, key: str, value: Any, timeout: Timeout = None) -> bool:  # noqa: ANN401
        """Store a value with a TTL (seconds, datetime or timedelta)."""
        ...

    def remaining_lifetime(self, key: str) -> int:
        """Seconds left before the key expires; 0 if it does not exist."""
        ...

    def count(self) -> int:
        """Number of keys in the store."""
        ...

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        """Iterate over (key, value) pairs."""
        ...
