"""A single cache entry bound to a key, value, lifetime and client."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

import structlog

from rcache_core.exceptions import (
    ClientNotSetError,
    InvalidLifetimeError,
    InvalidPropertyError,
    NoKeyError,
    PastExpiryError,
)
from rcache_core.expiry import normalize_timeout
from rcache_core.interfaces.client import ClientInterface

logger = structlog.get_logger()


class CacheItem:
    """Key/value/lifetime tuple that persists itself through a cache client.

    The item keeps a reference to a client but does not own it. Every server
    operation also accepts a ``server`` argument that overrides the bound
    client for that call only.

    Only the attributes exposed as properties exist; reading or assigning any
    other name raises ``InvalidPropertyError``.
    """

    __slots__ = ("_client", "_key", "_lifetime", "_value")

    def __init__(
        self,
        key: str | None = None,
        value: Any = None,  # noqa: ANN401
        client: ClientInterface | None = None,
    ) -> None:
        """Optionally set the key, value and client up front."""
        self._key = key
        self._value = value
        self._client = client
        self._lifetime = 0

    def __getattr__(self, name: str) -> Any:  # noqa: ANN401
        msg = f"The property does not exist: {name}"
        raise InvalidPropertyError(msg)

    def __setattr__(self, name: str, value: Any) -> None:  # noqa: ANN401
        if not hasattr(type(self), name):
            msg = f"The property does not exist: {name}"
            raise InvalidPropertyError(msg)
        super().__setattr__(name, value)

    def __repr__(self) -> str:
        return f"CacheItem(key={self._key!r}, value={self._value!r}, lifetime={self._lifetime!r})"

    @property
    def key(self) -> str | None:
        return self._key

    @key.setter
    def key(self, key: str | None) -> None:
        self._key = key

    @property
    def value(self) -> Any:  # noqa: ANN401
        return self._value

    @value.setter
    def value(self, value: Any) -> None:  # noqa: ANN401
        self._value = value

    @property
    def client(self) -> ClientInterface | None:
        return self._client

    @client.setter
    def client(self, client: ClientInterface | None) -> None:
        self._client = client

    @property
    def lifetime(self) -> int:
        """Lifetime in seconds. Change it with ``set_lifetime``."""
        return self._lifetime

    def set_lifetime(self, timeout: int | str | datetime | timedelta) -> bool:
        """Set the lifetime from seconds, an expiry datetime or a timedelta.

        Returns False, leaving the lifetime unchanged, when the datetime is
        already in the past. Numeric strings are accepted; any other string
        raises ``InvalidLifetimeError``.
        """
        if isinstance(timeout, str):
            try:
                timeout = int(timeout)
            except ValueError as e:
                msg = f"Lifetime must be a number of seconds, got {timeout!r}"
                raise InvalidLifetimeError(msg) from e

        try:
            lifetime = normalize_timeout(timeout, default=0)
        except PastExpiryError as e:
            logger.warning("past_expiry_rejected", key=self._key, error=str(e))
            return False

        self._lifetime = lifetime
        return True

    # ------------------------------------------------------------------
    # Server operations
    # ------------------------------------------------------------------

    def exists(self, server: ClientInterface | None = None) -> bool:
        """Check whether the key exists on the server."""
        client = self._prepare(server)
        return client.exists(self._key)  # type: ignore[arg-type]

    def delete(self, server: ClientInterface | None = None) -> bool:
        """Delete the key from the server.

        Returns True if the key existed before the deletion.
        """
        client = self._prepare(server)
        existed = client.exists(self._key)  # type: ignore[arg-type]
        client.delete(self._key)  # type: ignore[arg-type]
        return existed

    def save_to_server(self, server: ClientInterface | None = None) -> bool:
        """Store the current value under the key with the current lifetime."""
        client = self._prepare(server)
        return client.set(self._key, self._value, self._lifetime)  # type: ignore[arg-type]

    def load_from_server(self, server: ClientInterface | None = None) -> bool:
        """Refresh both lifetime and value from the server.

        Returns True only if the key was found with a non-zero lifetime.
        """
        lifetime = self.load_lifetime_from_server(server)
        value = self.load_value_from_server(server)
        return lifetime != 0 and value is not None

    def load_lifetime_from_server(self, server: ClientInterface | None = None) -> int:
        """Refresh the lifetime from the server; 0 if the key does not exist."""
        client = self._prepare(server)
        key: str = self._key  # type: ignore[assignment]
        self._lifetime = client.remaining_lifetime(key) if client.exists(key) else 0
        return self._lifetime

    def load_value_from_server(self, server: ClientInterface | None = None) -> Any:  # noqa: ANN401
        """Refresh the value from the server; None if the key does not exist."""
        client = self._prepare(server)
        key: str = self._key  # type: ignore[assignment]
        self._value = client.get(key) if client.exists(key) else None
        return self._value

    def _prepare(self, server: ClientInterface | None) -> ClientInterface:
        """Validate and normalize local state, then pick the client to use."""
        if not self._key:
            msg = "The cache key is not set!"
            raise NoKeyError(msg)
        if self._value is None:
            self._value = ""
        self._lifetime = int(self._lifetime)

        if server is not None:
            return server
        if self._client is None:
            msg = "The client is not set correctly."
            raise ClientNotSetError(msg)
        return self._client
