"""Redis-backed implementation of ClientInterface."""

from __future__ import annotations

import importlib
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

import structlog

from rcache_core import codec
from rcache_core.config.settings import RedisConfig
from rcache_core.constants import ALL_KEYS_PATTERN, TTL_KEY_MISSING
from rcache_core.exceptions import (
    ExtensionUnavailableError,
    NotConnectedError,
    PastExpiryError,
)
from rcache_core.expiry import Timeout, normalize_timeout

if TYPE_CHECKING:
    from types import ModuleType

    from redis import Redis

    from rcache_core.interfaces.logger import CacheLogger

ConnectionFactory = Callable[..., "Redis"]


def load_driver() -> ModuleType:
    """Import redis-py, raising ExtensionUnavailableError if it is missing."""
    try:
        return importlib.import_module("redis")
    except ImportError as e:
        msg = "The redis package must be installed to use RedisClient"
        raise ExtensionUnavailableError(msg) from e


class RedisClient:
    """Cache client wrapping a single redis-py connection.

    Adds JSON encoding of non-scalar values, default TTLs taken from
    ``RedisConfig`` and logging of connect/delete/purge events. Only the
    operations listed here are exposed; the raw connection stays private.

    Not thread-safe: share one instance across threads at your own risk.
    """

    def __init__(
        self,
        config: RedisConfig | None = None,
        logger: CacheLogger | None = None,
        connection_factory: ConnectionFactory | None = None,
    ) -> None:
        """Initialize with optional config, logger and connection factory.

        ``connection_factory`` receives redis-py keyword arguments and
        defaults to ``redis.Redis``.
        """
        self._driver = load_driver()
        self._config = config if config is not None else RedisConfig()
        self._log: CacheLogger = logger if logger is not None else structlog.get_logger(__name__)
        self._connection_factory = connection_factory or self._driver.Redis
        self._connection: Redis | None = None

    @property
    def config(self) -> RedisConfig:
        return self._config

    @property
    def connected(self) -> bool:
        return self._connection is not None

    @property
    def connection(self) -> Redis:
        """The live redis-py connection."""
        if self._connection is None:
            msg = "The client is not connected; call connect() first"
            raise NotConnectedError(msg)
        return self._connection

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def connect(self, ip: str | None = None, port: int | None = None) -> bool:
        """Connect to Redis, falling back to the configured ip and port.

        Returns False (and logs at critical) when the server does not answer
        a PING.
        """
        ip = ip or self._config.ip
        port = port or self._config.port
        password = self._config.password.get_secret_value() if self._config.password else None

        connection = self._connection_factory(
            host=ip,
            port=port,
            db=self._config.db,
            password=password,
            socket_connect_timeout=self._config.connect_timeout,
            decode_responses=True,
        )
        try:
            connection.ping()
        except self._driver.RedisError as e:
            self._log.critical("redis_connect_failed", host=ip, port=port, error=str(e))
            connection.close()
            return False

        if self._connection is not None:
            self._connection.close()
        self._connection = connection
        self._log.debug("redis_connected", host=ip, port=port)
        return True

    def close(self) -> None:
        """Close the connection; the client can be reconnected later."""
        if self._connection is None:
            return
        self._connection.close()
        self._connection = None
        self._log.debug("redis_disconnected")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, key: str) -> Any | None:  # noqa: ANN401
        """Return the decoded value, or None if the key does not exist."""
        return codec.decode(self.connection.get(key))

    def get_many(self, keys: list[str]) -> list[Any | None]:
        """Return decoded values for several keys, None where missing."""
        if not keys:
            return []
        return [codec.decode(raw) for raw in self.connection.mget(keys)]

    def get_all(self) -> dict[str, Any]:
        """Return every key in the database with its decoded value.

        Runs ``KEYS *`` followed by one GET per key, so it is only suitable
        for small, dedicated databases. Keys holding hashes, lists or other
        non-string types read as None.
        """
        values: dict[str, Any] = {}
        for key in self.connection.keys(ALL_KEYS_PATTERN):
            try:
                values[key] = self.get(key)
            except self._driver.ResponseError as e:
                self._log.debug("redis_key_not_readable", key=key, error=str(e))
                values[key] = None
        return values

    def exists(self, key: str) -> bool:
        return bool(self.connection.exists(key))

    def count(self) -> int:
        """Number of keys in the selected database."""
        return int(self.connection.dbsize())  # type: ignore[arg-type]

    def remaining_lifetime(self, key: str) -> int:
        """Seconds until the key expires.

        0 if the key does not exist, -1 if it exists without an expiry.
        """
        ttl = int(self.connection.ttl(key))  # type: ignore[arg-type]
        return 0 if ttl == TTL_KEY_MISSING else ttl

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def set(self, key: str, value: Any, timeout: Timeout = None) -> bool:  # noqa: ANN401
        """Store a value with a TTL.

        ``timeout`` may be seconds, a ``timedelta`` or an expiry ``datetime``;
        None uses the configured default. Returns False without writing if
        the datetime is in the past, and False if Redis rejects the write
        (for example a TTL of zero or less).
        """
        try:
            ttl = normalize_timeout(timeout, self._config.timeout)
        except PastExpiryError as e:
            self._log.warning("past_expiry_rejected", key=key, error=str(e))
            return False

        try:
            return bool(self.connection.setex(key, ttl, codec.encode(value)))
        except (self._driver.ResponseError, self._driver.DataError) as e:
            self._log.error("redis_set_rejected", key=key, ttl=ttl, error=str(e))
            return False

    def set_if_absent(self, key: str, value: Any) -> bool:  # noqa: ANN401
        """Store a value only if the key does not exist yet. No TTL is set."""
        return bool(self.connection.setnx(key, codec.encode(value)))

    def delete(self, key: str | list[str]) -> RedisClient:
        """Delete one key or a list of keys; returns self for chaining."""
        keys = [key] if isinstance(key, str) else list(key)
        if not keys:
            return self

        self._log.info("redis_keys_deleted", keys=keys)
        self.connection.delete(*keys)
        return self

    def purge(self) -> bool:
        """Flush every key in the selected database."""
        try:
            purged = bool(self.connection.flushdb())
        except self._driver.RedisError as e:
            self._log.error("redis_purge_failed", error=str(e))
            return False

        if purged:
            self._log.info("redis_purged", db=self._config.db)
        else:
            self._log.error("redis_purge_failed", db=self._config.db)
        return purged

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        """Iterate over (key, value) pairs from a snapshot of the database."""
        return iter(self.get_all().items())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.exists(key)

    def __getitem__(self, key: str) -> Any | None:  # noqa: ANN401
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:  # noqa: ANN401
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        self.delete(key)
