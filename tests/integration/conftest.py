"""Integration test fixtures: a real Redis on localhost, test database 1."""

from __future__ import annotations

import functools
import logging
import socket
import time
from collections.abc import Generator

import pytest

from rcache_infra.clients.redis_client import RedisClient
from tests.mocks.mock_settings import make_integration_config

# ---------------------------------------------------------------------------
# Service health checks (with retry for CI container start-up)
# ---------------------------------------------------------------------------


def _tcp_reachable(
    host: str,
    port: int,
    timeout: float = 1.0,
    retries: int = 10,
    delay: float = 2.0,
) -> bool:
    """Check if a TCP service is reachable, retrying on failure."""
    for attempt in range(retries):
        try:
            with socket.create_connection((host, port), timeout=timeout):
                return True
        except OSError:
            if attempt < retries - 1:
                time.sleep(delay)
    return False


@functools.cache
def _is_redis_up() -> bool:
    """Check Redis availability lazily (cached after first call).

    Three short retries so runs without a local Redis skip quickly.
    """
    return _tcp_reachable("localhost", 6379, retries=3, delay=1.0)


# ---------------------------------------------------------------------------
# Redis fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def redis_client() -> Generator[RedisClient, None, None]:
    """Connected RedisClient on test DB 1, flushed before and after each test."""
    if not _is_redis_up():
        pytest.skip("Redis not reachable on localhost:6379")

    client = RedisClient(make_integration_config())
    assert client.connect() is True
    client.purge()
    yield client
    client.purge()
    client.close()


# ---------------------------------------------------------------------------
# Logging cleanup
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """Save and restore root logger handlers between tests."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.level = original_level
