"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from unittest.mock import MagicMock

import pytest

from rcache_core.config.settings import RedisConfig
from rcache_infra.clients.redis_client import RedisClient
from rcache_infra.observability import clear_server_context
from tests.mocks.mock_redis import FakeClock, FakeRedis, make_factory
from tests.mocks.mock_settings import make_config


@pytest.fixture
def config() -> RedisConfig:
    """Return a RedisConfig with the built-in defaults."""
    return make_config()


@pytest.fixture
def clock() -> FakeClock:
    """Return a manually advanced clock."""
    return FakeClock()


@pytest.fixture
def fake_redis(clock: FakeClock) -> FakeRedis:
    """Return an empty in-memory Redis stand-in."""
    return FakeRedis(clock=clock)


@pytest.fixture
def mock_logger() -> MagicMock:
    """Return a logger double recording every call."""
    return MagicMock()


@pytest.fixture
def client(
    config: RedisConfig, fake_redis: FakeRedis, mock_logger: MagicMock
) -> Generator[RedisClient, None, None]:
    """Return a RedisClient connected to the in-memory fake."""
    redis_client = RedisClient(config, logger=mock_logger, connection_factory=make_factory(fake_redis))
    assert redis_client.connect() is True
    yield redis_client
    redis_client.close()


@pytest.fixture(autouse=True)
def _reset_logging() -> Generator[None, None, None]:
    """Save and restore root logger handlers around tests that configure logging."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    root.handlers = original_handlers
    root.level = original_level
    clear_server_context()
