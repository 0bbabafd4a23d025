"""Tests for RedisConfig configuration."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from rcache_core.config.settings import RedisConfig
from rcache_core.constants import DEFAULT_CONFIG
from tests.mocks.mock_settings import make_config


@pytest.mark.unit
class TestRedisConfig:
    """Test RedisConfig defaults, overrides and validation."""

    def test_default_config(self) -> None:
        """Defaults match the shared defaults table."""
        with patch.dict(os.environ, {}, clear=True):
            cfg = make_config()
        assert cfg.get_all() == {"ip": "127.0.0.1", "port": 6379, "timeout": 300}
        assert cfg.db == 0
        assert cfg.password is None
        assert cfg.log_format == "console"

    def test_overrides_merge_over_defaults(self) -> None:
        """Keyword overrides replace only the named entries."""
        cfg = make_config(port=6380, timeout=60)
        assert cfg.get_all() == {"ip": "127.0.0.1", "port": 6380, "timeout": 60}

    def test_env_overrides(self) -> None:
        """RCACHE_* environment variables are honored."""
        env = {"RCACHE_IP": "10.0.0.5", "RCACHE_TIMEOUT": "30"}
        with patch.dict(os.environ, env, clear=False):
            cfg = make_config()
        assert cfg.ip == "10.0.0.5"
        assert cfg.timeout == 30

    def test_config_is_immutable(self) -> None:
        """Assigning to a field after construction fails."""
        cfg = make_config()
        with pytest.raises(ValidationError):
            cfg.timeout = 10  # type: ignore[misc]

    def test_unknown_override_rejected(self) -> None:
        """Unknown keys are not silently accepted."""
        with pytest.raises(ValidationError):
            make_config(hostname="example")

    @pytest.mark.parametrize("port", [0, 70000])
    def test_invalid_port_rejected(self, port: int) -> None:
        """Ports outside 1-65535 fail validation."""
        with pytest.raises(ValidationError):
            make_config(port=port)

    def test_password_is_secret(self) -> None:
        """Passwords are wrapped and not shown in repr."""
        cfg = make_config(password="hunter2")
        assert cfg.password is not None
        assert cfg.password.get_secret_value() == "hunter2"
        assert "hunter2" not in repr(cfg)

    def test_defaults_table_is_read_only(self) -> None:
        """The shared defaults cannot be mutated at runtime."""
        with pytest.raises(TypeError):
            DEFAULT_CONFIG["ip"] = "0.0.0.0"  # type: ignore[index]

    def test_instances_do_not_share_overrides(self) -> None:
        """An override on one instance leaves later instances on defaults."""
        make_config(ip="192.168.1.1")
        with patch.dict(os.environ, {}, clear=True):
            assert RedisConfig(_env_file=None).ip == "127.0.0.1"  # type: ignore[call-arg]
