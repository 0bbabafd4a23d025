"""Redis client configuration using pydantic-settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from rcache_core.constants import (
    CFG_IP,
    CFG_PORT,
    CFG_TIMEOUT,
    DEFAULT_CONFIG,
    DEFAULT_CONNECT_TIMEOUT_SECONDS,
)


class RedisConfig(BaseSettings):
    """Connection and default-TTL settings for a Redis cache client.

    Values resolve from keyword overrides, then ``RCACHE_*`` environment
    variables, then the shared ``DEFAULT_CONFIG`` table. Instances are
    immutable once built.
    """

    model_config = SettingsConfigDict(
        env_prefix="RCACHE_",
        env_file=".env",
        extra="forbid",
        frozen=True,
    )

    # --- Connection ---
    ip: str = Field(
        default=DEFAULT_CONFIG[CFG_IP],
        description="Redis server address",
    )
    port: int = Field(
        default=DEFAULT_CONFIG[CFG_PORT],
        ge=1,
        le=65535,
        description="Redis server port",
    )
    db: int = Field(
        default=0,
        ge=0,
        description="Redis database index",
    )
    password: SecretStr | None = Field(
        default=None,
        description="Redis AUTH password (optional)",
    )
    connect_timeout: float = Field(
        default=DEFAULT_CONNECT_TIMEOUT_SECONDS,
        gt=0,
        description="Socket connect timeout in seconds",
    )

    # --- Cache ---
    timeout: int = Field(
        default=DEFAULT_CONFIG[CFG_TIMEOUT],
        description="Default key TTL in seconds when a caller omits one",
    )

    # --- Logging ---
    log_level: str = Field(
        default="INFO",
        description="Log level name",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        description="Log renderer: 'console' for humans, 'json' for collectors",
    )

    def get_all(self) -> dict[str, object]:
        """Return the core config entries (ip, port, timeout) as a dict."""
        return {
            CFG_IP: self.ip,
            CFG_PORT: self.port,
            CFG_TIMEOUT: self.timeout,
        }
