"""Shared constants for rcache."""

from __future__ import annotations

from types import MappingProxyType

# Config entry names
CFG_IP = "ip"
CFG_PORT = "port"
CFG_TIMEOUT = "timeout"

# Default connection settings and TTL, read-only after import
DEFAULT_CONFIG: MappingProxyType[str, object] = MappingProxyType(
    {
        CFG_IP: "127.0.0.1",
        CFG_PORT: 6379,
        CFG_TIMEOUT: 300,
    }
)

DEFAULT_CONNECT_TIMEOUT_SECONDS = 5.0

# Redis TTL replies
TTL_KEY_MISSING = -2
TTL_NO_EXPIRY = -1

ALL_KEYS_PATTERN = "*"

VERSION = "0.1.0"
