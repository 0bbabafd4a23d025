"""Observability helpers for rcache."""

from rcache_infra.observability.logging import (
    bind_server_context,
    clear_server_context,
    configure_logging,
)

__all__ = [
    "bind_server_context",
    "clear_server_context",
    "configure_logging",
]
