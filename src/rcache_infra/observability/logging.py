"""structlog setup for the cache client and the CLI.

Cache events and redis-py's own stdlib records end up on a single root
handler, rendered either for a terminal or as one JSON object per line.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars

if TYPE_CHECKING:
    from rcache_core.config.settings import RedisConfig

# Driver chatter below this level is dropped whatever the configured level.
DRIVER_LOGGER = "redis"
DRIVER_MIN_LEVEL = logging.WARNING


def _pre_chain() -> list[structlog.types.Processor]:
    # Applied to structlog events and to foreign stdlib records alike.
    return [
        merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging(config: RedisConfig) -> None:
    """Install structlog and a single root handler according to ``config``.

    Calling it again replaces the previous handler, so the CLI can run it on
    every invocation.
    """
    pre_chain = _pre_chain()
    level = _resolve_level(config.log_level)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    final_processors: list[structlog.types.Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if config.log_format == "json":
        final_processors.append(structlog.processors.format_exc_info)
    final_processors.append(_renderer(config.log_format))

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processors=final_processors, foreign_pre_chain=pre_chain)
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    logging.getLogger(DRIVER_LOGGER).setLevel(max(level, DRIVER_MIN_LEVEL))


def _resolve_level(level_name: str) -> int:
    """Map a level name (any case) to its number; unknown names mean INFO."""
    return logging.getLevelNamesMapping().get(level_name.upper(), logging.INFO)


def bind_server_context(host: str, port: int) -> None:
    """Tag every following log entry with ``server=host:port``."""
    bind_contextvars(server=f"{host}:{port}")


def clear_server_context() -> None:
    clear_contextvars()
