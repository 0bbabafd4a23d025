"""Logger collaborator accepted by cache clients."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheLogger(Protocol):
    """Anything with leveled logging methods (structlog or stdlib loggers)."""

    def debug(self, event: str, *args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
        """Log at debug level."""
        ...

    def info(self, event: str, *args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
        """Log at info level."""
        ...

    def warning(self, event: str, *args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
        """Log at warning level."""
        ...

    def error(self, event: str, *args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
        """Log at error level."""
        ...

    def critical(self, event: str, *args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
        """Log at critical level."""
        ...
