"""Conversion of caller-supplied expiry values into relative TTLs."""

from __future__ import annotations

import math
import time
from datetime import datetime, timedelta

from rcache_core.exceptions import PastExpiryError

Timeout = int | datetime | timedelta | None


def normalize_timeout(timeout: Timeout, default: int, now: float | None = None) -> int:
    """Return the TTL in seconds that Redis should apply.

    - ``datetime``: seconds from ``now`` until that moment, rounded up.
      Raises ``PastExpiryError`` if the moment has already passed.
    - ``timedelta``: its length in whole seconds.
    - ``None``: ``default``.
    - ``int``: returned verbatim. Zero and negative values are not clamped.
    """
    if isinstance(timeout, datetime):
        current = time.time() if now is None else now
        target = timeout.timestamp()
        if target < current:
            msg = "The timeout cannot be in the past"
            raise PastExpiryError(msg)
        return math.ceil(target - current)

    if isinstance(timeout, timedelta):
        return int(timeout.total_seconds())

    if timeout is None:
        return default

    return timeout
