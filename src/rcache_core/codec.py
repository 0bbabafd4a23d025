"""Value codec between Python objects and Redis string values.

Scalars (``str``, ``int``, ``float``) are stored as-is. Everything else is
JSON-encoded. On the way back, any string that parses as JSON is returned
parsed; anything else comes back untouched.
"""

from __future__ import annotations

import json
from typing import Any, NoReturn

StoredValue = str | int | float


def is_scalar(value: object) -> bool:
    """Return True for values Redis can store without encoding.

    ``bool`` is an ``int`` subclass but the driver rejects it, so it is
    treated as non-scalar and goes through JSON.
    """
    return isinstance(value, str | int | float) and not isinstance(value, bool)


def encode(value: Any) -> StoredValue:  # noqa: ANN401
    """Prepare a value for storage."""
    if is_scalar(value):
        return value  # type: ignore[no-any-return]
    return json.dumps(value)


def _reject_constant(token: str) -> NoReturn:
    msg = f"Not a JSON value: {token}"
    raise ValueError(msg)


def decode(raw: Any) -> Any:  # noqa: ANN401
    """Convert a stored value back into a Python object.

    Never raises: values that are not valid JSON are returned as they are.
    ``NaN`` and ``Infinity`` are not JSON, so those strings stay strings.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return raw
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        return raw
