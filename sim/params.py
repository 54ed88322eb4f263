from __future__ import annotations
"""Numeric request parameters.

Counts, ring numbers, distances and sizes arrive as JSON values. A missing
key or ``null`` means "use the configured default". Integers, integral
floats and strings that spell a number are accepted; anything else raises
:class:`RecordError` naming the key, the same way malformed coordinates do.
"""

from typing import Any, Mapping
import math
import logging

from .records import RecordError

logger = logging.getLogger(__name__)


def _parse_int_string(s: str):
    s = s.strip()
    if s and (s.isdigit() or (s[0] in {"+", "-"} and s[1:].isdigit())):
        return int(s)
    return None


def int_param(req: Mapping[str, Any], key: str, default: int) -> int:
    """Integer parameter ``key`` of ``req``, or ``default`` when absent.

    Booleans, fractional or non finite floats and non numeric strings are
    refused.
    """
    value = req.get(key)
    if value is None:
        return default
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        parsed = _parse_int_string(value)
        if parsed is not None:
            logger.debug("int_param: %r parsed from string %r", key, value)
            return parsed
    raise RecordError(f"{key!r} must be an integer, got {value!r}")


def float_param(req: Mapping[str, Any], key: str, default: float) -> float:
    """Finite float parameter ``key`` of ``req``, or ``default`` when absent."""
    value = req.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise RecordError(f"{key!r} must be a number, got {value!r}")
    try:
        f = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError) as e:
        raise RecordError(f"{key!r} must be a finite number, got {value!r}") from e
    if not math.isfinite(f):
        raise RecordError(f"{key!r} must be a finite number, got {value!r}")
    return f
