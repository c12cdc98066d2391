"""Numeric coercion helpers.

Every public planning operation passes its inputs through these helpers so
that NaN, infinities, negatives and non-numeric values never reach the
arithmetic.
"""
import math
import sys
from typing import Any

MAX_FINITE = sys.float_info.max


def sanitize(value: Any) -> float:
    """Coerce a value to a finite, non-negative float (0.0 otherwise).

    Anything ``float()`` accepts counts as a number, including numeric
    strings such as ``"30"``. Integers too large for a float become 0.0.
    """
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def bounded(value: float) -> float:
    """Cap a derived non-negative result at the largest finite float.

    Products and quotients of sanitized inputs can overflow to infinity;
    NaN still maps to 0.0.
    """
    if math.isnan(value) or value < 0:
        return 0.0
    return min(value, MAX_FINITE)


def sanitize_count(value: Any) -> int:
    """Coerce a value to a non-negative whole count."""
    return int(math.floor(sanitize(value)))


def clamp(value: Any, minimum: float, maximum: float) -> float:
    """Sanitize a value and clamp it into [minimum, maximum]."""
    return min(maximum, max(minimum, sanitize(value)))
