"""Display formatting for planning figures."""

import math
from typing import Any


def _finite(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def format_integer(value: Any) -> str:
    return f"{_finite(value):,.0f}"


def format_percent(ratio: Any) -> str:
    return f"{_finite(ratio) * 100:.0f}%"


def format_money(amount: Any, currency: str = "EUR") -> str:
    return f"{_finite(amount):,.2f} {currency}"


def period_label(period: str) -> str:
    """Short axis label: drop the year from ``YYYY-MM-DD``."""
    if not period:
        return ""
    return period[5:]
