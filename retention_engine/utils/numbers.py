"""Numeric coercion helpers for upstream figures that may be missing or non-finite"""

import math
from typing import Optional


def finite_or_zero(value) -> float:
    """Return value as a float, or 0.0 when it is None, NaN or infinite"""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def finite_or_none(value) -> Optional[float]:
    """Like finite_or_zero, but keeps "not applicable" distinct from zero"""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Render "1 member" / "3 members" style counts"""
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {word}"


def format_amount(amount: float) -> str:
    """Thousands-separated whole amount, e.g. 12500.4 -> "12,500" """
    return f"{finite_or_zero(amount):,.0f}"
