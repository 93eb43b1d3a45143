"""Revenue projection from a trailing window of monthly totals"""

from typing import List, Sequence
from retention_engine.domain.models import ProjectionResult
from retention_engine.utils.numbers import finite_or_zero


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def calculate_trend_ratio(monthly_revenue: Sequence[float]) -> float:
    """
    Relative change between the earlier and the most recent half of the window.

    Both halves hold len // 2 points, so for odd-length windows the middle
    month is left out. Fewer than 2 points means a flat trend.

    Division by zero:
    - prior half averages 0 and recent half is positive -> 1.0 (treated as +100%)
    - both halves average 0 -> 0.0
    """
    values = [finite_or_zero(v) for v in monthly_revenue]
    half = len(values) // 2
    if half == 0:
        return 0.0

    prior_mean = _mean(values[:half])
    recent_mean = _mean(values[-half:])

    if prior_mean > 0:
        return (recent_mean - prior_mean) / prior_mean
    return 1.0 if recent_mean > 0 else 0.0


def calculate_growth_percent(projected: float, last_value: float) -> float:
    """Percentage change of projected vs. the last observed month"""
    if last_value == 0:
        return 100.0 if projected > 0 else 0.0
    return (projected - last_value) / last_value * 100


def project_next_month(monthly_revenue: Sequence[float]) -> ProjectionResult:
    """
    Main entry point: extrapolate next month's revenue.

    The half-over-half trend ratio is applied to the most recent month:
        projected = max(0, last * (1 + trend))

    growth_percent is returned at full precision; rounding is left to the
    presentation layer.
    """
    values = [finite_or_zero(v) for v in monthly_revenue]
    if not values:
        return ProjectionResult(projected=0.0, growth_percent=0.0)

    last_value = values[-1]
    trend_ratio = calculate_trend_ratio(values)
    projected = max(0.0, last_value * (1 + trend_ratio))

    return ProjectionResult(
        projected=projected,
        growth_percent=calculate_growth_percent(projected, last_value),
    )
