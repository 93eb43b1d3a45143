"""Unit tests for revenue projection"""

import math
import pytest
from retention_engine.domain.models import ProjectionResult
from retention_engine.domain.projection import (
    calculate_growth_percent,
    calculate_trend_ratio,
    project_next_month,
)


def test_project_next_month_empty_series():
    """Test empty history gives a zero projection"""
    assert project_next_month([]) == ProjectionResult(projected=0.0, growth_percent=0.0)


def test_project_next_month_all_zero_series():
    """Test a window of zero months does not divide by zero"""
    assert project_next_month([0, 0, 0, 0, 0, 0]) == ProjectionResult(projected=0.0, growth_percent=0.0)


def test_project_next_month_upward_trend():
    """Test recent half above prior half projects growth"""
    result = project_next_month([100, 100, 100, 200, 200, 200])

    # trend = (200 - 100) / 100 = 1.0 -> 200 * 2
    assert result.projected == 400.0
    assert result.projected >= 200
    assert result.growth_percent > 0
    assert result.growth_percent == 100.0


def test_project_next_month_downward_trend():
    """Test recent half below prior half projects decline"""
    result = project_next_month([200, 200, 200, 100, 100, 100])

    # trend = (100 - 200) / 200 = -0.5 -> 100 * 0.5
    assert result.projected == 50.0
    assert result.growth_percent < 0
    assert result.growth_percent == -50.0


def test_project_next_month_never_negative():
    """Test a refund-heavy last month cannot push the projection below zero"""
    # trend = (40 - 10) / 10 = 3.0 -> -20 * 4 = -80, clamped
    result = project_next_month([10, 10, 100, -20])

    assert result.projected == 0.0
    assert result.growth_percent == -100.0


def test_project_next_month_single_point_is_flat():
    """Test fewer than two points keeps the last value"""
    result = project_next_month([750])

    assert result.projected == 750.0
    assert result.growth_percent == 0.0


def test_calculate_trend_ratio_odd_window_skips_middle():
    """Test odd windows compare equal-sized halves around the middle month"""
    # halves are [100, 100] and [300, 300]; the 999 in the middle is ignored
    assert calculate_trend_ratio([100, 100, 999, 300, 300]) == 2.0


def test_calculate_trend_ratio_prior_zero():
    """Test prior half of zeros is special-cased instead of dividing by zero"""
    assert calculate_trend_ratio([0, 0, 50, 50]) == 1.0
    assert calculate_trend_ratio([0, 0, 0, 0]) == 0.0


def test_calculate_growth_percent_last_month_zero():
    """Test growth from a zero month"""
    assert calculate_growth_percent(0, 0) == 0.0
    assert calculate_growth_percent(120, 0) == 100.0
    assert calculate_growth_percent(110, 100) == pytest.approx(10.0)


def test_project_next_month_non_finite_values_treated_as_zero():
    """Test NaN/Infinity from upstream math do not leak into the output"""
    result = project_next_month([float("nan"), 100, float("inf"), 100])

    assert math.isfinite(result.projected)
    assert math.isfinite(result.growth_percent)
    # halves become [0, 100] and [0, 100] -> flat
    assert result.projected == 100.0


def test_project_next_month_is_deterministic():
    """Test repeated calls give identical results"""
    series = [1200.5, 980.25, 1430.0, 1510.75, 1395.0, 1620.0]
    assert project_next_month(series) == project_next_month(series)
