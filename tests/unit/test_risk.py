"""Unit tests for cancellation-risk scoring"""

import pytest
from retention_engine.domain.models import MemberRiskInput, RiskTier
from retention_engine.domain.risk import (
    STABLE_REASON,
    RiskWeights,
    calculate_contributions,
    determine_tier,
    score_member,
    score_percent,
    score_reason,
    score_tier,
)


def make_input(days=None, pending=False, last_paid=None) -> MemberRiskInput:
    return MemberRiskInput(
        id="m1",
        days_until_expiry=days,
        has_pending_balance=pending,
        last_payment_days_ago=last_paid,
    )


def test_score_member_no_risk_factors():
    """Test a member with nothing to flag is stable"""
    member = make_input()

    assert score_tier(member) == RiskTier.LOW
    assert score_percent(member) == 0
    assert score_reason(member) == STABLE_REASON


def test_score_member_all_factors_clamped():
    """Test 40 + 30 + 30 is clamped to 100"""
    result = score_member(make_input(days=0, pending=True, last_paid=120))

    assert result.tier == RiskTier.HIGH
    assert result.percent == 100
    assert result.id == "m1"


def test_calculate_contributions_expiry_decay():
    """Test expiry points fall by 4 per day and bottom out at 0"""
    assert calculate_contributions(make_input(days=0)).expiry == 40
    assert calculate_contributions(make_input(days=3)).expiry == 28
    assert calculate_contributions(make_input(days=10)).expiry == 0
    assert calculate_contributions(make_input(days=45)).expiry == 0


def test_calculate_contributions_payment_recency_bands():
    """Test recency penalty bands (30, 90] and > 90"""
    assert calculate_contributions(make_input(last_paid=30)).payment_recency == 0
    assert calculate_contributions(make_input(last_paid=31)).payment_recency == 15
    assert calculate_contributions(make_input(last_paid=90)).payment_recency == 15
    assert calculate_contributions(make_input(last_paid=91)).payment_recency == 30


def test_determine_tier_bands():
    """Test tier thresholds, boundaries belong to the higher tier"""
    assert determine_tier(0) == RiskTier.LOW
    assert determine_tier(29) == RiskTier.LOW
    assert determine_tier(30) == RiskTier.MEDIUM
    assert determine_tier(69) == RiskTier.MEDIUM
    assert determine_tier(70) == RiskTier.HIGH
    assert determine_tier(100) == RiskTier.HIGH


@pytest.mark.parametrize("pending", [False, True])
@pytest.mark.parametrize("last_paid", [None, 10, 60, 200])
def test_percent_non_decreasing_as_expiry_approaches(pending, last_paid):
    """Test closer expiry never lowers risk, other inputs fixed"""
    percents = [score_percent(make_input(days=d, pending=pending, last_paid=last_paid)) for d in range(30, -1, -1)]
    assert percents == sorted(percents)


@pytest.mark.parametrize("days", [None, 0, 5, 30])
def test_percent_non_decreasing_with_pending_balance_and_recency(days):
    """Test pending balance and longer payment gaps never lower risk"""
    assert score_percent(make_input(days=days, pending=True)) >= score_percent(make_input(days=days, pending=False))

    by_recency = [score_percent(make_input(days=days, last_paid=gap)) for gap in [None, 0, 30, 31, 90, 91, 365]]
    assert by_recency == sorted(by_recency)


def test_score_reason_expiry_dominates():
    """Test reason names the largest contributor"""
    # expiry 32 vs pending 30
    assert score_reason(make_input(days=2, pending=True)) == "Expires in 2 days"
    assert score_reason(make_input(days=1)) == "Expires in 1 day"
    assert score_reason(make_input(days=0)) == "Expires today"


def test_score_reason_tie_prefers_expiry_then_pending():
    """Test ties break expiry > pending balance > payment recency"""
    # expiry 38 - 2 * 4 = 30 vs pending 30
    weights = RiskWeights(expiry_base=38, expiry_decay_per_day=4)
    assert score_reason(make_input(days=2, pending=True), weights) == "Expires in 2 days"

    # pending 30 vs lapsed payer 30
    assert score_reason(make_input(pending=True, last_paid=200)) == "Has a pending balance"


def test_score_reason_payment_recency():
    """Test recency reasons name the band crossed"""
    assert score_reason(make_input(last_paid=45)) == "No payment in 30+ days"
    assert score_reason(make_input(last_paid=120)) == "No payment in 90+ days"


def test_score_member_expired_member():
    """Test an already-expired member still scores without error"""
    result = score_member(make_input(days=-3))

    assert result.percent == 52
    assert result.tier == RiskTier.MEDIUM
    assert result.reason == "Subscription expired"


def test_score_member_non_finite_days_treated_as_missing():
    """Test NaN day counts contribute nothing"""
    member = MemberRiskInput(id="m1", days_until_expiry=float("nan"), last_payment_days_ago=float("inf"))
    result = score_member(member)

    assert result.percent == 0
    assert result.reason == STABLE_REASON


def test_score_member_custom_thresholds():
    """Test tier thresholds come from the supplied weights"""
    strict = RiskWeights(high_threshold=50, medium_threshold=10)

    assert score_tier(make_input(pending=True), strict) == RiskTier.MEDIUM
    assert score_tier(make_input(days=0, pending=True), strict) == RiskTier.HIGH


def test_score_member_is_idempotent():
    """Test identical inputs give identical outputs"""
    member = make_input(days=4, pending=True, last_paid=61)
    assert score_member(member) == score_member(member)


@pytest.mark.parametrize(
    "thresholds",
    [
        {"medium_threshold": 0},
        {"medium_threshold": -5},
        {"medium_threshold": 80, "high_threshold": 70},
        {"high_threshold": 101},
    ],
)
def test_risk_weights_reject_invalid_thresholds(thresholds):
    """Test tier thresholds must satisfy 0 < medium <= high <= 100"""
    with pytest.raises(ValueError):
        RiskWeights(**thresholds)


def test_risk_weights_equal_thresholds_allowed():
    """Test a single cut-off with no medium band is accepted"""
    weights = RiskWeights(high_threshold=50, medium_threshold=50)

    assert determine_tier(49, weights) == RiskTier.LOW
    assert determine_tier(50, weights) == RiskTier.HIGH
