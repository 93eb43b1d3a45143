"""Cancellation-risk scoring engine - core business logic for retention insights"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple
from retention_engine.domain.models import MemberRiskInput, RiskResult, RiskTier
from retention_engine.utils.numbers import finite_or_none

logger = logging.getLogger(__name__)

STABLE_REASON = "Stable — no risk factors detected"


@dataclass(frozen=True)
class RiskWeights:
    """
    Heuristic weights and tier thresholds.

    Defaults:
    - Expiry: 40 points on the expiry day, 4 fewer per day left (0 from day 10 on)
    - Pending balance: flat 30 points
    - Payment recency: 15 points after 30 days, 30 points after 90 days
    - Tiers: >= 70 high, >= 30 medium, below that low
    """

    expiry_base: float = 40
    expiry_decay_per_day: float = 4
    pending_balance: float = 30
    stale_payment_days: int = 30
    stale_payment_penalty: float = 15
    lapsed_payment_days: int = 90
    lapsed_payment_penalty: float = 30
    high_threshold: int = 70
    medium_threshold: int = 30

    def __post_init__(self) -> None:
        # Zero must stay low so the no-factor case is always "stable"
        if not 0 < self.medium_threshold <= self.high_threshold <= 100:
            raise ValueError(
                f"Invalid risk tier thresholds: need 0 < medium ({self.medium_threshold}) "
                f"<= high ({self.high_threshold}) <= 100"
            )


DEFAULT_WEIGHTS = RiskWeights()


class RiskFactor(str, Enum):
    """Contributing factors, declared in tie-break order"""

    EXPIRY = "expiry"
    PENDING_BALANCE = "pending_balance"
    PAYMENT_RECENCY = "payment_recency"


@dataclass(frozen=True)
class RiskContributions:
    """Per-factor points for one member before summing"""

    days_until_expiry: Optional[float]
    last_payment_days_ago: Optional[float]
    expiry: float
    pending_balance: float
    payment_recency: float

    @property
    def total(self) -> float:
        return self.expiry + self.pending_balance + self.payment_recency

    @property
    def dominant(self) -> Optional[RiskFactor]:
        """Largest contributor; ties go to the factor declared first. None if nothing contributes."""
        ranked = [
            (RiskFactor.EXPIRY, self.expiry),
            (RiskFactor.PENDING_BALANCE, self.pending_balance),
            (RiskFactor.PAYMENT_RECENCY, self.payment_recency),
        ]
        factor, points = max(ranked, key=lambda pair: pair[1])  # max keeps the first of equal keys
        return factor if points > 0 else None


def calculate_contributions(
    member: MemberRiskInput,
    weights: RiskWeights = DEFAULT_WEIGHTS,
) -> RiskContributions:
    """
    Break a member's risk into its three additive components.

    Missing or non-finite day counts mean the factor does not apply.
    """
    days_left = finite_or_none(member.days_until_expiry)
    paid_days_ago = finite_or_none(member.last_payment_days_ago)

    expiry = 0.0
    if days_left is not None:
        expiry = max(0.0, weights.expiry_base - days_left * weights.expiry_decay_per_day)

    pending = weights.pending_balance if member.has_pending_balance else 0.0

    recency = 0.0
    if paid_days_ago is not None:
        if paid_days_ago > weights.lapsed_payment_days:
            recency = weights.lapsed_payment_penalty
        elif paid_days_ago > weights.stale_payment_days:
            recency = weights.stale_payment_penalty

    return RiskContributions(
        days_until_expiry=days_left,
        last_payment_days_ago=paid_days_ago,
        expiry=expiry,
        pending_balance=pending,
        payment_recency=recency,
    )


def determine_tier(percent: int, weights: RiskWeights = DEFAULT_WEIGHTS) -> RiskTier:
    """Map a risk percent to its tier band (band boundaries belong to the higher tier)"""
    if percent >= weights.high_threshold:
        return RiskTier.HIGH
    elif percent >= weights.medium_threshold:
        return RiskTier.MEDIUM
    else:
        return RiskTier.LOW


def _expiry_phrase(contrib: RiskContributions) -> str:
    days = int(contrib.days_until_expiry)
    return f"Expires in {days} day{'s' if days != 1 else ''}"


# Evaluated top to bottom, first match wins
ReasonRule = Tuple[Callable[[RiskContributions, RiskWeights], bool], Callable[[RiskContributions, RiskWeights], str]]

REASON_RULES: List[ReasonRule] = [
    (
        lambda c, w: c.dominant is None,
        lambda c, w: STABLE_REASON,
    ),
    (
        lambda c, w: c.dominant is RiskFactor.EXPIRY and c.days_until_expiry < 0,
        lambda c, w: "Subscription expired",
    ),
    (
        lambda c, w: c.dominant is RiskFactor.EXPIRY and c.days_until_expiry < 1,
        lambda c, w: "Expires today",
    ),
    (
        lambda c, w: c.dominant is RiskFactor.EXPIRY,
        lambda c, w: _expiry_phrase(c),
    ),
    (
        lambda c, w: c.dominant is RiskFactor.PENDING_BALANCE,
        lambda c, w: "Has a pending balance",
    ),
    (
        lambda c, w: c.dominant is RiskFactor.PAYMENT_RECENCY and c.last_payment_days_ago > w.lapsed_payment_days,
        lambda c, w: f"No payment in {w.lapsed_payment_days}+ days",
    ),
    (
        lambda c, w: c.dominant is RiskFactor.PAYMENT_RECENCY,
        lambda c, w: f"No payment in {w.stale_payment_days}+ days",
    ),
]


def select_reason(contrib: RiskContributions, weights: RiskWeights = DEFAULT_WEIGHTS) -> str:
    for predicate, render in REASON_RULES:
        if predicate(contrib, weights):
            return render(contrib, weights)
    return STABLE_REASON


def score_member(member: MemberRiskInput, weights: RiskWeights = DEFAULT_WEIGHTS) -> RiskResult:
    """
    Main entry point: one scoring pass producing tier, percent and reason.

    Percent is the sum of the three contributions, rounded and clamped to
    [0, 100]. Pure: identical inputs always give identical results.
    """
    contrib = calculate_contributions(member, weights)
    percent = int(round(max(0.0, min(100.0, contrib.total))))
    result = RiskResult(
        id=member.id,
        tier=determine_tier(percent, weights),
        percent=percent,
        reason=select_reason(contrib, weights),
    )
    logger.debug(
        "Scored member",
        extra={"member_id": member.id, "risk_percent": percent, "risk_tier": result.tier.value},
    )
    return result


def score_percent(member: MemberRiskInput, weights: RiskWeights = DEFAULT_WEIGHTS) -> int:
    return score_member(member, weights).percent


def score_tier(member: MemberRiskInput, weights: RiskWeights = DEFAULT_WEIGHTS) -> RiskTier:
    return score_member(member, weights).tier


def score_reason(member: MemberRiskInput, weights: RiskWeights = DEFAULT_WEIGHTS) -> str:
    return score_member(member, weights).reason
