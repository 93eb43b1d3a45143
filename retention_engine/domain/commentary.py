"""Templated narrative commentary for revenue, renewal benchmarks and the dashboard"""

from dataclasses import dataclass
from typing import Callable, List
from retention_engine.domain.models import DashboardSnapshot
from retention_engine.utils.numbers import finite_or_zero, format_amount, pluralize

MATERIAL_RISK_SHARE = 0.2
POSITIVE_GROWTH_PERCENT = 5.0
DECLINING_GROWTH_PERCENT = -10.0

ABOVE_TYPICAL_RENEWAL = 85.0
TYPICAL_RENEWAL = 60.0

REVENUE_DROP_RATIO = 0.85
DEFAULT_INSIGHTS_LIMIT = 3


@dataclass(frozen=True)
class RevenueFigures:
    projected: float
    growth_percent: float
    revenue_at_risk: float
    expiring_count: int

    @property
    def risk_is_material(self) -> bool:
        """At-risk revenue above 20% of the projection (any at-risk revenue if nothing is projected)"""
        if self.revenue_at_risk <= 0:
            return False
        if self.projected <= 0:
            return True
        return self.revenue_at_risk / self.projected > MATERIAL_RISK_SHARE


REVENUE_RULES: List[tuple[Callable[[RevenueFigures], bool], Callable[[RevenueFigures], str]]] = [
    (
        lambda f: f.risk_is_material and f.expiring_count > 0,
        lambda f: (
            f"Revenue likely to remain flat unless {pluralize(f.expiring_count, 'pending renewal')} convert. "
            f"{format_amount(f.revenue_at_risk)} at risk if they churn."
        ),
    ),
    (
        lambda f: f.risk_is_material,
        lambda f: (
            f"{format_amount(f.revenue_at_risk)} of revenue is tied to at-risk members. "
            "Follow up before it turns into churn."
        ),
    ),
    (
        lambda f: f.growth_percent > POSITIVE_GROWTH_PERCENT,
        lambda f: "Revenue trend is positive. Keep focusing on retention and new sign-ups.",
    ),
    (
        lambda f: f.growth_percent < DECLINING_GROWTH_PERCENT,
        lambda f: "Revenue is declining. Consider follow-ups and offers to recover at-risk members.",
    ),
    (
        lambda f: True,
        lambda f: "Revenue trend is stable. Focus on converting expiring members to retain growth.",
    ),
]


def revenue_commentary(
    projected: float,
    growth_percent: float,
    revenue_at_risk: float,
    expiring_count: int,
) -> str:
    """Pick the first revenue template whose condition holds"""
    figures = RevenueFigures(
        projected=finite_or_zero(projected),
        growth_percent=finite_or_zero(growth_percent),
        revenue_at_risk=finite_or_zero(revenue_at_risk),
        expiring_count=int(finite_or_zero(expiring_count)),
    )
    # Last rule always matches
    return next(render(figures) for predicate, render in REVENUE_RULES if predicate(figures))


BENCHMARK_BANDS = [
    (ABOVE_TYPICAL_RENEWAL, "You're renewing above typical rates. Keep it up."),
    (TYPICAL_RENEWAL, "Your renewal rate is in line with typical rates. Renewal follow-ups can lift it further."),
]
BELOW_TYPICAL_MESSAGE = "Your renewal rate is below typical. Prioritise reminders and offers for expiring members."


def benchmark_message(renewal_rate_percent: float) -> str:
    """Three bands; a rate exactly on a boundary belongs to the higher band"""
    rate = finite_or_zero(renewal_rate_percent)
    for floor, message in BENCHMARK_BANDS:
        if rate >= floor:
            return message
    return BELOW_TYPICAL_MESSAGE


def _last_two(snapshot: DashboardSnapshot) -> tuple[float, float] | None:
    series = snapshot.monthly_revenue
    if len(series) < 2:
        return None
    return finite_or_zero(series[-2]), finite_or_zero(series[-1])


def _revenue_dropped(s: DashboardSnapshot) -> bool:
    pair = _last_two(s)
    if pair is None:
        return False
    previous, last = pair
    return previous > 0 and last < previous * REVENUE_DROP_RATIO


def _revenue_up(s: DashboardSnapshot) -> bool:
    return _last_two(s) is not None and not _revenue_dropped(s) and finite_or_zero(s.revenue_growth_percent) > 0


def _revenue_flat(s: DashboardSnapshot) -> bool:
    pair = _last_two(s)
    return (
        pair is not None
        and not _revenue_dropped(s)
        and finite_or_zero(s.revenue_growth_percent) <= 0
        and pair[1] > 0
    )


def _expired_phrase(count: int) -> str:
    verb = "has" if count == 1 else "have"
    return f"{pluralize(count, 'subscription')} {verb} expired. Send reminders to recover revenue."


INSIGHT_RULES: List[tuple[Callable[[DashboardSnapshot], bool], Callable[[DashboardSnapshot], str]]] = [
    (
        _revenue_dropped,
        lambda s: "Revenue dropped compared to the previous period. "
        "Consider promotions or follow-ups to boost collections.",
    ),
    (
        _revenue_up,
        lambda s: f"Revenue is up {finite_or_zero(s.revenue_growth_percent):.0f}% vs last month. Keep up the momentum.",
    ),
    (
        _revenue_flat,
        lambda s: "Revenue trend is stable. Focus on retention and renewals to grow.",
    ),
    (
        lambda s: int(finite_or_zero(s.expired_clients)) > 0,
        lambda s: _expired_phrase(int(finite_or_zero(s.expired_clients))),
    ),
    (
        lambda s: finite_or_zero(s.pending_payments) > 0,
        lambda s: "You have pending payments. Following up with members can improve cash flow.",
    ),
]

ALL_GOOD_INSIGHT = "All looks good. Focus on retaining active members and attracting new ones."


def dashboard_insights(snapshot: DashboardSnapshot, limit: int = DEFAULT_INSIGHTS_LIMIT) -> List[str]:
    """
    Short insight bullets for the dashboard, in fixed display order.

    Every rule is checked independently; the list is capped at `limit`.
    With no rule firing, members still active get a reassuring bullet and an
    empty tenant gets an empty list (the card is hidden).
    """
    insights = [render(snapshot) for predicate, render in INSIGHT_RULES if predicate(snapshot)]

    if not insights and int(finite_or_zero(snapshot.active_clients)) > 0:
        insights.append(ALL_GOOD_INSIGHT)

    return insights[: max(0, limit)]
