"""Insights report assembly - derives per-member inputs and runs the full engine"""

import logging
from datetime import date
from typing import List, Sequence
from retention_engine.domain.actions import DEFAULT_PREVIEW_LIMIT, recommend_actions
from retention_engine.domain.commentary import benchmark_message, revenue_commentary
from retention_engine.domain.models import (
    ClientRef,
    InsightsReport,
    MemberFacts,
    MemberRiskInput,
    RenewalRow,
    RiskResult,
    RiskTier,
    WhatIfScenario,
)
from retention_engine.domain.projection import project_next_month
from retention_engine.domain.risk import DEFAULT_WEIGHTS, RiskWeights, score_member
from retention_engine.utils.date_utils import days_between, days_since
from retention_engine.utils.numbers import finite_or_zero

logger = logging.getLogger(__name__)

DEFAULT_EXPIRING_WINDOW_DAYS = 30
DEFAULT_WHAT_IF_UPLIFT_POINTS = 10.0


def derive_risk_input(member: MemberFacts, as_of: date) -> MemberRiskInput:
    """Turn stored member facts into scorer input as of a given day"""
    total = finite_or_zero(member.total_amount)
    pending = max(0.0, total - finite_or_zero(member.amount_paid))

    return MemberRiskInput(
        id=member.id,
        days_until_expiry=days_between(as_of, member.subscription_end_date),
        has_pending_balance=pending > 0,
        last_payment_days_ago=days_since(member.last_payment_date, as_of),
        pending_amount=pending,
        total_amount=total,
    )


def calculate_renewal_rate(expected_renewals: int, cohort_size: int) -> float:
    """Share of the expiring cohort expected to renew; 100 when nobody is due"""
    if cohort_size <= 0:
        return 100.0
    return round(expected_renewals / cohort_size * 100, 1)


def calculate_what_if(
    current_rate: float,
    cohort_revenue: float,
    uplift_points: float = DEFAULT_WHAT_IF_UPLIFT_POINTS,
) -> WhatIfScenario:
    """
    Revenue recovered if the renewal rate rose by uplift_points (capped at 100%).

    Example:
        rate 70%, uplift 10 -> 80%; cohort worth 5,000 -> +500
    """
    new_rate = min(100.0, current_rate + max(0.0, uplift_points))
    increase = cohort_revenue * (new_rate - current_rate) / 100
    return WhatIfScenario(
        current_rate_percent=current_rate,
        new_rate_percent=new_rate,
        revenue_increase=increase,
    )


def build_insights_report(
    members: Sequence[MemberFacts],
    monthly_revenue: Sequence[float],
    as_of: date,
    weights: RiskWeights = DEFAULT_WEIGHTS,
    expiring_window_days: int = DEFAULT_EXPIRING_WINDOW_DAYS,
    preview_limit: int = DEFAULT_PREVIEW_LIMIT,
    what_if_uplift_points: float = DEFAULT_WHAT_IF_UPLIFT_POINTS,
) -> InsightsReport:
    """
    Main entry point: everything the insights page shows for one tenant.

    Flow:
    1. Project next month's revenue from the trailing series
    2. Score every active member whose subscription has not already ended
    3. Size the expiring cohort (0..expiring_window_days days left)
    4. Derive revenue at risk, renewal rate and the what-if scenario
    5. Recommend actions and render commentary

    as_of is explicit so the report never reads the clock.
    """
    projection = project_next_month(monthly_revenue)

    scored: List[tuple[MemberFacts, MemberRiskInput, RiskResult]] = []
    skipped_expired = 0
    for member in members:
        risk_input = derive_risk_input(member, as_of)
        if risk_input.days_until_expiry is not None and risk_input.days_until_expiry < 0:
            skipped_expired += 1
            continue
        scored.append((member, risk_input, score_member(risk_input, weights)))

    if skipped_expired:
        logger.debug("Skipped members with ended subscriptions", extra={"skipped": skipped_expired})

    at_risk_rows = [row for row in scored if row[2].tier is not RiskTier.LOW]
    at_risk_rows.sort(key=lambda row: -row[2].percent)

    cohort = [
        row
        for row in scored
        if row[1].days_until_expiry is not None and 0 <= row[1].days_until_expiry <= expiring_window_days
    ]
    cohort_revenue = sum(row[1].total_amount for row in cohort)
    revenue_at_risk = sum(row[1].total_amount for row in cohort if row[2].tier is not RiskTier.LOW)
    expected_renewals = sum(1 for row in cohort if row[2].tier is not RiskTier.HIGH)
    renewal_rate = calculate_renewal_rate(expected_renewals, len(cohort))

    renewals = [
        RenewalRow(
            id=member.id,
            full_name=member.full_name,
            plan_amount=risk_input.total_amount,
            pending_amount=risk_input.pending_amount,
            risk_percent=result.percent,
            revenue_impact=risk_input.total_amount * result.percent / 100,
        )
        for member, risk_input, result in cohort
    ]
    renewals.sort(key=lambda r: -r.revenue_impact)

    actions = recommend_actions(
        risk_clients=[
            ClientRef(id=member.id, full_name=member.full_name, risk_percent=result.percent)
            for member, _, result in at_risk_rows
        ],
        unpaid_clients=[
            ClientRef(id=member.id, full_name=member.full_name)
            for member, risk_input, _ in scored
            if risk_input.has_pending_balance
        ],
        expiring_count=len(cohort),
        preview_limit=preview_limit,
    )

    return InsightsReport(
        as_of=as_of,
        projection=projection,
        scored=[row[2] for row in scored],
        at_risk=[row[2] for row in at_risk_rows],
        actions=actions,
        renewals=renewals,
        expiring_count=len(cohort),
        expected_renewals=expected_renewals,
        renewal_rate_percent=renewal_rate,
        revenue_at_risk=revenue_at_risk,
        what_if=calculate_what_if(renewal_rate, cohort_revenue, what_if_uplift_points),
        revenue_commentary=revenue_commentary(
            projection.projected,
            projection.growth_percent,
            revenue_at_risk,
            len(cohort),
        ),
        benchmark_message=benchmark_message(renewal_rate),
    )
