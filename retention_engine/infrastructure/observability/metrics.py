"""Prometheus metrics for monitoring risk distribution, recommended actions and request latency"""

from typing import Iterable
from prometheus_client import Counter, Histogram

from retention_engine.domain.models import RecommendedAction, RiskResult

# Report metrics
report_counter = Counter(
    "retention_reports_total",
    "Total insights reports generated",
)

risk_tier_counter = Counter(
    "retention_risk_results_total",
    "Members scored by risk tier",
    ["tier"],  # low | medium | high
)

action_counter = Counter(
    "retention_recommended_actions_total",
    "Recommended actions emitted by type",
    ["type"],  # send_reminder | follow_up_payment | offer_discount
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_risk_results(results: Iterable[RiskResult]) -> None:
    for result in results:
        risk_tier_counter.labels(tier=result.tier.value).inc()


def record_actions(actions: Iterable[RecommendedAction]) -> None:
    for action in actions:
        action_counter.labels(type=action.type.value).inc()


def record_report(actions: Iterable[RecommendedAction]) -> None:
    """Count a generated report and the actions it recommended"""
    report_counter.inc()
    record_actions(actions)
