"""POST /v1/insights/* - Dashboard bullets and the full insights report"""

import time
import logging
from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request

from retention_engine.api.dependencies import get_request_id, get_risk_weights, get_settings
from retention_engine.api.v1.schemas import (
    DashboardInsightsRequest,
    DashboardInsightsResponse,
    InsightsReportRequest,
    InsightsReportResponse,
)
from retention_engine.config import Settings
from retention_engine.domain.commentary import dashboard_insights
from retention_engine.domain.models import DashboardSnapshot, MemberFacts
from retention_engine.domain.report import build_insights_report
from retention_engine.domain.risk import RiskWeights
from retention_engine.infrastructure.observability.logging import log_report
from retention_engine.infrastructure.observability.metrics import record_report, record_risk_results

router = APIRouter()


@router.post("/insights/dashboard", response_model=DashboardInsightsResponse)
def create_dashboard_insights(
    request_body: DashboardInsightsRequest,
    app_settings: Settings = Depends(get_settings),
):
    """
    Short insight bullets for the dashboard card.

    An empty list means the card should be hidden.
    """
    snapshot = DashboardSnapshot(**request_body.snapshot.model_dump())
    return DashboardInsightsResponse(insights=dashboard_insights(snapshot, limit=app_settings.insights_limit))


@router.post("/insights/report", response_model=InsightsReportResponse)
def create_insights_report(
    request_body: InsightsReportRequest,
    request: Request,
    app_settings: Settings = Depends(get_settings),
    weights: RiskWeights = Depends(get_risk_weights),
):
    """
    Build the full insights report for one tenant.

    Flow:
    1. Map stored member facts into domain objects
    2. Run projection, scoring, recommendations and commentary
    3. Record metrics and a structured log line
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        report = build_insights_report(
            members=[MemberFacts(**m.model_dump()) for m in request_body.members],
            monthly_revenue=request_body.monthly_revenue,
            as_of=request_body.as_of or date.today(),
            weights=weights,
            expiring_window_days=app_settings.expiring_window_days,
            preview_limit=app_settings.preview_limit,
            what_if_uplift_points=app_settings.what_if_uplift_points,
        )
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_risk_results(report.scored)
    record_report(report.actions)
    log_report(request_id, len(request_body.members), len(report.at_risk), len(report.actions), duration_ms)

    return InsightsReportResponse(**asdict(report))
