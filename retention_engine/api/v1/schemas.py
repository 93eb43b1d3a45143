"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from retention_engine.domain.models import ActionType, RiskTier


class ProjectionRequest(BaseModel):
    """Request body for POST /v1/forecast/projection"""

    monthly_revenue: List[float] = Field(
        default_factory=list,
        description="Monthly revenue totals, oldest first (typically the last 6 months)",
    )


class ProjectionResponse(BaseModel):
    projected: float
    growth_percent: float


class MemberRiskInputSchema(BaseModel):
    """One active member's risk inputs"""

    id: str = Field(..., min_length=1)
    days_until_expiry: Optional[int] = None
    has_pending_balance: bool = False
    last_payment_days_ago: Optional[int] = Field(None, ge=0)
    pending_amount: float = Field(0.0, ge=0)
    total_amount: float = Field(0.0, ge=0)


class RiskScoreRequest(BaseModel):
    """Request body for POST /v1/risk/score"""

    members: List[MemberRiskInputSchema]


class RiskResultSchema(BaseModel):
    id: str
    tier: RiskTier
    percent: int
    reason: str


class RiskScoreResponse(BaseModel):
    results: List[RiskResultSchema]


class ClientRefSchema(BaseModel):
    id: str = Field(..., min_length=1)
    full_name: str
    risk_percent: Optional[int] = Field(None, ge=0, le=100)


class RecommendActionsRequest(BaseModel):
    """Request body for POST /v1/actions/recommend"""

    risk_clients: List[ClientRefSchema] = Field(default_factory=list)
    unpaid_clients: List[ClientRefSchema] = Field(default_factory=list)
    expiring_count: int = Field(0, ge=0)


class PreviewEntrySchema(BaseModel):
    name: str
    meta: Optional[str] = None


class RecommendedActionSchema(BaseModel):
    id: str
    type: ActionType
    label: str
    sublabel: Optional[str] = None
    count: int
    client_ids: List[str]
    preview: List[PreviewEntrySchema]


class RecommendActionsResponse(BaseModel):
    actions: List[RecommendedActionSchema]


class DashboardSnapshotSchema(BaseModel):
    revenue_this_month: float = 0.0
    revenue_growth_percent: float = 0.0
    monthly_revenue: List[float] = Field(default_factory=list)
    expired_clients: int = Field(0, ge=0)
    pending_payments: float = Field(0.0, ge=0)
    active_clients: int = Field(0, ge=0)


class DashboardInsightsRequest(BaseModel):
    """Request body for POST /v1/insights/dashboard"""

    snapshot: DashboardSnapshotSchema


class DashboardInsightsResponse(BaseModel):
    insights: List[str]


class MemberFactsSchema(BaseModel):
    """Active member as stored by the membership system"""

    id: str = Field(..., min_length=1)
    full_name: str
    subscription_end_date: Optional[date] = None
    total_amount: float = Field(0.0, ge=0)
    amount_paid: float = Field(0.0, ge=0)
    last_payment_date: Optional[date] = None


class InsightsReportRequest(BaseModel):
    """Request body for POST /v1/insights/report"""

    as_of: Optional[date] = Field(None, description="Report date (default: today)")
    monthly_revenue: List[float] = Field(default_factory=list)
    members: List[MemberFactsSchema] = Field(default_factory=list)


class RenewalRowSchema(BaseModel):
    id: str
    full_name: str
    plan_amount: float
    pending_amount: float
    risk_percent: int
    revenue_impact: float


class WhatIfSchema(BaseModel):
    current_rate_percent: float
    new_rate_percent: float
    revenue_increase: float


class InsightsReportResponse(BaseModel):
    as_of: date
    projection: ProjectionResponse
    at_risk: List[RiskResultSchema]
    actions: List[RecommendedActionSchema]
    renewals: List[RenewalRowSchema]
    expiring_count: int
    expected_renewals: int
    renewal_rate_percent: float
    revenue_at_risk: float
    what_if: WhatIfSchema
    revenue_commentary: str
    benchmark_message: str
