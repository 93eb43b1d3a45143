"""Domain models - pure Python dataclasses for retention and revenue insights"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


class RiskTier(str, Enum):
    """Coarse cancellation-risk bucket derived from the risk percent"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ActionType(str, Enum):
    """Batched intervention kinds, declared in tie-break priority order"""

    SEND_REMINDER = "send_reminder"
    FOLLOW_UP_PAYMENT = "follow_up_payment"
    OFFER_DISCOUNT = "offer_discount"


@dataclass(frozen=True)
class ProjectionResult:
    """Next-month revenue projection"""

    projected: float
    growth_percent: float  # vs. the most recent observed month, full precision


@dataclass(frozen=True)
class MemberRiskInput:
    """Per-member facts the risk scorer works from"""

    id: str
    days_until_expiry: Optional[int] = None  # None = no end date, negative = expired
    has_pending_balance: bool = False
    last_payment_days_ago: Optional[int] = None
    pending_amount: float = 0.0
    total_amount: float = 0.0


@dataclass(frozen=True)
class RiskResult:
    """Output of a single scoring pass"""

    id: str
    tier: RiskTier
    percent: int
    reason: str


@dataclass(frozen=True)
class ClientRef:
    """Member row fed to the action recommender"""

    id: str
    full_name: str
    risk_percent: Optional[int] = None


@dataclass(frozen=True)
class PreviewEntry:
    """One named member shown under a recommended action"""

    name: str
    meta: Optional[str] = None


@dataclass(frozen=True)
class RecommendedAction:
    """Batched intervention with a bounded preview of affected members"""

    id: str
    type: ActionType
    label: str
    count: int
    sublabel: Optional[str] = None
    client_ids: List[str] = field(default_factory=list)
    preview: List[PreviewEntry] = field(default_factory=list)


@dataclass(frozen=True)
class DashboardSnapshot:
    """Aggregate figures the dashboard insight bullets are derived from"""

    revenue_this_month: float = 0.0
    revenue_growth_percent: float = 0.0
    monthly_revenue: List[float] = field(default_factory=list)
    expired_clients: int = 0
    pending_payments: float = 0.0
    active_clients: int = 0


@dataclass(frozen=True)
class MemberFacts:
    """Active member as loaded from storage by the reporting layer"""

    id: str
    full_name: str
    subscription_end_date: Optional[date] = None
    total_amount: float = 0.0
    amount_paid: float = 0.0
    last_payment_date: Optional[date] = None


@dataclass(frozen=True)
class RenewalRow:
    """Expiring member with the revenue their renewal is worth"""

    id: str
    full_name: str
    plan_amount: float
    pending_amount: float
    risk_percent: int
    revenue_impact: float


@dataclass(frozen=True)
class WhatIfScenario:
    """Revenue gained if the renewal rate improved by a fixed number of points"""

    current_rate_percent: float
    new_rate_percent: float
    revenue_increase: float


@dataclass(frozen=True)
class InsightsReport:
    """Everything the insights page renders for one tenant"""

    as_of: date
    projection: ProjectionResult
    scored: List[RiskResult]  # every member scored, input order, all tiers
    at_risk: List[RiskResult]
    actions: List[RecommendedAction]
    renewals: List[RenewalRow]
    expiring_count: int
    expected_renewals: int
    renewal_rate_percent: float
    revenue_at_risk: float
    what_if: WhatIfScenario
    revenue_commentary: str
    benchmark_message: str
