"""POST /v1/actions/recommend - Ranked retention actions"""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from retention_engine.api.dependencies import get_settings
from retention_engine.api.v1.schemas import (
    RecommendActionsRequest,
    RecommendActionsResponse,
    RecommendedActionSchema,
)
from retention_engine.config import Settings
from retention_engine.domain.actions import recommend_actions
from retention_engine.domain.models import ClientRef
from retention_engine.infrastructure.observability.metrics import record_actions

router = APIRouter()


@router.post("/actions/recommend", response_model=RecommendActionsResponse)
def create_recommendations(
    request_body: RecommendActionsRequest,
    app_settings: Settings = Depends(get_settings),
):
    actions = recommend_actions(
        risk_clients=[ClientRef(**c.model_dump()) for c in request_body.risk_clients],
        unpaid_clients=[ClientRef(**c.model_dump()) for c in request_body.unpaid_clients],
        expiring_count=request_body.expiring_count,
        preview_limit=app_settings.preview_limit,
    )
    record_actions(actions)

    return RecommendActionsResponse(actions=[RecommendedActionSchema(**asdict(a)) for a in actions])
