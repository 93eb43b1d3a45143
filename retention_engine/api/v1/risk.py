"""POST /v1/risk/score - Per-member cancellation risk"""

from fastapi import APIRouter, Depends

from retention_engine.api.dependencies import get_risk_weights
from retention_engine.api.v1.schemas import RiskResultSchema, RiskScoreRequest, RiskScoreResponse
from retention_engine.domain.models import MemberRiskInput
from retention_engine.domain.risk import RiskWeights, score_member
from retention_engine.infrastructure.observability.metrics import record_risk_results

router = APIRouter()


@router.post("/risk/score", response_model=RiskScoreResponse)
def score_members(
    request_body: RiskScoreRequest,
    weights: RiskWeights = Depends(get_risk_weights),
):
    """
    Score each member independently.

    Returns:
        One result per member, in request order (low tier included)
    """
    results = [score_member(MemberRiskInput(**m.model_dump()), weights) for m in request_body.members]
    record_risk_results(results)

    return RiskScoreResponse(
        results=[
            RiskResultSchema(id=r.id, tier=r.tier, percent=r.percent, reason=r.reason)
            for r in results
        ]
    )
