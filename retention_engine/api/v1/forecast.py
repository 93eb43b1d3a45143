"""POST /v1/forecast/projection - Next-month revenue projection"""

from fastapi import APIRouter

from retention_engine.api.v1.schemas import ProjectionRequest, ProjectionResponse
from retention_engine.domain.projection import project_next_month

router = APIRouter()


@router.post("/forecast/projection", response_model=ProjectionResponse)
def create_projection(request_body: ProjectionRequest):
    """Extrapolate next month's revenue from the trailing monthly series"""
    result = project_next_month(request_body.monthly_revenue)
    return ProjectionResponse(projected=result.projected, growth_percent=result.growth_percent)
