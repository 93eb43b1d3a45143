"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request

from retention_engine.config import Settings, settings
from retention_engine.domain.risk import RiskWeights


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_settings() -> Settings:
    """Provide application settings (overridable in tests)"""
    return settings


def get_risk_weights(app_settings: Settings = Depends(get_settings)) -> RiskWeights:
    """Provide risk weights built from the active settings"""
    return app_settings.risk_weights()
