"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from retention_engine.api.middleware import RequestIDMiddleware, MetricsMiddleware
from retention_engine.api.v1 import actions, forecast, insights, risk
from retention_engine.infrastructure.observability.logging import setup_logging
from retention_engine.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Retention Risk & Revenue Forecasting",
        description="Revenue projection, cancellation risk and retention actions for membership businesses",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(forecast.router, prefix="/v1", tags=["forecast"])
    app.include_router(risk.router, prefix="/v1", tags=["risk"])
    app.include_router(actions.router, prefix="/v1", tags=["actions"])
    app.include_router(insights.router, prefix="/v1", tags=["insights"])

    return app


app = create_app()
