"""
Health check endpoints.
"""

from datetime import datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ...core.config import get_settings
from ..schemas.common import ApiResponse
from ..utils.responses import ok

router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    timestamp: datetime
    version: str
    service: str


@router.get("/", response_model=ApiResponse[HealthResponse])
async def health_check(request: Request):
    """
    Health check endpoint.

    Returns the current status of the service.
    """
    settings = get_settings()
    return ok(request, data=HealthResponse(
        status="healthy",
        timestamp=datetime.utcnow(),
        version=settings.app_version,
        service=settings.app_name,
    ), message="OK")


@router.get("/ready", response_model=ApiResponse[dict])
async def readiness_check(request: Request):
    """
    Readiness check endpoint.

    The pipeline always answers (keyword extraction needs no collaborator),
    so readiness reports which optional collaborators are configured.
    """
    settings = get_settings()
    checks = {
        "database": "configured" if settings.database.enabled else "not_configured",
        "azure_openai": "configured" if settings.azure_openai.is_configured else "not_configured",
        "workflow_webhook": "configured" if settings.webhook.enabled else "not_configured",
        "extraction": "ok",
    }
    return ok(request, data={"ready": True, "checks": checks}, message="ready")


@router.get("/live", response_model=ApiResponse[dict])
async def liveness_check(request: Request):
    """Liveness check endpoint."""
    return ok(request, data={"status": "alive", "timestamp": datetime.utcnow().isoformat()}, message="OK")
