"""
Health Check API endpoints.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from src.api.dependencies import get_orchestrator_dep
from src.api.schemas import HealthResponse
from src.config import settings
from src.modules.review_analysis import Orchestrator

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/",
    response_model=HealthResponse,
    summary="Health check",
    description="Check whether the inference service is configured.",
)
async def health_check(orchestrator: Orchestrator = Depends(get_orchestrator_dep)):
    """
    Health check of the analysis pipeline.

    No inference call is made; only the presence of credentials is checked.
    """
    services = {}

    try:
        services["inference"] = orchestrator.inference_client.is_configured()
    except Exception as e:
        logger.error(f"Inference health check failed: {e}")
        services["inference"] = False

    overall_status = "healthy" if all(services.values()) else "degraded"

    return HealthResponse(
        status=overall_status,
        timestamp=datetime.now(timezone.utc),
        services=services,
        version=settings.app_version,
    )


@router.get(
    "/live",
    summary="Liveness check",
    description="Simple liveness check for Kubernetes.",
)
async def liveness():
    """Simple liveness check - returns 200 if server is running."""
    return {"status": "alive"}
