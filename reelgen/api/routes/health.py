"""
Health check endpoints.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, status

from reelgen.config import get_config

from ..schemas import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health Check",
    description="Check API and storage configuration status.",
)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.
    Reports "degraded" when no bucket is configured.
    """
    config = get_config()
    bucket_ok = config.storage.has_bucket

    return HealthResponse(
        status="healthy" if bucket_ok else "degraded",
        service="reelgen-api",
        version="1.0.0",
        storage_backend=config.storage_backend,
        bucket_configured=bucket_ok,
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness Probe",
    description="Kubernetes liveness probe endpoint.",
)
async def liveness() -> dict:
    """Liveness probe - always returns OK if app is running."""
    return {"status": "alive"}


@router.get(
    "/health/config",
    status_code=status.HTTP_200_OK,
    summary="Configuration Status",
    description="Check provider configuration status (does not expose actual keys).",
)
async def config_status() -> dict:
    """
    Configuration status endpoint.
    Returns which providers are configured without exposing sensitive keys.
    """
    status = get_config().validate()
    ai = status["ai"]

    return {
        "status": "configured" if status["ready_for_generation"] else "partial",
        "apis": {
            "script": "configured" if ai["script_configured"] else "missing",
            "openai_images": "configured" if ai["openai_configured"] else "not_set",
            "bing_images": "configured" if ai["bing_configured"] else "not_set",
            "runway": "configured" if ai["runway_configured"] else "missing",
            "storage_bucket": "configured" if status["storage"]["bucket_configured"] else "missing",
        },
        "capabilities": {
            "reel_generation": status["ready_for_generation"],
            "reel_feed": status["storage"]["bucket_configured"],
        },
    }
