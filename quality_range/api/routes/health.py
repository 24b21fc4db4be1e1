"""
Health Routes
=============

FastAPI routes for health check endpoints.
"""

from fastapi import APIRouter

from quality_range.config.settings import get_settings
from quality_range.models.schemas import HealthStatus

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    """Basic health check endpoint."""
    settings = get_settings()
    return HealthStatus(
        status="healthy",
        version=settings.app_version,
        upstreams={
            "process": settings.process_service_url,
            "quality": settings.quality_service_url,
            "store": settings.store_service_url,
        },
    )
