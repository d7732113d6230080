"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from sqlguide.core.catalog import load_catalog
from sqlguide.web.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check API health status."""
    return HealthResponse(
        status="ok",
        version="0.1.0",
        topics=len(load_catalog()),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
