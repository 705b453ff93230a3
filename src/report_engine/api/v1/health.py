"""Health check endpoint."""

from fastapi import APIRouter

from report_engine import __version__
from report_engine.schemas.common import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for monitoring and load balancers."""
    return HealthResponse(status="healthy", version=__version__)
