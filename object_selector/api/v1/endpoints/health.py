"""Health check endpoint. No dependencies; used for liveness probes."""

from fastapi import APIRouter

from object_selector.core.config import get_settings
from object_selector.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(version=get_settings().app_version)
