"""Service health routes."""

from __future__ import annotations

from datetime import datetime
from datetime import timezone
import time

from fastapi import APIRouter
from fastapi import Depends
from pydantic import BaseModel

from tourfront.core.config import FrontendSettings
from tourfront.core.config import get_settings
from tourfront.core.errors import MethodNotAllowedError

router = APIRouter(prefix="/api", tags=["health"])

_STARTED_AT = time.monotonic()


class HealthResponse(BaseModel):
    """Liveness payload for load balancers and uptime checks."""

    status: str
    timestamp: datetime
    uptime: float
    environment: str
    version: str


@router.get("/health", response_model=HealthResponse)
def health(settings: FrontendSettings = Depends(get_settings)) -> HealthResponse:
    """Report process liveness with uptime and deployment metadata."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        uptime=round(time.monotonic() - _STARTED_AT, 3),
        environment=settings.environment,
        version=settings.version,
    )


@router.api_route("/health", methods=["POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
def health_method_not_allowed() -> None:
    raise MethodNotAllowedError()
