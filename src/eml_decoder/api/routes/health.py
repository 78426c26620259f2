"""
Liveness probe.
"""

import time
from fastapi import APIRouter

from ...models.api_models import HealthResponse
from ...version import API_VERSION

router = APIRouter()

_started = time.monotonic()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report that the decoder service is up, with its uptime."""
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        uptime_seconds=round(time.monotonic() - _started, 3),
    )
