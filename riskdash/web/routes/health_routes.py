"""
Health check route.
"""

import time

from fastapi import APIRouter, Request

from riskdash import __version__
from riskdash.web.models import APIResponse, HealthStatus
from riskdash.web.utils import get_request_id, get_services

router = APIRouter()


@router.get("/health", response_model=APIResponse)
async def health_check(request: Request) -> APIResponse:
    """Basic liveness check with component summary."""
    services = get_services(request)
    components = {"indicators": "ok", "putcall": "ok"}
    if services.registry is not None:
        components["providers"] = ",".join(services.registry.names())
    if services.config.providers.fred_api_key is None:
        components["fred"] = "missing api key"

    status = HealthStatus(
        status="healthy",
        version=__version__,
        uptime=time.monotonic() - request.app.state.start_time,
        components=components,
    )
    return APIResponse(success=True, data=status.model_dump(), request_id=get_request_id(request))
