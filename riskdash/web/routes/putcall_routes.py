"""
SPX put/call seven-day window route.
"""

from fastapi import APIRouter, Request

from riskdash.web.models import APIResponse
from riskdash.web.utils import get_request_id, get_services, today

router = APIRouter()


@router.get("/putcall/window", response_model=APIResponse)
async def putcall_window(request: Request) -> APIResponse:
    """SPX + SPXW put/call figures for the last seven trading days."""
    services = get_services(request)
    rows = await services.putcall.window(today(request))
    return APIResponse(
        success=True,
        data=[row.to_record() for row in rows],
        message=f"{len(rows)} trading days",
        request_id=get_request_id(request),
    )
