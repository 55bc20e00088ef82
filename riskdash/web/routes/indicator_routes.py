"""
Indicator catalogue and series routes.
"""

from fastapi import APIRouter, Query, Request

from riskdash.core.models import IndicatorSeries
from riskdash.web.models import APIResponse, SeriesPayload
from riskdash.web.utils import get_request_id, get_services, today

router = APIRouter()


def _series_payload(series: IndicatorSeries) -> SeriesPayload:
    return SeriesPayload(
        indicator=series.indicator,
        period=series.period.value,
        value_field=series.value_field,
        zscore_field=series.zscore_field,
        window=series.window_size,
        display_start=series.display_start.isoformat(),
        display_end=series.display_end.isoformat(),
        dropped_records=series.dropped_records,
        records=series.to_records(),
    )


@router.get("/indicators", response_model=APIResponse)
async def list_indicators(request: Request) -> APIResponse:
    """List every indicator with its offered periods and sources."""
    services = get_services(request)
    return APIResponse(
        success=True,
        data=services.indicators.catalogue(),
        request_id=get_request_id(request),
    )


@router.get("/{name}/history", response_model=APIResponse)
async def indicator_history(
    request: Request,
    name: str,
    period: str | None = Query(None, description="Display period (1y, 2y, 5y, 10y, max)"),
) -> APIResponse:
    """
    Scored history of one indicator.

    - **name**: indicator name, e.g. ``hy-spread``
    - **period**: display period; defaults to the indicator's default
    """
    services = get_services(request)
    series = await services.indicators.history(name, period, today(request))
    return APIResponse(
        success=True,
        data=_series_payload(series).model_dump(),
        message=f"{len(series)} records",
        request_id=get_request_id(request),
    )


@router.get("/{name}/latest", response_model=APIResponse)
async def indicator_latest(request: Request, name: str) -> APIResponse:
    """Most recent record of one indicator."""
    services = get_services(request)
    latest = await services.indicators.latest(name, today(request))
    return APIResponse(success=True, data=latest, request_id=get_request_id(request))
