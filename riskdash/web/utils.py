"""Web helper functions."""

from datetime import date

from fastapi import Request

from riskdash.core.services import ServiceContainer


def get_request_id(request: Request) -> str | None:
    """Trace id assigned by the request middleware, else the ``X-Request-ID`` header."""
    return getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def today(request: Request) -> date:
    """Current date from the application clock."""
    return request.app.state.clock()
