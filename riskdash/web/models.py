"""
Web API response models.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(UTC)


class APIResponse(BaseModel):
    """Standard API response envelope."""

    success: bool = Field(..., description="Whether the request succeeded")
    data: Any | None = Field(None, description="Response payload")
    message: str | None = Field(None, description="Human readable message")
    timestamp: datetime = Field(default_factory=_utcnow, description="Response timestamp")
    request_id: str | None = Field(None, description="Request id for tracing")


class ErrorResponse(BaseModel):
    """Error response envelope."""

    success: bool = Field(False, description="Always false")
    error: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    details: dict[str, Any] | None = Field(None, description="Structured error context")
    timestamp: datetime = Field(default_factory=_utcnow, description="Error timestamp")
    request_id: str | None = Field(None, description="Request id for tracing")


class SeriesPayload(BaseModel):
    """Indicator history as returned by ``/api/{name}/history``."""

    indicator: str
    period: str
    value_field: str
    zscore_field: str
    window: int
    display_start: str
    display_end: str
    dropped_records: int
    records: list[dict[str, Any]]


class HealthStatus(BaseModel):
    status: str = Field(..., description="Overall status")
    version: str = Field(..., description="Service version")
    uptime: float = Field(..., description="Uptime in seconds")
    components: dict[str, str] = Field(default_factory=dict, description="Component status")
