"""Exception handling module."""

from riskdash.core.exceptions.base import (
    AcquisitionError,
    CacheError,
    CredentialError,
    DashboardError,
    NetworkError,
    ParseError,
    StorageError,
    UnknownIndicatorError,
    UnsupportedPeriodError,
)
from riskdash.core.exceptions.codes import ErrorCode
from riskdash.core.exceptions.messages import ErrorMessageTemplate, format_error_response

__all__ = [
    "DashboardError",
    "AcquisitionError",
    "NetworkError",
    "CredentialError",
    "ParseError",
    "UnknownIndicatorError",
    "UnsupportedPeriodError",
    "CacheError",
    "StorageError",
    "ErrorCode",
    "ErrorMessageTemplate",
    "format_error_response",
]
