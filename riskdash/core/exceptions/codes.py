"""Standardized error codes for riskdash exceptions."""

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes carried by :class:`DashboardError` and its subclasses."""

    # General errors
    GENERAL_ERROR = "GENERAL_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Acquisition errors
    ACQUISITION_ERROR = "ACQUISITION_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    CREDENTIAL_MISSING = "CREDENTIAL_MISSING"
    PARSE_ERROR = "PARSE_ERROR"

    # Request errors
    UNKNOWN_INDICATOR = "UNKNOWN_INDICATOR"
    UNSUPPORTED_PERIOD = "UNSUPPORTED_PERIOD"

    # Infrastructure errors
    CACHE_ERROR = "CACHE_ERROR"
    STORAGE_ERROR = "STORAGE_ERROR"


__all__ = ["ErrorCode"]
