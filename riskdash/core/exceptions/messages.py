"""Standardized error message templates."""

from datetime import UTC, datetime
from typing import Any

from riskdash.core.exceptions.codes import ErrorCode


class ErrorMessageTemplate:
    """Default user-facing messages per error code."""

    _templates: dict[ErrorCode, str] = {
        ErrorCode.GENERAL_ERROR: "An unknown error occurred",
        ErrorCode.INTERNAL_ERROR: "Internal error",
        ErrorCode.VALIDATION_ERROR: "Validation failed: {details}",
        ErrorCode.CONFIGURATION_ERROR: "Configuration error: {details}",
        ErrorCode.ACQUISITION_ERROR: "Failed to fetch data from {provider}",
        ErrorCode.NETWORK_ERROR: "Network error while contacting {provider}",
        ErrorCode.CREDENTIAL_MISSING: "Credential {credential} is not configured for {provider}",
        ErrorCode.PARSE_ERROR: "Unrecognised document layout from {provider}",
        ErrorCode.UNKNOWN_INDICATOR: "Unknown indicator '{indicator}'",
        ErrorCode.UNSUPPORTED_PERIOD: "Unsupported period '{period}'",
        ErrorCode.CACHE_ERROR: "Cache error",
        ErrorCode.STORAGE_ERROR: "Storage error",
    }

    @classmethod
    def get_message(cls, error_code: ErrorCode, **kwargs: Any) -> str:
        """Return the formatted template for ``error_code``."""
        template = cls._templates.get(error_code, cls._templates[ErrorCode.GENERAL_ERROR])
        try:
            return template.format(**kwargs)
        except KeyError:
            return f"{cls._templates[ErrorCode.GENERAL_ERROR]} (error code: {error_code.value})"


def format_error_response(error_code: ErrorCode, message: str | None = None, **kwargs: Any) -> dict[str, Any]:
    """Build the standard error payload.

    Args:
        error_code: error code
        message: explicit message, otherwise the template for ``error_code``
        **kwargs: additional error details

    Returns:
        ``{"error": {...}}`` dictionary ready for JSON encoding
    """
    if message is None:
        message = ErrorMessageTemplate.get_message(error_code, **kwargs)

    return {
        "error": {
            "code": error_code.value,
            "message": message,
            "details": kwargs,
            "timestamp": datetime.now(UTC).isoformat(),
        }
    }


__all__ = ["ErrorMessageTemplate", "format_error_response"]
