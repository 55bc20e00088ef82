"""riskdash core exception classes."""

from typing import Any

from riskdash.core.exceptions.codes import ErrorCode


class DashboardError(Exception):
    """Base class for every error raised by riskdash."""

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.GENERAL_ERROR.value,
        details: dict[str, Any] | None = None,
    ):
        """Initialise the error.

        Args:
            message: human readable message
            error_code: one of :class:`ErrorCode` values
            details: structured context for logs and error payloads
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class AcquisitionError(DashboardError):
    """A data provider could not deliver a series.

    Fatal for the whole indicator request: no partial series is returned.
    """

    def __init__(
        self,
        message: str,
        provider_name: str,
        error_code: str = ErrorCode.ACQUISITION_ERROR.value,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        super_details.setdefault("provider", provider_name)
        super().__init__(message, error_code, super_details)
        self.provider_name = provider_name


class NetworkError(AcquisitionError):
    """Transport failure or non-2xx response from a provider."""

    def __init__(
        self,
        message: str,
        provider_name: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if status_code is not None:
            super_details["status_code"] = status_code
        super().__init__(message, provider_name, ErrorCode.NETWORK_ERROR.value, super_details)
        self.status_code = status_code


class CredentialError(AcquisitionError):
    """A provider credential (API key) is not configured."""

    def __init__(
        self,
        message: str,
        provider_name: str,
        credential: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if credential:
            super_details["credential"] = credential
        super().__init__(message, provider_name, ErrorCode.CREDENTIAL_MISSING.value, super_details)
        self.credential = credential


class ParseError(AcquisitionError):
    """A provider document could not be interpreted at all.

    Single bad rows are dropped by the adapters; this is raised only when the
    document layout itself is unrecognisable.
    """

    def __init__(
        self,
        message: str,
        provider_name: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, provider_name, ErrorCode.PARSE_ERROR.value, details)


class UnknownIndicatorError(DashboardError):
    """Requested indicator is not part of the catalogue."""

    def __init__(self, name: str, available: list[str] | None = None):
        details: dict[str, Any] = {"indicator": name}
        if available:
            details["available"] = available
        super().__init__(f"Unknown indicator '{name}'", ErrorCode.UNKNOWN_INDICATOR.value, details)
        self.name = name


class UnsupportedPeriodError(DashboardError):
    """Requested display period is invalid or not offered by the indicator."""

    def __init__(self, period: str, supported: list[str] | None = None):
        details: dict[str, Any] = {"period": period}
        if supported:
            details["supported"] = supported
        allowed = ", ".join(supported or [])
        message = f"Unsupported period '{period}'"
        if allowed:
            message = f"{message}. Allowed values: {allowed}"
        super().__init__(message, ErrorCode.UNSUPPORTED_PERIOD.value, details)
        self.period = period


class CacheError(DashboardError):
    """Cache related failure."""

    def __init__(
        self,
        message: str,
        cache_type: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if cache_type:
            super_details["cache_type"] = cache_type
        super().__init__(message, ErrorCode.CACHE_ERROR.value, super_details)


class StorageError(DashboardError):
    """Persistence layer failure."""

    def __init__(
        self,
        message: str,
        table: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super_details = details or {}
        if table:
            super_details["table"] = table
        super().__init__(message, ErrorCode.STORAGE_ERROR.value, super_details)
