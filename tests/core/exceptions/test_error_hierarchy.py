"""Tests for the error taxonomy."""

import pytest

from riskdash.core.exceptions import (
    AcquisitionError,
    CredentialError,
    DashboardError,
    ErrorCode,
    ErrorMessageTemplate,
    NetworkError,
    ParseError,
    StorageError,
    UnknownIndicatorError,
    UnsupportedPeriodError,
    format_error_response,
)


@pytest.mark.parametrize(
    ("error", "code"),
    [
        (NetworkError("down", "fred", status_code=502), ErrorCode.NETWORK_ERROR),
        (CredentialError("no key", "fred", credential="FRED_API_KEY"), ErrorCode.CREDENTIAL_MISSING),
        (ParseError("bad csv", "cboe"), ErrorCode.PARSE_ERROR),
    ],
)
def test_acquisition_subclasses_carry_provider_and_code(error: AcquisitionError, code: ErrorCode) -> None:
    assert isinstance(error, AcquisitionError)
    assert isinstance(error, DashboardError)
    assert error.error_code == code.value
    assert error.details["provider"] == error.provider_name


def test_network_error_records_status_code() -> None:
    error = NetworkError("down", "cboe", status_code=429)

    assert error.status_code == 429
    assert error.details == {"provider": "cboe", "status_code": 429}


def test_request_errors_are_not_acquisition_errors() -> None:
    unknown = UnknownIndicatorError("vix", ["hy-spread"])
    period = UnsupportedPeriodError("3y", ["1y", "2y"])

    assert not isinstance(unknown, AcquisitionError)
    assert unknown.error_code == ErrorCode.UNKNOWN_INDICATOR.value
    assert period.message == "Unsupported period '3y'. Allowed values: 1y, 2y"
    assert period.details == {"period": "3y", "supported": ["1y", "2y"]}


def test_storage_error_names_table() -> None:
    error = StorageError("boom", table="put_call_ratios")

    assert error.details == {"table": "put_call_ratios"}
    assert str(error) == "boom"


def test_message_templates_fill_in_details() -> None:
    message = ErrorMessageTemplate.get_message(ErrorCode.CREDENTIAL_MISSING, credential="FRED_API_KEY", provider="fred")

    assert message == "Credential FRED_API_KEY is not configured for fred"
    assert "error code: NETWORK_ERROR" in ErrorMessageTemplate.get_message(ErrorCode.NETWORK_ERROR)


def test_format_error_response_shape() -> None:
    payload = format_error_response(ErrorCode.UNKNOWN_INDICATOR, indicator="vix")

    assert payload["error"]["code"] == "UNKNOWN_INDICATOR"
    assert payload["error"]["message"] == "Unknown indicator 'vix'"
    assert payload["error"]["details"] == {"indicator": "vix"}
    assert "timestamp" in payload["error"]
