"""Tests for structured logging with trace propagation."""

from __future__ import annotations

import io
import json
from collections.abc import Iterator

import pytest

from riskdash.core.logging import configure_logging, current_trace_id, log_context, logger


@pytest.fixture
def buffer() -> Iterator[io.StringIO]:
    stream = io.StringIO()
    configure_logging("DEBUG", console_stream=stream)
    yield stream
    configure_logging("WARNING")


def _read_records(stream: io.StringIO) -> list[dict[str, object]]:
    lines = [line for line in stream.getvalue().splitlines() if line.strip()]
    return [json.loads(line) for line in lines]


def test_record_carries_trace_indicator_and_context(buffer: io.StringIO) -> None:
    with log_context(trace_id="trace-123", path="/api/hy-spread/history"):
        logger.bind(indicator="hy-spread", provider="fred").info("computed")

    records = _read_records(buffer)
    assert len(records) == 1
    record = records[0]
    assert record["trace_id"] == "trace-123"
    assert record["indicator"] == "hy-spread"
    assert record["provider"] == "fred"
    assert record["level"] == "INFO"
    assert record["context"] == {"path": "/api/hy-spread/history"}


def test_trace_id_is_shared_within_context(buffer: io.StringIO) -> None:
    with log_context() as trace_id:
        logger.info("first")
        logger.info("second")
        assert current_trace_id() == trace_id

    records = _read_records(buffer)
    assert records[0]["trace_id"] == records[1]["trace_id"] == trace_id


def test_level_filters_records(buffer: io.StringIO) -> None:
    configure_logging("ERROR", console_stream=buffer)

    logger.warning("ignored")
    logger.error("kept")

    assert [r["message"] for r in _read_records(buffer)] == ["kept"]
