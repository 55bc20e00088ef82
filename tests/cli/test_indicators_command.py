from __future__ import annotations

import json
from datetime import date

import pytest
from typer.testing import CliRunner

from riskdash.cli import indicators as indicators_module
from riskdash.cli.main import create_app
from riskdash.core.config import CacheConfig, DashboardConfig
from riskdash.core.exceptions import CredentialError, NetworkError
from riskdash.core.indicators.base import IndicatorSpec
from riskdash.core.models import IndicatorSeries, Period, ScoredPoint
from riskdash.core.services import IndicatorService, PutCallWindowService, ServiceContainer


class StubPipeline:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[str, Period, date]] = []

    async def run(self, spec: IndicatorSpec, period: Period, as_of: date) -> IndicatorSeries:
        self.calls.append((spec.name, period, as_of))
        if self.error is not None:
            raise self.error
        return IndicatorSeries(
            indicator=spec.name,
            period=period,
            value_field=spec.value_field,
            window_size=spec.window,
            display_start=date(2023, 6, 14),
            display_end=as_of,
            points=[
                ScoredPoint(date=date(2024, 6, 13), raw_fields={"sofr90": 5.3, "tbill3m": 5.26}, value=4.0),
                ScoredPoint(
                    date=date(2024, 6, 14),
                    raw_fields={"sofr90": 5.31, "tbill3m": 5.25},
                    value=6.0,
                    z_score=1.234,
                    window_filled=True,
                ),
            ],
            decimals=spec.field_decimals(),
        )


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _install(monkeypatch: pytest.MonkeyPatch, repository, pipeline: StubPipeline) -> None:
    config = DashboardConfig(cache=CacheConfig(enabled=False))
    services = ServiceContainer(
        config=config,
        indicators=IndicatorService(pipeline, config=config.cache),
        putcall=PutCallWindowService(None, repository, config=config.cache),
    )
    monkeypatch.setattr(indicators_module, "get_services", lambda: services)


def test_show_jsonl_output(runner: CliRunner, monkeypatch: pytest.MonkeyPatch, repository) -> None:
    pipeline = StubPipeline()
    _install(monkeypatch, repository, pipeline)

    result = runner.invoke(
        create_app(),
        ["--format", "jsonl", "indicators", "show", "sofr-spread", "--period", "1y", "--as-of", "2024-06-14"],
    )

    assert result.exit_code == 0, result.output
    rows = [json.loads(line) for line in result.stdout.splitlines() if line.strip()]
    assert rows[-1] == {"date": "2024-06-14", "sofr90": 5.31, "tbill3m": 5.25, "spread": 6, "spreadZScore": 1.23}
    assert pipeline.calls == [("sofr-spread", Period.ONE_YEAR, date(2024, 6, 14))]


def test_show_table_output(runner: CliRunner, monkeypatch: pytest.MonkeyPatch, repository) -> None:
    _install(monkeypatch, repository, StubPipeline())

    result = runner.invoke(
        create_app(),
        ["--no-color", "indicators", "show", "sofr-spread", "--as-of", "2024-06-14"],
        env={"COLUMNS": "200"},
    )

    assert result.exit_code == 0, result.output
    assert "spreadZScore" in result.stdout
    assert "2024-06-14" in result.stdout


def test_show_writes_output_file(runner: CliRunner, monkeypatch: pytest.MonkeyPatch, repository, tmp_path) -> None:
    _install(monkeypatch, repository, StubPipeline())
    target = tmp_path / "sofr.jsonl"

    result = runner.invoke(
        create_app(),
        ["--format", "jsonl", "--output", str(target), "indicators", "show", "sofr-spread", "--as-of", "2024-06-14"],
    )

    assert result.exit_code == 0, result.output
    assert len(target.read_text(encoding="utf-8").splitlines()) == 2


def test_latest_reports_window_state(runner: CliRunner, monkeypatch: pytest.MonkeyPatch, repository) -> None:
    _install(monkeypatch, repository, StubPipeline())

    result = runner.invoke(create_app(), ["-f", "jsonl", "indicators", "latest", "sofr-spread", "--as-of", "2024-06-14"])

    assert result.exit_code == 0, result.output
    row = json.loads(result.stdout.strip())
    assert row["window_filled"] is True
    assert row["spread"] == 6


def test_list_catalogue(runner: CliRunner, monkeypatch: pytest.MonkeyPatch, repository) -> None:
    _install(monkeypatch, repository, StubPipeline())

    result = runner.invoke(create_app(), ["--format", "jsonl", "indicators", "list"])

    assert result.exit_code == 0, result.output
    names = [json.loads(line)["name"] for line in result.stdout.splitlines() if line.strip()]
    assert len(names) == 11
    assert "putcall-ratio" in names


def test_unknown_indicator_exits_with_validation_code(runner: CliRunner, monkeypatch: pytest.MonkeyPatch, repository) -> None:
    pipeline = StubPipeline()
    _install(monkeypatch, repository, pipeline)

    result = runner.invoke(create_app(), ["indicators", "show", "vix"])

    assert result.exit_code == 2
    assert "UNKNOWN_INDICATOR" in result.output
    assert pipeline.calls == []


def test_unsupported_period_exits_with_validation_code(runner: CliRunner, monkeypatch: pytest.MonkeyPatch, repository) -> None:
    _install(monkeypatch, repository, StubPipeline())

    result = runner.invoke(create_app(), ["indicators", "show", "hy-spread", "--period", "max"])

    assert result.exit_code == 2
    assert "UNSUPPORTED_PERIOD" in result.output


@pytest.mark.parametrize(
    "error",
    [
        NetworkError("upstream 500", "fred", status_code=500),
        CredentialError("FRED_API_KEY is not set", "fred", credential="FRED_API_KEY"),
    ],
)
def test_acquisition_failure_exits_with_code_three(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch, repository, error: Exception
) -> None:
    _install(monkeypatch, repository, StubPipeline(error))

    result = runner.invoke(create_app(), ["indicators", "show", "hy-spread", "--as-of", "2024-06-14"])

    assert result.exit_code == 3
    assert error.error_code in result.output


def test_invalid_format_is_rejected(runner: CliRunner) -> None:
    result = runner.invoke(create_app(), ["--format", "xml", "indicators", "list"])

    assert result.exit_code == 2


def test_invalid_as_of_is_rejected(runner: CliRunner, monkeypatch: pytest.MonkeyPatch, repository) -> None:
    _install(monkeypatch, repository, StubPipeline())

    result = runner.invoke(create_app(), ["indicators", "show", "hy-spread", "--as-of", "14/06/2024"])

    assert result.exit_code == 2
