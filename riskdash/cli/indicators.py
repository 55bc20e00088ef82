"""Indicator commands for the riskdash CLI."""

from __future__ import annotations

import typer

from riskdash.core.exceptions import DashboardError
from riskdash.core.indicators import get_indicator
from riskdash.core.pipeline.windowing import parse_period
from riskdash.core.services import ServiceContainer

from .utils import emit_error, exit_code_for, get_services, parse_as_of, prepare_output, run_with_services

indicators_app = typer.Typer(help="Risk indicator series.")

CATALOGUE_COLUMNS = ["name", "title", "window", "default_period", "periods", "sources"]


def register(app: typer.Typer) -> None:
    """Register the indicator command group on the provided application."""

    app.add_typer(indicators_app, name="indicators", help="List and compute risk indicators")


@indicators_app.command("list")
def list_command(ctx: typer.Context) -> None:
    """List the indicator catalogue."""

    formatter, stream, stack, _ = prepare_output(ctx)
    try:
        rows = run_with_services(get_services, _catalogue)
        formatter.render(rows, stream=stream, columns=CATALOGUE_COLUMNS)
    finally:
        stack.close()


@indicators_app.command("show")
def show_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Indicator name, e.g. hy-ig-ratio."),
    period: str | None = typer.Option(None, "--period", "-p", help="Display period (1y, 2y, 5y, 10y, max)."),
    as_of: str | None = typer.Option(None, "--as-of", help="Last date of the series (YYYY-MM-DD)."),
) -> None:
    """Compute an indicator series and print one record per date."""

    end = parse_as_of(as_of)
    formatter, stream, stack, _ = prepare_output(ctx)
    try:
        _validate(name, period)
        series = run_with_services(get_services, lambda services: services.indicators.history(name, period, end))
        formatter.render(series.to_records(), stream=stream)
    finally:
        stack.close()


@indicators_app.command("latest")
def latest_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Indicator name."),
    as_of: str | None = typer.Option(None, "--as-of", help="Reference date (YYYY-MM-DD)."),
) -> None:
    """Print the most recent record of the default-period series."""

    end = parse_as_of(as_of)
    formatter, stream, stack, _ = prepare_output(ctx)
    try:
        _validate(name, None)
        payload = run_with_services(get_services, lambda services: services.indicators.latest(name, end))
        record = payload["record"]
        rows = [] if record is None else [{**record, "window_filled": payload["window_filled"]}]
        formatter.render(rows, stream=stream)
    finally:
        stack.close()


async def _catalogue(services: ServiceContainer) -> list[dict[str, object]]:
    return services.indicators.catalogue()


def _validate(name: str, period: str | None) -> None:
    # Reject bad names and periods before any service is built.
    try:
        spec = get_indicator(name)
        if period is not None:
            parse_period(period, spec.periods)
    except DashboardError as error:
        emit_error(error.message, error.error_code, details=error.details)
        raise typer.Exit(code=exit_code_for(error)) from error


__all__ = ["register", "indicators_app", "list_command", "show_command", "latest_command"]
