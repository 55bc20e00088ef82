"""SPX put/call window command."""

from __future__ import annotations

import typer

from .utils import get_services, parse_as_of, prepare_output, run_with_services

putcall_app = typer.Typer(help="SPX put/call daily statistics.")

WINDOW_COLUMNS = ["date", "ratio", "callVolume", "putVolume", "totalVolume"]


def register(app: typer.Typer) -> None:
    app.add_typer(putcall_app, name="putcall", help="SPX put/call daily statistics")


@putcall_app.command("window")
def window_command(
    ctx: typer.Context,
    as_of: str | None = typer.Option(None, "--as-of", help="Reference date (YYYY-MM-DD)."),
) -> None:
    """Print stored figures for the seven trading days before the reference date."""

    end = parse_as_of(as_of)
    formatter, stream, stack, _ = prepare_output(ctx)
    try:
        rows = run_with_services(get_services, lambda services: services.putcall.window(end))
        formatter.render([row.to_record() for row in rows], stream=stream, columns=WINDOW_COLUMNS)
    finally:
        stack.close()


__all__ = ["register", "putcall_app", "window_command"]
