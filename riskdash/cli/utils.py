"""Helpers shared across CLI commands."""

from __future__ import annotations

import asyncio
import json
import sys
from collections.abc import Awaitable, Callable
from contextlib import ExitStack
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Mapping, Sequence, TextIO, TypeVar

import typer

from riskdash.core.config import ConfigManager
from riskdash.core.exceptions import (
    AcquisitionError,
    DashboardError,
    ErrorCode,
    ErrorMessageTemplate,
    UnknownIndicatorError,
    UnsupportedPeriodError,
)
from riskdash.core.services import ServiceContainer, build_services

from .constants import ACQUISITION_EXIT_CODE, SYSTEM_EXIT_CODE, VALIDATION_EXIT_CODE
from .formatters import OutputFormatter, create_formatter

T = TypeVar("T")


@dataclass(slots=True)
class CLIOptions:
    """Resolved options derived from the Typer context."""

    format: str = "table"
    output_path: Path | None = None
    no_color: bool = False


def get_cli_options(ctx: typer.Context) -> CLIOptions:
    ctx.ensure_object(dict)
    data = ctx.obj or {}
    return CLIOptions(
        format=str(data.get("format", "table")),
        output_path=data.get("output_path"),
        no_color=bool(data.get("no_color", False)),
    )


def prepare_output(ctx: typer.Context) -> tuple[OutputFormatter, TextIO, ExitStack, CLIOptions]:
    """Resolve formatter and writable stream for the current command."""

    options = get_cli_options(ctx)
    try:
        formatter = create_formatter(options.format, no_color=options.no_color)
    except ValueError as exc:
        emit_error(str(exc), "INVALID_FORMAT")
        raise typer.Exit(code=VALIDATION_EXIT_CODE) from exc

    stack = ExitStack()
    stream: TextIO
    if options.output_path is not None:
        try:
            stream = stack.enter_context(open(options.output_path, "w", encoding="utf-8"))
        except OSError as exc:
            stack.close()
            emit_error(f"Unable to open '{options.output_path}': {exc}", "OUTPUT_WRITE_ERROR")
            raise typer.Exit(code=VALIDATION_EXIT_CODE) from exc
    else:
        stream = sys.stdout

    return formatter, stream, stack, options


def emit_error(message: str, code: str, *, details: Mapping[str, object] | None = None) -> None:
    """Print a structured error payload to stderr."""

    payload: dict[str, object] = {"code": code, "message": message}
    if details:
        payload["details"] = _sanitize_details(details)
    typer.echo(json.dumps(payload, ensure_ascii=False, default=str), err=True)


def _sanitize_details(details: Mapping[str, object]) -> Mapping[str, object]:
    sanitized: dict[str, object] = {}
    for key, value in details.items():
        if isinstance(value, (str, int, float, bool)) or value is None:
            sanitized[key] = value
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
            sanitized[key] = [str(item) for item in value]
        else:
            sanitized[key] = str(value)
    return sanitized


def exit_code_for(error: DashboardError) -> int:
    if isinstance(error, (UnknownIndicatorError, UnsupportedPeriodError)):
        return VALIDATION_EXIT_CODE
    if isinstance(error, AcquisitionError):
        return ACQUISITION_EXIT_CODE
    return SYSTEM_EXIT_CODE


def parse_as_of(value: str | None) -> date:
    """``--as-of`` as a date; today when omitted."""

    if value is None:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid date '{value}', expected YYYY-MM-DD", param_hint="--as-of") from exc


def get_services() -> ServiceContainer:
    """Factory hook for the service container used by commands."""

    return build_services(ConfigManager().get_config())


def run_with_services(
    factory: Callable[[], ServiceContainer],
    action: Callable[[ServiceContainer], Awaitable[T]],
) -> T:
    """Run ``action`` against freshly built services, mapping domain errors to exit codes."""

    async def _run() -> T:
        services = factory()
        try:
            return await action(services)
        finally:
            await services.aclose()

    try:
        return asyncio.run(_run())
    except DashboardError as error:
        emit_error(error.message, error.error_code, details=error.details)
        raise typer.Exit(code=exit_code_for(error)) from error
    except Exception as error:  # pragma: no cover
        emit_error(
            ErrorMessageTemplate.get_message(ErrorCode.INTERNAL_ERROR),
            ErrorCode.INTERNAL_ERROR.value,
            details={"type": type(error).__name__, "reason": str(error)},
        )
        raise typer.Exit(code=SYSTEM_EXIT_CODE) from error


__all__ = [
    "CLIOptions",
    "emit_error",
    "exit_code_for",
    "get_cli_options",
    "get_services",
    "parse_as_of",
    "prepare_output",
    "run_with_services",
]
