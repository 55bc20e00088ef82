"""Logging utilities for monitoring and debugging."""

from riskdash.core.logging.config import LogConfig
from riskdash.core.logging.logger import (
    configure_logging,
    current_trace_id,
    log_context,
    logger,
)

__all__ = [
    "LogConfig",
    "current_trace_id",
    "configure_logging",
    "log_context",
    "logger",
]
