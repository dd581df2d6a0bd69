"""Shared utilities for structured logging."""

from .logging import (
    ParseOutcome,
    configure_json_logger,
    flush_handlers,
    generate_trace_id,
    log_event,
    log_parse_outcome,
)

__all__ = [
    "ParseOutcome",
    "configure_json_logger",
    "flush_handlers",
    "generate_trace_id",
    "log_event",
    "log_parse_outcome",
]
