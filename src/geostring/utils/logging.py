"""JSON Lines logging for coordinate parsing runs.

Each record is a single JSON object. Parse outcomes are flattened into the
payload (``input``, ``line``, ``status`` and either ``value`` or the error
``kind``, ``position``, ``expected``, ``field``) so that a batch log can be
filtered by line number or failure kind without re-parsing messages.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional
from uuid import uuid4

from ..exceptions import GeoStringError, RangeError, UnexpectedValueError

__all__ = [
    "JsonLogFormatter",
    "ParseOutcome",
    "configure_json_logger",
    "flush_handlers",
    "generate_trace_id",
    "log_event",
    "log_parse_outcome",
]


@dataclass(frozen=True)
class ParseOutcome:
    """Result of parsing one coordinate string, successful or not."""

    input: str
    line: Optional[int] = None
    value: Any = None
    error: Optional[GeoStringError] = None

    @property
    def status(self) -> str:
        return "rejected" if self.error is not None else "parsed"

    def as_fields(self) -> Dict[str, Any]:
        fields: Dict[str, Any] = {"input": self.input, "status": self.status}
        if self.line is not None:
            fields["line"] = self.line
        if self.error is None:
            fields["value"] = self.value
            return fields

        fields["kind"] = self.error.kind
        if isinstance(self.error, UnexpectedValueError):
            fields["position"] = self.error.position
            fields["expected"] = self.error.expected
        elif isinstance(self.error, RangeError):
            fields["field"] = self.error.field
        return fields


class JsonLogFormatter(logging.Formatter):
    """Render records as one JSON object, merging parse outcome fields."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: MutableMapping[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "event": getattr(record, "event", None) or message,
            "message": message,
        }

        trace_id = getattr(record, "trace_id", None)
        if trace_id:
            payload["trace_id"] = trace_id

        outcome = getattr(record, "outcome", None)
        if isinstance(outcome, ParseOutcome):
            payload.update(outcome.as_fields())

        fields = getattr(record, "fields", None)
        if isinstance(fields, Mapping):
            payload.update(fields)

        return json.dumps(payload, ensure_ascii=False)


def configure_json_logger(log_path: Path | None, level: int = logging.INFO) -> logging.Logger:
    """Route the ``geostring`` logger hierarchy to ``log_path`` (or nowhere)."""

    logger = logging.getLogger("geostring")
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler: logging.Handler
    if log_path is None:
        handler = logging.NullHandler()
    else:
        log_path = Path(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
        handler.setFormatter(JsonLogFormatter())

    handler.setLevel(level)
    logger.addHandler(handler)
    return logger


def flush_handlers(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        handler.flush()


def generate_trace_id() -> str:
    """Return an identifier correlating all events of one CLI run."""

    return uuid4().hex


def log_event(
    logger: logging.Logger,
    event: str,
    *,
    trace_id: str | None = None,
    level: int = logging.INFO,
    **fields: Any,
) -> str:
    """Emit a run-level event such as ``batch.start``; return its trace id."""

    event_trace_id = trace_id or generate_trace_id()
    logger.log(level, event, extra={"trace_id": event_trace_id, "event": event, "fields": fields})
    return event_trace_id


def log_parse_outcome(
    logger: logging.Logger,
    outcome: ParseOutcome,
    *,
    trace_id: str | None = None,
    level: int = logging.INFO,
) -> None:
    """Emit ``parse.parsed`` or ``parse.rejected`` for ``outcome``."""

    if not logger.isEnabledFor(level):
        return

    if outcome.error is None:
        message = f"Parsed {outcome.input!r} -> {outcome.value!r}"
    else:
        message = f"Rejected {outcome.input!r}: {outcome.error}"

    logger.log(
        level,
        message,
        extra={"trace_id": trace_id, "event": f"parse.{outcome.status}", "outcome": outcome},
    )
