"""Error types raised while reading coordinate strings.

Every error carries the structured data needed to explain the failure; the
human readable message is produced by :func:`render_syntax_error` and
:func:`render_range_error` so that callers can rebuild or translate it.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:  # pragma: no cover - import cycle guard for annotations only
    from .lexer import Token

__all__ = [
    "GeoStringError",
    "InvalidArgumentError",
    "RangeError",
    "UnexpectedValueError",
    "render_range_error",
    "render_syntax_error",
]

END_OF_STRING = "end of string."


def render_syntax_error(expected: str, found: Optional[str], position: int, value: str) -> str:
    """Build the syntax error message.

    ``found`` is the literal text of the offending token, or ``None`` when the
    input was exhausted (``position`` is then ``-1``).
    """

    found_text = END_OF_STRING if found is None else f'"{found}"'
    return (
        f"[Syntax Error] line 0, col {position}: Error: Expected {expected}, "
        f'got {found_text} in value "{value}"'
    )


def render_range_error(field: str, high: int, low: Optional[int], value: str) -> str:
    """Build the range error message for ``field`` (Degrees, Minutes or Seconds)."""

    if low is None:
        bounds = f"greater than {high}"
    else:
        bounds = f"out of range {low} to {high}"
    return f'[Range Error] Error: {field} {bounds} in value "{value}"'


class GeoStringError(Exception):
    """Base class for every error raised by geostring."""

    kind = "error"

    def as_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "message": str(self)}


class UnexpectedValueError(GeoStringError, ValueError):
    """The token stream does not match the coordinate grammar."""

    kind = "syntax"

    def __init__(self, expected: str, found: Optional["Token"], value: str) -> None:
        self.expected = expected
        self.found = found
        self.position = found.position if found is not None else -1
        self.value = value
        super().__init__(
            render_syntax_error(expected, found.raw if found is not None else None, self.position, value)
        )

    def as_dict(self) -> Dict[str, Any]:
        payload = super().as_dict()
        payload.update(
            {
                "expected": self.expected,
                "found": self.found.raw if self.found is not None else None,
                "position": self.position,
                "value": self.value,
            }
        )
        return payload


class RangeError(GeoStringError, ValueError):
    """A well-formed value lies outside its physically valid range."""

    kind = "range"

    def __init__(self, field: str, high: int, value: str, low: Optional[int] = None) -> None:
        self.field = field
        self.high = high
        self.low = low
        self.value = value
        super().__init__(render_range_error(field, high, low, value))

    def as_dict(self) -> Dict[str, Any]:
        payload = super().as_dict()
        payload.update({"field": self.field, "low": self.low, "high": self.high, "value": self.value})
        return payload


class InvalidArgumentError(GeoStringError, TypeError):
    """The value handed to the lexer or parser has an unsupported type."""

    kind = "argument"
