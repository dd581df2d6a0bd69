"""Helpers turning parse results and tokens into JSON friendly values."""
from __future__ import annotations

from typing import Any, Dict, Optional

from .lexer import Token
from .parser import ParseResult

__all__ = ["round_result", "token_to_dict"]


def round_result(result: ParseResult, precision: Optional[int]) -> ParseResult:
    """Round a scalar or each member of a pair to ``precision`` decimals."""

    if precision is None:
        return result
    if isinstance(result, list):
        return [round(value, precision) for value in result]
    return round(result, precision)


def token_to_dict(token: Token) -> Dict[str, Any]:
    return {"type": token.type.value, "value": token.value, "position": token.position}
