"""Tokenizer for geographic coordinate strings."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Union

from .exceptions import InvalidArgumentError

__all__ = ["Lexer", "Token", "TokenType", "tokenize"]


class TokenType(str, Enum):
    """Token categories produced by :class:`Lexer`.

    The value doubles as the literal used in syntax error messages.
    """

    NONE = "T_NONE"
    INTEGER = "T_INTEGER"
    FLOAT = "T_FLOAT"
    CARDINAL_LAT = "T_CARDINAL_LAT"
    CARDINAL_LON = "T_CARDINAL_LON"
    COMMA = "T_COMMA"
    PLUS = "T_PLUS"
    MINUS = "T_MINUS"
    PERIOD = "T_PERIOD"
    COLON = "T_COLON"
    APOSTROPHE = "T_APOSTROPHE"
    QUOTE = "T_QUOTE"
    DEGREE = "T_DEGREE"


@dataclass(frozen=True)
class Token:
    """A lexical token and the byte offset where it starts in the input."""

    type: TokenType
    value: Union[int, float, str]
    position: int
    raw: str = field(default="", compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.raw:
            object.__setattr__(self, "raw", str(self.value))


_TOKEN_PATTERN = re.compile(
    r"(?P<number>[0-9]+(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?)|(?P<space>\s+)|(?P<char>.)",
    flags=re.DOTALL,
)

_SYMBOLS = {
    "n": TokenType.CARDINAL_LAT,
    "s": TokenType.CARDINAL_LAT,
    "e": TokenType.CARDINAL_LON,
    "w": TokenType.CARDINAL_LON,
    "'": TokenType.APOSTROPHE,
    "′": TokenType.APOSTROPHE,
    '"': TokenType.QUOTE,
    "″": TokenType.QUOTE,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    ".": TokenType.PERIOD,
    "°": TokenType.DEGREE,
}


def _number_token(raw: str, position: int) -> Token:
    if "." in raw or "e" in raw or "E" in raw:
        return Token(TokenType.FLOAT, float(raw), position, raw)
    return Token(TokenType.INTEGER, int(raw), position, raw)


def tokenize(text: str) -> List[Token]:
    """Scan ``text`` into tokens.

    Positions are UTF-8 byte offsets so that multi-byte symbols such as ``°``
    shift later tokens exactly as they do in the encoded input.
    """

    tokens: List[Token] = []
    offset = 0
    for match in _TOKEN_PATTERN.finditer(text):
        chunk = match.group(0)
        kind = match.lastgroup
        if kind == "number":
            tokens.append(_number_token(chunk, offset))
        elif kind == "char":
            tokens.append(Token(_SYMBOLS.get(chunk.lower(), TokenType.NONE), chunk, offset, chunk))
        offset += len(chunk.encode("utf-8"))
    return tokens


class Lexer:
    """Cursor over the tokens of one input string.

    ``lookahead`` is the next token to be consumed and ``token`` the last one
    consumed. ``peek`` walks further ahead without consuming anything.
    """

    def __init__(self, text: Optional[str] = None) -> None:
        self.input = ""
        self.tokens: List[Token] = []
        self.token: Optional[Token] = None
        self.lookahead: Optional[Token] = None
        self._position = 0
        self._peek = 0
        if text is not None:
            self.set_input(text)

    def set_input(self, text: str) -> None:
        if not isinstance(text, str):
            raise InvalidArgumentError(
                f"Lexer input must be a string, got {type(text).__name__}"
            )
        self.input = text
        self.tokens = tokenize(text)
        self.reset()

    def reset(self) -> None:
        self.token = None
        self.lookahead = None
        self._position = 0
        self._peek = 0

    def reset_peek(self) -> None:
        self._peek = 0

    def move_next(self) -> bool:
        """Advance to the next token; return ``False`` once input is exhausted."""

        self._peek = 0
        self.token = self.lookahead
        if self._position < len(self.tokens):
            self.lookahead = self.tokens[self._position]
            self._position += 1
        else:
            self.lookahead = None
        return self.lookahead is not None

    def peek(self) -> Optional[Token]:
        index = self._position + self._peek
        if index < len(self.tokens):
            self._peek += 1
            return self.tokens[index]
        return None

    def glimpse(self) -> Optional[Token]:
        """Return the token after ``lookahead`` and reset the peek cursor."""

        token = self.peek()
        self._peek = 0
        return token

    def is_next_token(self, token_type: TokenType) -> bool:
        return self.lookahead is not None and self.lookahead.type is token_type

    def is_next_token_any(self, token_types: Iterable[TokenType]) -> bool:
        return self.lookahead is not None and self.lookahead.type in set(token_types)

    @staticmethod
    def get_literal(token_type: TokenType) -> str:
        return token_type.value
