"""Recursive-descent parser turning coordinate strings into decimal degrees.

Supported notations include decimal degrees (``45.24``, ``-40°``), degrees with
minutes and seconds (``40° 26' 46" N``, ``79°56′55″W``), colon separated
sexagesimal values (``79:56:55W``) and pairs of any of those separated by a
space or a comma (``40° N 79° W``, ``40, 79``).

Grammar::

    point      = coordinate [ "," ] [ coordinate ]
    coordinate = [ sign ] degrees [ cardinal ]
    degrees    = float [ "°" ] | integer [ symbol minutes ]
    minutes    = ( integer [ symbol seconds ] | float [ symbol ] )
    seconds    = number [ symbol ]

The two coordinates of a pair share the separator style and the cardinal
requirement established by the first one.
"""
from __future__ import annotations

import logging
from typing import List, Literal, Optional, Union

from .exceptions import InvalidArgumentError, RangeError, UnexpectedValueError
from .lexer import Lexer, TokenType
from .utils.logging import ParseOutcome, log_parse_outcome

__all__ = ["Number", "ParseResult", "Parser", "parse"]

LOGGER = logging.getLogger(__name__)

Number = Union[int, float]
ParseResult = Union[Number, List[Number]]

_CARDINALS = (TokenType.CARDINAL_LAT, TokenType.CARDINAL_LON)
_NUMBERS = (TokenType.INTEGER, TokenType.FLOAT)
_SIGNS = (TokenType.PLUS, TokenType.MINUS)


def _coerce_input(value: Union[str, int, float]) -> str:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise InvalidArgumentError(
            f"Coordinate value must be a string, int or float, got {type(value).__name__}"
        )
    return value if isinstance(value, str) else str(value)


class _CoordinateGrammar:
    """Mutable state of a single ``parse`` call."""

    def __init__(self, value: str) -> None:
        self.input = value
        self.lexer = Lexer(value)
        # None: not established yet; False: the first coordinate had no cardinal
        # letter; otherwise the cardinal family required next.
        self.next_cardinal: Union[TokenType, Literal[False], None] = None
        # None: no separator seen yet; False: no separator style in use;
        # otherwise the separator symbol required next.
        self.next_symbol: Union[TokenType, Literal[False], None] = None

    def run(self) -> ParseResult:
        self.lexer.move_next()
        return self.point()

    # -- errors ---------------------------------------------------------

    def syntax_error(self, expected: str) -> UnexpectedValueError:
        return UnexpectedValueError(expected, self.lexer.lookahead, self.input)

    def range_error(self, field: str, high: int, low: Optional[int] = None) -> RangeError:
        return RangeError(field, high, self.input, low=low)

    # -- primitives -----------------------------------------------------

    def match(self, token_type: TokenType) -> Union[int, float, str]:
        if not self.lexer.is_next_token(token_type):
            raise self.syntax_error(self.lexer.get_literal(token_type))
        self.lexer.move_next()
        return self.lexer.token.value

    def number(self) -> Number:
        if self.lexer.is_next_token(TokenType.FLOAT):
            return self.match(TokenType.FLOAT)
        if self.lexer.is_next_token(TokenType.INTEGER):
            return self.match(TokenType.INTEGER)
        raise self.syntax_error(
            f"{self.lexer.get_literal(TokenType.INTEGER)} or {self.lexer.get_literal(TokenType.FLOAT)}"
        )

    def sign(self) -> int:
        if self.lexer.is_next_token(TokenType.PLUS):
            self.match(TokenType.PLUS)
            return 1
        self.match(TokenType.MINUS)
        return -1

    def symbol(self) -> bool:
        """Match the separator following a value; report whether one was matched."""

        if self.next_symbol is None and self.lexer.is_next_token(TokenType.COLON):
            self.match(TokenType.COLON)
            self.next_symbol = TokenType.COLON
            return True

        if self.next_symbol is None and self.lexer.is_next_token(TokenType.DEGREE):
            self.match(TokenType.DEGREE)
            self.next_symbol = TokenType.APOSTROPHE
            return True

        if self.next_symbol is TokenType.COLON:
            self.match(TokenType.COLON)
            return True
        if self.next_symbol is TokenType.DEGREE:
            self.match(TokenType.DEGREE)
            self.next_symbol = TokenType.APOSTROPHE
            return True
        if self.next_symbol is TokenType.APOSTROPHE:
            self.match(TokenType.APOSTROPHE)
            self.next_symbol = TokenType.QUOTE
            return True
        if self.next_symbol is TokenType.QUOTE:
            self.match(TokenType.QUOTE)
            return True

        self.next_symbol = False
        return False

    # -- grammar rules --------------------------------------------------

    def point(self) -> ParseResult:
        first = self.coordinate()

        if self.lexer.lookahead is None:
            return first

        if self.lexer.is_next_token(TokenType.COMMA):
            self.match(TokenType.COMMA)

        second = self.coordinate()

        if self.lexer.lookahead is not None:
            raise self.syntax_error("end of string")

        return [first, second]

    def coordinate(self) -> Number:
        sign: Optional[int] = None

        # An explicit sign is only allowed while no cardinal letter is required
        if self.next_cardinal not in _CARDINALS and self.lexer.is_next_token_any(_SIGNS):
            sign = self.sign()

        value = self.degrees()

        if sign is None and (
            self.next_cardinal in _CARDINALS
            or (self.next_cardinal is None and self.lexer.is_next_token_any(_CARDINALS))
        ):
            return self.cardinal(value)

        self.next_cardinal = False
        return (1 if sign is None else sign) * value

    def degrees(self) -> Number:
        # The second coordinate of a pair starts over with a degree symbol
        if self.next_symbol in (TokenType.APOSTROPHE, TokenType.QUOTE):
            self.next_symbol = TokenType.DEGREE

        # Float degrees are never followed by minutes or seconds
        if self.lexer.is_next_token(TokenType.FLOAT):
            degrees = self.match(TokenType.FLOAT)
            if self.lexer.is_next_token(TokenType.DEGREE):
                self.match(TokenType.DEGREE)
                self.next_symbol = TokenType.DEGREE
            return degrees

        degrees = self.number()

        if not self.symbol():
            return degrees

        # "40° 79°": the number after the degree symbol is the next coordinate
        glimpse = self.lexer.glimpse()
        if (
            self.next_symbol is not TokenType.COLON
            and self.lexer.is_next_token_any(_NUMBERS)
            and glimpse is not None
            and glimpse.type is TokenType.DEGREE
        ):
            return degrees

        return degrees + float(self.minutes())

    def minutes(self) -> Number:
        if self.next_symbol is TokenType.COLON or self.lexer.is_next_token(TokenType.INTEGER):
            read_minutes = self.match(TokenType.INTEGER)
            if read_minutes > 60:
                raise self.range_error("Minutes", 60)

            minutes = read_minutes / 60

            if self.next_symbol is TokenType.COLON and not self.lexer.is_next_token(TokenType.COLON):
                return minutes

            self.symbol()
            return minutes + self.seconds()

        if self.lexer.is_next_token(TokenType.FLOAT):
            read_minutes = self.match(TokenType.FLOAT)
            if read_minutes > 60:
                raise self.range_error("Minutes", 60)

            minutes = read_minutes / 60
            self.symbol()
            return minutes

        return 0

    def seconds(self) -> Number:
        if not self.lexer.is_next_token_any(_NUMBERS):
            return 0

        read_seconds = self.number()
        if read_seconds > 60:
            raise self.range_error("Seconds", 60)

        seconds = read_seconds / 3600

        if self.next_symbol is not TokenType.COLON:
            self.symbol()

        return seconds

    def cardinal(self, value: Number) -> Number:
        # Without a cardinal on a previous coordinate either family is accepted
        if self.next_cardinal is None:
            self.next_cardinal = (
                TokenType.CARDINAL_LON
                if self.lexer.is_next_token(TokenType.CARDINAL_LON)
                else TokenType.CARDINAL_LAT
            )

        letter = str(self.match(self.next_cardinal)).lower()

        if letter in ("n", "s"):
            self.next_cardinal = TokenType.CARDINAL_LON
            bound = 90
        else:
            self.next_cardinal = TokenType.CARDINAL_LAT
            bound = 180

        if value > bound:
            raise self.range_error("Degrees", bound, -bound)

        return -value if letter in ("s", "w") else value


class Parser:
    """Parse coordinate strings into signed decimal degrees.

    A ``Parser`` keeps no state between calls, so one instance can be reused
    for any number of inputs and shared between threads.

    >>> Parser().parse("40° 26' 46\\" N 79° 58' 56\\" W")
    [40.44611111111111, -79.98222222222222]
    """

    def parse(self, value: Union[str, int, float]) -> ParseResult:
        """Return one coordinate as a number or a pair as a two-item list.

        Raises :class:`~geostring.exceptions.UnexpectedValueError` for syntax
        errors and :class:`~geostring.exceptions.RangeError` for out of range
        degrees, minutes or seconds.
        """

        text = _coerce_input(value)
        try:
            result = _CoordinateGrammar(text).run()
        except (UnexpectedValueError, RangeError) as exc:
            log_parse_outcome(LOGGER, ParseOutcome(text, error=exc), level=logging.DEBUG)
            raise
        log_parse_outcome(LOGGER, ParseOutcome(text, value=result), level=logging.DEBUG)
        return result


_DEFAULT_PARSER = Parser()


def parse(value: Union[str, int, float]) -> ParseResult:
    """Parse ``value`` with a shared :class:`Parser`."""

    return _DEFAULT_PARSER.parse(value)
