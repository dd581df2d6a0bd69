"""geostring – parse geographic coordinate strings into decimal degrees."""

from ._version import __version__
from .exceptions import GeoStringError, InvalidArgumentError, RangeError, UnexpectedValueError
from .lexer import Lexer, Token, TokenType, tokenize
from .parser import Parser, parse

__all__ = [
    "__version__",
    "GeoStringError",
    "InvalidArgumentError",
    "Lexer",
    "Parser",
    "RangeError",
    "Token",
    "TokenType",
    "UnexpectedValueError",
    "parse",
    "tokenize",
]
