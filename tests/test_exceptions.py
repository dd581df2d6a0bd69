from geostring.exceptions import (
    GeoStringError,
    RangeError,
    UnexpectedValueError,
    render_range_error,
    render_syntax_error,
)
from geostring.lexer import Token, TokenType


def test_render_syntax_error_with_token() -> None:
    message = render_syntax_error("T_CARDINAL_LON", "°", 6, "40N 45°W")
    assert message == '[Syntax Error] line 0, col 6: Error: Expected T_CARDINAL_LON, got "°" in value "40N 45°W"'


def test_render_syntax_error_at_end_of_string() -> None:
    message = render_syntax_error("T_APOSTROPHE", None, -1, "40° 45")
    assert message == '[Syntax Error] line 0, col -1: Error: Expected T_APOSTROPHE, got end of string. in value "40° 45"'


def test_render_range_error_variants() -> None:
    assert render_range_error("Degrees", 180, -180, "200E") == (
        '[Range Error] Error: Degrees out of range -180 to 180 in value "200E"'
    )
    assert render_range_error("Seconds", 60, None, "1:2:99") == (
        '[Range Error] Error: Seconds greater than 60 in value "1:2:99"'
    )


def test_unexpected_value_error_as_dict() -> None:
    error = UnexpectedValueError("end of string", Token(TokenType.CARDINAL_LON, "W", 5), "40 45W")
    assert isinstance(error, GeoStringError)
    assert error.as_dict() == {
        "kind": "syntax",
        "message": '[Syntax Error] line 0, col 5: Error: Expected end of string, got "W" in value "40 45W"',
        "expected": "end of string",
        "found": "W",
        "position": 5,
        "value": "40 45W",
    }


def test_unexpected_value_error_uses_raw_literal() -> None:
    token = Token(TokenType.FLOAT, 100000.0, 3, "1e5")
    error = UnexpectedValueError("T_INTEGER", token, "55:1e5")
    assert 'got "1e5"' in str(error)


def test_range_error_as_dict() -> None:
    error = RangeError("Degrees", 90, "200N", low=-90)
    payload = error.as_dict()
    assert payload["kind"] == "range"
    assert payload["field"] == "Degrees"
    assert (payload["low"], payload["high"]) == (-90, 90)
    assert payload["message"] == '[Range Error] Error: Degrees out of range -90 to 90 in value "200N"'
