import pytest

from geostring.formatting import round_result, token_to_dict
from geostring.lexer import Token, TokenType


@pytest.mark.parametrize(
    "result, precision, expected",
    [
        (40.44611111111111, None, 40.44611111111111),
        (40.44611111111111, 4, 40.4461),
        (40, 2, 40),
        ([40.44611111111111, -79.98222222222222], 3, [40.446, -79.982]),
        ([40, -79], None, [40, -79]),
    ],
)
def test_round_result(result, precision, expected) -> None:
    assert round_result(result, precision) == expected


def test_token_to_dict() -> None:
    token = Token(TokenType.DEGREE, "°", 2)
    assert token_to_dict(token) == {"type": "T_DEGREE", "value": "°", "position": 2}
