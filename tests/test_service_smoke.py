import pytest


def test_import_app():
    from geostring.service.app import app
    assert app is not None


def test_health():
    from geostring.service.app import health

    assert health()["status"] == "ok"


def test_parse_pair():
    from geostring.service.app import ParseIn, parse

    response = parse(ParseIn(value="40° N 79° W"))
    assert response.pair is True
    assert response.value == [40, -79]
    assert response.input == "40° N 79° W"


def test_parse_number_with_precision():
    from geostring.service.app import ParseIn, parse

    response = parse(ParseIn(value="40:26:46", precision=3))
    assert response.pair is False
    assert response.value == pytest.approx(40.446)


def test_parse_error_becomes_http_422():
    from fastapi import HTTPException

    from geostring.service.app import ParseIn, parse

    with pytest.raises(HTTPException) as excinfo:
        parse(ParseIn(value="40N 45°W"))
    assert excinfo.value.status_code == 422
    assert excinfo.value.detail["kind"] == "syntax"
    assert excinfo.value.detail["position"] == 6


def test_tokenize_endpoint():
    from geostring.service.app import TokenizeIn, tokenize_text

    response = tokenize_text(TokenizeIn(value="40 N"))
    assert [token["type"] for token in response.tokens] == ["T_INTEGER", "T_CARDINAL_LAT"]


def test_parse_keeps_integer_coordinates_as_int():
    from geostring.service.app import ParseIn, parse

    response = parse(ParseIn(value="40 79"))
    assert response.value == [40, 79]
    assert all(isinstance(item, int) for item in response.value)

    response = parse(ParseIn(value="-40"))
    assert isinstance(response.value, int)


def test_parse_keeps_sexagesimal_results_as_float():
    from geostring.service.app import ParseIn, parse

    response = parse(ParseIn(value="40:26"))
    assert isinstance(response.value, float)
    assert response.value == pytest.approx(40.433333, abs=1e-6)


def test_parse_rejects_json_booleans():
    from pydantic import ValidationError

    from geostring.service.app import ParseIn

    with pytest.raises(ValidationError):
        ParseIn.model_validate_json('{"value": true}')


def test_parse_accepts_json_numbers():
    from geostring.service.app import ParseIn, parse

    assert parse(ParseIn.model_validate_json('{"value": 45}')).value == 45
    assert parse(ParseIn.model_validate_json('{"value": -12.5}')).value == pytest.approx(-12.5)
