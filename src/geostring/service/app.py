from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr

from .._version import __version__
from ..config import get_settings
from ..exceptions import GeoStringError
from ..formatting import round_result, token_to_dict
from ..lexer import tokenize
from ..parser import Parser

# Parser instances hold no per-call state and can be shared between requests
_PARSER = Parser()

# ---- FastAPI app ----
app = FastAPI(title="geostring API", version=__version__)


class ParseIn(BaseModel):
    value: Union[StrictStr, StrictInt, StrictFloat] = Field(..., description="Coordinate or coordinate pair")
    precision: Optional[int] = Field(None, ge=0, le=15)


class ParseOut(BaseModel):
    input: str
    value: Union[int, float, List[Union[int, float]]]
    pair: bool


class TokenizeIn(BaseModel):
    value: str


class TokenizeOut(BaseModel):
    input: str
    tokens: List[Dict[str, Any]]


@app.get("/health")
def health():
    return {"status": "ok", "version": __version__}


@app.post("/parse", response_model=ParseOut)
def parse(payload: ParseIn):
    precision = payload.precision if payload.precision is not None else get_settings().precision
    try:
        result = _PARSER.parse(payload.value)
    except GeoStringError as exc:
        raise HTTPException(status_code=422, detail=exc.as_dict()) from exc

    return ParseOut(
        input=str(payload.value),
        value=round_result(result, precision),
        pair=isinstance(result, list),
    )


@app.post("/tokenize", response_model=TokenizeOut)
def tokenize_text(payload: TokenizeIn):
    return TokenizeOut(input=payload.value, tokens=[token_to_dict(token) for token in tokenize(payload.value)])
