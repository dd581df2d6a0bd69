"""Command line entrypoints: parse, tokenize and batch-convert coordinate strings."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from tqdm import tqdm

from .._version import __version__
from ..config import get_settings
from ..exceptions import GeoStringError
from ..formatting import round_result, token_to_dict
from ..lexer import tokenize
from ..parser import Parser
from ..utils.logging import (
    ParseOutcome,
    configure_json_logger,
    flush_handlers,
    generate_trace_id,
    log_event,
    log_parse_outcome,
)
from .config import app as config_app


__all__ = ["app", "run"]


app = typer.Typer(help="Parse geographic coordinate strings into decimal degrees", add_completion=False)

_SETTINGS = get_settings()


@app.callback(invoke_without_command=True)
def version_callback(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show geostring version and exit", is_eager=True),
) -> None:
    """Handle global options before any sub-command executes."""

    if version:
        typer.echo(f"geostring {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


app.add_typer(config_app, name="config")


def _dump(payload: Any) -> str:
    return json.dumps(payload, indent=_SETTINGS.indent, ensure_ascii=False)


@app.command("parse")
def parse_command(
    value: str = typer.Argument(..., help="Coordinate or coordinate pair, e.g. \"40° 26' 46\\\" N\""),
    precision: Optional[int] = typer.Option(
        _SETTINGS.precision, "--precision", min=0, max=15, help="Round results to this many decimals"
    ),
) -> None:
    """Parse a single coordinate string and print the decimal degrees as JSON."""

    try:
        result = Parser().parse(value)
    except GeoStringError as exc:
        typer.echo(_dump(exc.as_dict()), err=True)
        raise typer.Exit(code=1)

    typer.echo(_dump({"input": value, "value": round_result(result, precision)}))


@app.command("tokenize")
def tokenize_command(
    value: str = typer.Argument(..., help="Text to scan"),
) -> None:
    """Print the tokens produced by the lexer for ``value``."""

    typer.echo(_dump({"input": value, "tokens": [token_to_dict(token) for token in tokenize(value)]}))


@app.command("batch")
def batch_command(
    input_path: Path = typer.Option(
        ..., "--input", exists=True, dir_okay=False, help="Text file with one coordinate per line"
    ),
    output_path: Path = typer.Option(..., "--output", dir_okay=False, help="Destination JSONL with parsed values"),
    precision: Optional[int] = typer.Option(
        _SETTINGS.precision, "--precision", min=0, max=15, help="Round results to this many decimals"
    ),
    log_file: Optional[Path] = typer.Option(
        _SETTINGS.log_file, "--log-file", dir_okay=False, help="Optional JSONL log path"
    ),
    fail_fast: bool = typer.Option(False, "--fail-fast/--no-fail-fast", help="Abort on the first invalid line"),
    progress: bool = typer.Option(False, "--progress/--no-progress", help="Show a progress bar on stderr"),
) -> None:
    """Parse every non-blank line of ``--input`` and write one JSON record per line."""

    logger = configure_json_logger(log_file, level=_SETTINGS.log_level_number)
    trace_id = generate_trace_id()
    log_event(
        logger,
        "batch.start",
        trace_id=trace_id,
        input=str(input_path),
        output=str(output_path),
        precision=precision,
        fail_fast=fail_fast,
    )

    lines = input_path.read_text(encoding="utf-8").splitlines()
    output_path.parent.mkdir(parents=True, exist_ok=True)

    parser = Parser()
    parsed = 0
    failed = 0
    with output_path.open("w", encoding="utf-8") as dst:
        for line_no, line in enumerate(tqdm(lines, desc="Parsing coordinates", unit="line", disable=not progress), 1):
            text = line.strip()
            if not text:
                continue
            record: Dict[str, Any] = {"line": line_no, "input": text}
            try:
                record["value"] = round_result(parser.parse(text), precision)
                parsed += 1
            except GeoStringError as exc:
                failed += 1
                log_parse_outcome(
                    logger,
                    ParseOutcome(text, line=line_no, error=exc),
                    trace_id=trace_id,
                    level=logging.WARNING,
                )
                if fail_fast:
                    flush_handlers(logger)
                    typer.echo(_dump({"line": line_no, **exc.as_dict()}), err=True)
                    raise typer.Exit(code=1)
                record["error"] = exc.as_dict()
            json.dump(record, dst, ensure_ascii=False)
            dst.write("\n")

    summary = {"status": "completed", "parsed": parsed, "failed": failed, "output": str(output_path)}
    typer.echo(_dump(summary))
    log_event(logger, "batch.completed", trace_id=trace_id, parsed=parsed, failed=failed)
    flush_handlers(logger)


def run() -> None:
    """Entry point compatible with ``python -m geostring.cli.main`` and console scripts."""

    from typer.main import get_command

    cli = get_command(app)
    cli(prog_name="geostring")


if __name__ == "__main__":
    run()
