"""Centralized runtime settings for geostring.

This module exposes :func:`get_settings` returning the options shared by the
CLI and the HTTP service (log destination, output rounding, JSON indentation).
Values can be customized via environment variables or by pointing
``GEOSTRING_CONFIG_FILE`` to a TOML/YAML document such as::

    [logging]
    file = "logs/geostring.jsonl"
    level = "DEBUG"

    [output]
    precision = 6
    indent = 2
"""
from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

__all__ = ["Settings", "get_settings", "reset_settings"]

_CONFIG_CACHE: Optional["Settings"] = None
_CONFIG_SOURCE: Optional[Path] = None

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
    """Resolved runtime options."""

    log_file: Optional[Path] = None
    log_level: str = "INFO"
    precision: Optional[int] = None
    indent: Optional[int] = 2

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    def as_dict(self) -> Dict[str, Any]:
        """Expose the settings as plain JSON values (useful for logging)."""

        return {
            "log_file": str(self.log_file) if self.log_file is not None else None,
            "log_level": self.log_level,
            "precision": self.precision,
            "indent": self.indent,
        }


def _normalize_path(value: Optional[str | Path], *, base: Optional[Path]) -> Optional[Path]:
    if value is None or value == "":
        return None
    candidate = Path(value).expanduser()
    if not candidate.is_absolute() and base is not None:
        candidate = base / candidate
    return candidate.resolve()


def _load_config_file(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file '{path}' does not exist")
    suffix = path.suffix.lower()
    if suffix == ".toml":
        with path.open("rb") as handle:
            return tomllib.load(handle)
    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
            return loaded or {}
    raise ValueError(f"Unsupported config file format: '{suffix}'")


def _coalesce_mapping(source: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not isinstance(source, Mapping):
        return {}
    return source


def _optional_int(value: Any, name: str, *, minimum: int = 0) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Setting '{name}' must be an integer, got {value!r}") from exc
    if number < minimum:
        raise ValueError(f"Setting '{name}' must be >= {minimum}, got {number}")
    return number


def _log_level(value: Any) -> str:
    level = str(value or "INFO").upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"Unsupported log level: '{value}'")
    return level


def _build_settings(config_file: Optional[Path]) -> Settings:
    config_data: Mapping[str, Any] = {}
    config_dir: Optional[Path] = None
    if config_file is not None:
        config_file = _normalize_path(config_file, base=Path.cwd())
        if config_file is not None:
            config_data = _load_config_file(config_file)
            config_dir = config_file.parent

    logging_section = _coalesce_mapping(config_data.get("logging"))
    output_section = _coalesce_mapping(config_data.get("output"))

    env = os.environ

    log_file = _normalize_path(
        env.get("GEOSTRING_LOG_FILE") or logging_section.get("file"),
        base=config_dir,
    )
    log_level = _log_level(env.get("GEOSTRING_LOG_LEVEL") or logging_section.get("level"))
    precision = _optional_int(
        env.get("GEOSTRING_PRECISION", output_section.get("precision")),
        "precision",
    )

    indent_raw = env.get("GEOSTRING_INDENT", output_section.get("indent", 2))
    indent = _optional_int(indent_raw, "indent")

    return Settings(log_file=log_file, log_level=log_level, precision=precision, indent=indent)


def get_settings(*, refresh: bool = False, config_file: str | Path | None = None) -> Settings:
    """Return the cached :class:`Settings`.

    Parameters
    ----------
    refresh:
        When ``True`` the cached settings are discarded and recomputed.
    config_file:
        Optional explicit path to the configuration document. When provided the
        returned instance is not cached globally, allowing callers (e.g. tests)
        to override settings temporarily.
    """

    global _CONFIG_CACHE, _CONFIG_SOURCE

    explicit_path = Path(config_file).expanduser() if config_file is not None else None

    if explicit_path is not None:
        return _build_settings(explicit_path)

    env_path = os.getenv("GEOSTRING_CONFIG_FILE")
    source_path = Path(env_path).expanduser() if env_path else None

    if refresh or _CONFIG_CACHE is None or _CONFIG_SOURCE != source_path:
        _CONFIG_CACHE = _build_settings(source_path)
        _CONFIG_SOURCE = source_path

    return _CONFIG_CACHE


def reset_settings() -> None:
    """Clear the cached settings (mainly useful for tests)."""

    global _CONFIG_CACHE, _CONFIG_SOURCE
    _CONFIG_CACHE = None
    _CONFIG_SOURCE = None
