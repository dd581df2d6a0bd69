from pathlib import Path

import pytest

from geostring.config import Settings, get_settings, reset_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "GEOSTRING_CONFIG_FILE",
        "GEOSTRING_LOG_FILE",
        "GEOSTRING_LOG_LEVEL",
        "GEOSTRING_PRECISION",
        "GEOSTRING_INDENT",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


def test_defaults() -> None:
    settings = get_settings(refresh=True)
    assert settings == Settings()
    assert settings.as_dict() == {"log_file": None, "log_level": "INFO", "precision": None, "indent": 2}


def test_environment_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("GEOSTRING_LOG_FILE", str(tmp_path / "events.jsonl"))
    monkeypatch.setenv("GEOSTRING_LOG_LEVEL", "debug")
    monkeypatch.setenv("GEOSTRING_PRECISION", "5")
    monkeypatch.setenv("GEOSTRING_INDENT", "")

    settings = get_settings(refresh=True)
    assert settings.log_file == (tmp_path / "events.jsonl").resolve()
    assert settings.log_level == "DEBUG"
    assert settings.log_level_number == 10
    assert settings.precision == 5
    assert settings.indent is None


def test_toml_config_file(tmp_path: Path) -> None:
    config = tmp_path / "geostring.toml"
    config.write_text(
        '[logging]\nfile = "logs/run.jsonl"\nlevel = "WARNING"\n\n[output]\nprecision = 3\nindent = 4\n',
        encoding="utf-8",
    )

    settings = get_settings(config_file=config)
    assert settings.log_file == (tmp_path / "logs" / "run.jsonl").resolve()
    assert settings.log_level == "WARNING"
    assert settings.precision == 3
    assert settings.indent == 4


def test_yaml_config_file_via_environment(monkeypatch, tmp_path: Path) -> None:
    config = tmp_path / "geostring.yaml"
    config.write_text("output:\n  precision: 2\n", encoding="utf-8")
    monkeypatch.setenv("GEOSTRING_CONFIG_FILE", str(config))

    settings = get_settings()
    assert settings.precision == 2
    assert get_settings() is settings


def test_environment_wins_over_file(monkeypatch, tmp_path: Path) -> None:
    config = tmp_path / "geostring.toml"
    config.write_text("[output]\nprecision = 3\n", encoding="utf-8")
    monkeypatch.setenv("GEOSTRING_PRECISION", "7")

    assert get_settings(config_file=config).precision == 7


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        get_settings(config_file=tmp_path / "missing.toml")


def test_unsupported_config_format(tmp_path: Path) -> None:
    config = tmp_path / "geostring.ini"
    config.write_text("[output]\n", encoding="utf-8")
    with pytest.raises(ValueError):
        get_settings(config_file=config)


@pytest.mark.parametrize(
    "name, value",
    [("GEOSTRING_PRECISION", "abc"), ("GEOSTRING_PRECISION", "-1"), ("GEOSTRING_LOG_LEVEL", "loud")],
)
def test_invalid_values(monkeypatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        get_settings(refresh=True)
