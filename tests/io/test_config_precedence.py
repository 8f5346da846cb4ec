from __future__ import annotations

from pathlib import Path

import pytest

from grammar_converter.io.config import ConverterSettings
from grammar_converter.io.errors import IoConfigError

ENV_KEYS = [
    "GRAMMAR_CONVERTER_FORMAT",
    "GRAMMAR_CONVERTER_DIVS",
    "GRAMMAR_CONVERTER_ENCODING",
    "GRAMMAR_CONVERTER_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write_toml(tmp: Path, name: str, content: str) -> Path:
    p = tmp / name
    p.write_text(content)
    return p


def test_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    _write_toml(
        tmp_path,
        "grammar-converter.toml",
        """
        [convert]
        output_format = "ebnf"
        divs = false
        log_level = "info"
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GRAMMAR_CONVERTER_FORMAT", "markdown")
    monkeypatch.setenv("GRAMMAR_CONVERTER_DIVS", "yes")

    s = ConverterSettings.load()

    assert s.output_format == "markdown"
    assert s.divs is True
    assert s.log_level == "INFO"  # from TOML, normalized


def test_settings_from_pyproject_tool_table(tmp_path: Path, monkeypatch) -> None:
    _write_toml(
        tmp_path,
        "pyproject.toml",
        """
        [project]
        name = "demo"

        [tool.grammar_converter]
        format = "ebnf"
        encoding = "latin-1"
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)

    s = ConverterSettings.load()

    assert s.output_format == "ebnf"
    assert s.encoding == "latin-1"
    assert s.divs is False


def test_top_level_keys_and_invalid_values(tmp_path: Path, monkeypatch) -> None:
    _write_toml(
        tmp_path,
        "grammar-converter.toml",
        """
        output_format = "html"
        divs = 1
        log_level = "chatty"
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)

    s = ConverterSettings.load()

    assert s.output_format == "markdown"  # invalid value ignored
    assert s.divs is True
    assert s.log_level == "WARNING"


def test_defaults_when_no_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    s = ConverterSettings.load()

    assert s == ConverterSettings()
    assert s.output_format == "markdown"
    assert s.encoding == "utf-8"


def test_explicit_path_must_exist(tmp_path: Path) -> None:
    with pytest.raises(IoConfigError):
        ConverterSettings.load(tmp_path / "missing.toml")


def test_explicit_path_is_used(tmp_path: Path, monkeypatch) -> None:
    cfg = _write_toml(tmp_path, "custom.toml", 'divs = "on"\n')
    monkeypatch.chdir(tmp_path)

    assert ConverterSettings.load(cfg).divs is True
