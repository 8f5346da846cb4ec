"""
Configuration for the grammar converter.

Defines ConverterSettings, a frozen dataclass carrying the output choices of a
conversion run. Values load with precedence env > TOML > defaults; the CLI
applies its flags on top.

Sources
- ./grammar-converter.toml, either a [convert] table or top-level keys
- ./pyproject.toml under [tool.grammar_converter]
- GRAMMAR_CONVERTER_* environment variables

Notes
- Unknown keys and invalid values are ignored so a stray setting never blocks
  a conversion.
- An explicit TOML path that cannot be read raises IoConfigError.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Literal

from .errors import IoConfigError

__all__ = [
    "OutputFormat",
    "ConverterSettings",
]

logger = logging.getLogger(__name__)

OutputFormat = Literal["markdown", "ebnf"]

_FORMATS: frozenset[str] = frozenset({"markdown", "ebnf"})
_LOG_LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def _bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        return v.strip().lower() in {"1", "true", "t", "yes", "y", "on"}
    return False


@dataclass(frozen=True)
class ConverterSettings:
    """
    Runtime settings for a grammar conversion.

    Attributes:
        output_format (Literal["markdown", "ebnf"]): Rendering to produce.
        divs (bool): Wrap Markdown rule blocks in anchored fenced divs.
        encoding (str): Text encoding for reading sources and writing output.
        log_level (str): Root log level used by the CLI.

    Examples:
        >>> from grammar_converter.io.config import ConverterSettings
        >>> ConverterSettings(output_format="ebnf").divs
        False
    """

    output_format: OutputFormat = "markdown"
    divs: bool = False
    encoding: str = "utf-8"
    log_level: str = "WARNING"

    @classmethod
    def _apply_mapping(
        cls, base: ConverterSettings, cfg: dict[str, Any] | None
    ) -> ConverterSettings:
        """Apply a loose config mapping onto ConverterSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        fmt = cfg.get("output_format", cfg.get("format"))
        if isinstance(fmt, str) and fmt.strip().lower() in _FORMATS:
            s = replace(s, output_format=fmt.strip().lower())  # type: ignore[arg-type]

        if "divs" in cfg:
            s = replace(s, divs=_bool(cfg["divs"]))

        if isinstance(cfg.get("encoding"), str) and cfg["encoding"].strip():
            s = replace(s, encoding=cfg["encoding"].strip())

        level = cfg.get("log_level")
        if isinstance(level, str) and level.strip().upper() in _LOG_LEVELS:
            s = replace(s, log_level=level.strip().upper())

        return s

    @classmethod
    def from_env(
        cls, base: ConverterSettings | None = None, prefix: str = "GRAMMAR_CONVERTER_"
    ) -> ConverterSettings:
        """
        Build ConverterSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - GRAMMAR_CONVERTER_FORMAT ("markdown" | "ebnf")
            - GRAMMAR_CONVERTER_DIVS (1/0/true/false/yes/no/on/off)
            - GRAMMAR_CONVERTER_ENCODING
            - GRAMMAR_CONVERTER_LOG_LEVEL
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for name, key in (
            ("FORMAT", "output_format"),
            ("DIVS", "divs"),
            ("ENCODING", "encoding"),
            ("LOG_LEVEL", "log_level"),
        ):
            v = os.getenv(prefix + name)
            if v:
                mapping[key] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> ConverterSettings:
        """
        Build ConverterSettings from a TOML file.

        Search order when `path` is None:
            1) ./grammar-converter.toml (with either a [convert] table or direct keys)
            2) ./pyproject.toml under [tool.grammar_converter]

        Returns defaults if no file is present.

        Raises:
            IoConfigError: `path` was given but cannot be read or parsed.
        """
        s = cls()

        if path is not None:
            p = Path(path)
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                raise IoConfigError(f"cannot load config {p}: {exc}") from exc
            return cls._apply_mapping(s, cls._select(p, data))

        for p in (Path.cwd() / "grammar-converter.toml", Path.cwd() / "pyproject.toml"):
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                logger.warning("ignoring unreadable config %s: %s", p, exc)
                continue
            cfg = cls._select(p, data)
            if cfg:
                logger.debug("loaded settings from %s", p)
                return cls._apply_mapping(s, cfg)

        return s

    @staticmethod
    def _select(p: Path, data: dict[str, Any]) -> dict[str, Any] | None:
        if p.name == "pyproject.toml":
            tool = data.get("tool", {})
            cfg = tool.get("grammar_converter") if isinstance(tool, dict) else None
            return cfg if isinstance(cfg, dict) else None
        # grammar-converter.toml - accept either [convert] table or top-level keys
        if isinstance(data.get("convert"), dict):
            return data["convert"]
        return data

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> ConverterSettings:
        """
        Load ConverterSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults
                (grammar-converter.toml, pyproject.toml).

        Returns:
            ConverterSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
