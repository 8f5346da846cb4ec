"""
grammar_converter.io — grammar source parsing, configuration and output.

## Responsibilities
- Parse ANTLR v4 ``.g4`` text into the parse tree consumed by
  grammar_converter.core.extract (lark, Earley parser).
- Load ConverterSettings from TOML and environment.
- Read sources and write rendered output to files or standard streams.

## Public API
- parse_grammar / parse_rules — source text to parse tree / list[Rule].
- ConverterSettings — output format, divs, encoding, log level.
- read_source / write_output — stream and file plumbing.

## Import DAG discipline
- Depends on stdlib, lark and grammar_converter.core.
- MUST NOT import grammar_converter.cli.
"""

from __future__ import annotations

from .antlr import parse_grammar, parse_rules
from .config import ConverterSettings
from .errors import GrammarSyntaxError, IoConfigError, IoError, IoWriteError
from .output import read_source, write_output

__all__ = [
    "parse_grammar",
    "parse_rules",
    "ConverterSettings",
    "GrammarSyntaxError",
    "IoConfigError",
    "IoError",
    "IoWriteError",
    "read_source",
    "write_output",
]
