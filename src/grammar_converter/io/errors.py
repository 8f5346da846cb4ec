"""
Custom exceptions for the grammar_converter.io module.

Purpose
- Provide IO-layer specific error types for reading grammar sources, parsing
  them and writing rendered output.
- Keep grammar_converter.core as the source of truth for conversion errors (see
  grammar_converter.core.errors).

Boundaries
- grammar_converter.core raises UnrecognizedAtomError and precondition ValueErrors.
- grammar_converter.io raises Io* errors:
  - IoConfigError: invalid or unreadable configuration file.
  - GrammarSyntaxError: the .g4 source is rejected by the grammar parser.
  - IoWriteError: output could not be written.
"""

from __future__ import annotations


class IoError(Exception):
    """
    Base class for IO-related errors in grammar_converter.io.

    Notes:
        Use this as a catch-all for IO-layer failures, distinct from core errors.
    """


class IoConfigError(IoError):
    """
    Raised when an explicitly requested configuration file cannot be loaded.

    Notes:
        Missing default config files are not an error; defaults apply.
    """


class GrammarSyntaxError(IoError):
    """
    Raised when grammar source text is not valid ANTLR v4 syntax.

    Attributes:
        line (int | None): 1-based line of the offending input, when known.
        column (int | None): 1-based column of the offending input, when known.
    """

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        self.line = line
        self.column = column
        where = f" at line {line}, column {column}" if line is not None else ""
        super().__init__(f"{message}{where}")


class IoWriteError(IoError):
    """Raised when rendered output cannot be written to its destination."""
