"""
Core exception types raised while turning a parse tree into grammar elements.

Provides typed exceptions for core-domain failures:
- ConversionError as the base for conversion failures.
- UnrecognizedAtomError when an atom node is none of string literal, token
  reference or rule reference.
- EmptyAlternativeError when an alternative holds no grammar element.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Precondition violations (empty mk_choice/mk_seq input, a parser rule with
      no body) raise plain ValueError and are not part of this hierarchy.

Examples:
    >>> from grammar_converter.core.errors import UnrecognizedAtomError
    >>> err = UnrecognizedAtomError("wildcard", line=3)
    >>> str(err)
    'unrecognized atom: wildcard (line 3)'
"""

from __future__ import annotations

__all__ = [
    "ConversionError",
    "EmptyAlternativeError",
    "UnrecognizedAtomError",
]


class ConversionError(ValueError):
    """Parse tree does not have the shape the extractor expects."""


class UnrecognizedAtomError(ConversionError):
    """
    Atom node that is not a quoted literal, token reference or rule reference.

    Attributes:
        kind (str): Node kind found under the atom (e.g. "wildcard", "not_set").
        line (int | None): Source line of the atom when the parse tree carries it.
    """

    def __init__(self, kind: str, line: int | None = None) -> None:
        self.kind = kind
        self.line = line
        where = f" (line {line})" if line is not None else ""
        super().__init__(f"unrecognized atom: {kind}{where}")


class EmptyAlternativeError(ConversionError):
    """
    Alternative that yields no grammar element (``r : 'a' | ;`` or actions only).

    Attributes:
        rule (str | None): Enclosing parser rule, filled in by rules_from_tree.
        line (int | None): Source line of the alternative when the parse tree
            carries it.
    """

    def __init__(self, rule: str | None = None, line: int | None = None) -> None:
        self.rule = rule
        self.line = line
        owner = f" in parser rule {rule!r}" if rule is not None else ""
        where = f" (line {line})" if line is not None else ""
        super().__init__(f"empty alternative{owner}{where}")
