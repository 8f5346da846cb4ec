"""
grammar_converter — ANTLR v4 grammars to Markdown documentation and EBNF.

## Layers
- grammar_converter.core — element model, parse tree extraction, renderers (zero-IO).
- grammar_converter.io — .g4 parsing (lark), settings, source/output plumbing.
- grammar_converter.cli — ``grammar-converter`` command.

## Examples
```python
from grammar_converter import parse_rules, to_common_ebnf
to_common_ebnf(parse_rules("grammar G; a : 'x' b? ; b : 'y' ;"))
# "a ::= 'x' b?\\nb ::= 'y'"
```
"""

from __future__ import annotations

from .core import (
    Atom,
    Choice,
    GElement,
    Optional,
    Plus,
    Rule,
    RuleRef,
    Seq,
    Star,
    EmptyAlternativeError,
    UnrecognizedAtomError,
    mk_choice,
    mk_seq,
    rules_from_tree,
    to_common_ebnf,
    to_markdown,
)
from .io import parse_grammar, parse_rules

__version__ = "0.1.0"

__all__ = [
    "Atom",
    "Choice",
    "GElement",
    "Optional",
    "Plus",
    "Rule",
    "RuleRef",
    "Seq",
    "Star",
    "EmptyAlternativeError",
    "UnrecognizedAtomError",
    "mk_choice",
    "mk_seq",
    "rules_from_tree",
    "to_common_ebnf",
    "to_markdown",
    "parse_grammar",
    "parse_rules",
]
