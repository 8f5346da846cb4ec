"""
Core package: grammar element model, parse tree extraction and renderers.

## Contracts
- elements — GElement variants, Rule, mk_choice / mk_seq smart constructors.
- extract — NodeKind and the parse tree fold producing list[Rule].
- render — to_markdown / to_common_ebnf.
- errors — ConversionError with UnrecognizedAtomError and EmptyAlternativeError.

## Notes
- Zero-IO policy: stdlib + lark types only; no file or stream access.
- Renderers are pure and total over well-formed trees.

## Examples
```python
from grammar_converter.core import Atom, Choice, Rule, to_common_ebnf, to_markdown
rules = [Rule("a", Choice((Atom("x"), Atom("y"))))]
to_common_ebnf(rules)  # "a ::= 'x' | 'y'"
to_markdown(rules)     # "**_a_:**\n ~ `'x'`  \n | `'y'`"
```
"""

from __future__ import annotations

from .elements import (
    Atom,
    Choice,
    GElement,
    Optional,
    Plus,
    Rule,
    RuleRef,
    Seq,
    Star,
    mk_choice,
    mk_seq,
)
from .errors import ConversionError, EmptyAlternativeError, UnrecognizedAtomError
from .extract import NodeKind, rules_from_tree, visit
from .render import to_common_ebnf, to_markdown

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
    "mk_choice",
    "mk_seq",
    "ConversionError",
    "EmptyAlternativeError",
    "UnrecognizedAtomError",
    "NodeKind",
    "rules_from_tree",
    "visit",
    "to_common_ebnf",
    "to_markdown",
]
