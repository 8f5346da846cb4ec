"""
Markdown and EBNF renderings of a Rule list.

Both renderers are pure structural recursions over GElement trees and return a
single string without a trailing newline (writers in grammar_converter.io add
it). They share no state and can be called on the same rules in any order.

Markdown layout
---------------
One definition-list block per rule, blocks separated by a blank line::

    **_call_:**
     ~ _[name](#grammar-rule-name)_ `'('` [_[args](#grammar-rule-args)_] `')'`

Top-level alternatives are separated by MD_LB followed by " | ". With ``divs=True`` every block is wrapped in a pandoc fenced div carrying the
``grammar-rule-<name>`` anchor the RuleRef links point to.

Grouping
--------
| Context                  | Parenthesised children      |
|--------------------------|-----------------------------|
| EBNF, any position       | Seq, Choice                 |
| Markdown, in Choice/Seq  | Seq, Plus, Choice           |
| Markdown, in [ ] / { }   | none (brackets delimit)     |

Examples
--------
>>> from grammar_converter.core.elements import Atom, Choice, Rule
>>> to_common_ebnf([Rule("a", Choice((Choice((Atom("a"), Atom("b"))), Atom("c"))))])
"a ::= ('a' | 'b') | 'c'"
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from .elements import Atom, Choice, GElement, Optional, Plus, Rule, RuleRef, Seq, Star

__all__ = [
    "MD_LB",
    "ANCHOR_PREFIX",
    "to_markdown",
    "rule_to_markdown",
    "element_to_markdown",
    "to_common_ebnf",
    "rule_to_common_ebnf",
    "element_to_common_ebnf",
]

# Markdown hard line break (two trailing spaces).
MD_LB: Final[str] = "  \n"
ANCHOR_PREFIX: Final[str] = "grammar-rule-"

# Top-level Seq longer than this is broken across lines.
_MD_SEQ_INLINE_MAX: Final[int] = 4


def _unknown(element: object) -> TypeError:
    return TypeError(f"not a grammar element: {element!r}")


# ============================================================================
# MARKDOWN
# ============================================================================


def _md_grouped(element: GElement) -> str:
    if isinstance(element, (Seq, Plus, Choice)):
        return f"({element_to_markdown(element)})"
    return element_to_markdown(element)


def element_to_markdown(element: GElement, top_level: bool = False) -> str:
    """
    Render one element as inline Markdown.

    Args:
        element: Element tree to render.
        top_level: True for the root of a rule; enables line breaks between
            alternatives and in sequences of more than four elements.
    """
    if isinstance(element, Atom):
        return f"`'{element.name}'`"
    if isinstance(element, RuleRef):
        return f"_[{element.name}](#{ANCHOR_PREFIX}{element.name})_"
    if isinstance(element, Optional):
        return f"[{element_to_markdown(element.element)}]"
    if isinstance(element, Plus):
        inner = element_to_markdown(element.element)
        return f"{inner} {{{inner}}}"
    if isinstance(element, Star):
        return f"{{{element_to_markdown(element.element)}}}"
    if isinstance(element, Choice):
        sep = (MD_LB if top_level else "") + " | "
        return sep.join(_md_grouped(e) for e in element.elements)
    if isinstance(element, Seq):
        if top_level and len(element.elements) > _MD_SEQ_INLINE_MAX:
            sep = MD_LB + "   "
        else:
            sep = " "
        return sep.join(_md_grouped(e) for e in element.elements)
    raise _unknown(element)


def rule_to_markdown(rule: Rule) -> str:
    """Render the two-line definition block for a single rule."""
    return f"**_{rule.left}_:**\n ~ {element_to_markdown(rule.right, top_level=True)}"


def to_markdown(rules: Sequence[Rule], divs: bool = False) -> str:
    """
    Render rules as a Markdown document.

    Args:
        rules: Rules in declaration order.
        divs: Wrap each block in ``:::{ .grammar-rule #grammar-rule-<name> }``.

    Returns:
        str: Blocks joined by a blank line, no trailing newline.
    """
    blocks: list[str] = []
    for rule in rules:
        block = rule_to_markdown(rule)
        if divs:
            block = f":::{{ .grammar-rule #{ANCHOR_PREFIX}{rule.left} }}\n{block}\n:::"
        blocks.append(block)
    return "\n\n".join(blocks)


# ============================================================================
# EBNF
# ============================================================================


def _ebnf_grouped(element: GElement) -> str:
    if isinstance(element, (Seq, Choice)):
        return f"({element_to_common_ebnf(element)})"
    return element_to_common_ebnf(element)


def element_to_common_ebnf(element: GElement) -> str:
    """Render one element in EBNF notation."""
    if isinstance(element, Atom):
        return f"'{element.name}'"
    if isinstance(element, RuleRef):
        return element.name
    if isinstance(element, Optional):
        return f"{_ebnf_grouped(element.element)}?"
    if isinstance(element, Plus):
        return f"{_ebnf_grouped(element.element)}+"
    if isinstance(element, Star):
        return f"{_ebnf_grouped(element.element)}*"
    if isinstance(element, Choice):
        return " | ".join(_ebnf_grouped(e) for e in element.elements)
    if isinstance(element, Seq):
        return " ".join(_ebnf_grouped(e) for e in element.elements)
    raise _unknown(element)


def rule_to_common_ebnf(rule: Rule) -> str:
    return f"{rule.left} ::= {element_to_common_ebnf(rule.right)}"


def to_common_ebnf(rules: Sequence[Rule]) -> str:
    """Render rules as ``name ::= production`` lines joined by newlines."""
    return "\n".join(rule_to_common_ebnf(rule) for rule in rules)
