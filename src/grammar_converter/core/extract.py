"""
Parse tree to grammar element extraction.

Walks the lark parse tree produced by grammar_converter.io.antlr and folds it
into a flat list of Rule values, one per parser rule in declaration order.

Traversal contract
------------------
`visit` is one recursive function dispatching on NodeKind and returning a list
of GElement for every node:

- unhandled nodes and tokens contribute an empty list; sibling results are
  concatenated in order;
- rule_alt_list / alt_list collapse their alternatives with mk_choice;
- alternative collapses its elements with mk_seq;
- element / ebnf wrap their result in Optional, Plus or Star according to the
  attached suffix;
- atom fails with UnrecognizedAtomError and an alternative with no elements
  fails with EmptyAlternativeError.

Lexer rules are skipped; grammar validation is out of scope.

Examples
--------
>>> from grammar_converter.io.antlr import parse_grammar
>>> tree = parse_grammar("grammar G; a : 'x' | b ; b : B+ ; B : 'b' ;")
>>> [str(rule) for rule in rules_from_tree(tree)]
['a : x | b', 'b : B+']
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from enum import Enum

from lark import Token, Tree

from .elements import Atom, GElement, Optional, Plus, Rule, RuleRef, Star, mk_choice, mk_seq
from .errors import EmptyAlternativeError, UnrecognizedAtomError

__all__ = [
    "NodeKind",
    "node_kind",
    "visit",
    "apply_suffix",
    "rules_from_tree",
]

logger = logging.getLogger(__name__)


class NodeKind(Enum):
    """Parse tree node kinds the extractor understands (lark rule names)."""

    GRAMMAR_SPEC = "grammar_spec"
    RULES = "rules"
    RULE_SPEC = "rule_spec"
    PARSER_RULE_SPEC = "parser_rule_spec"
    LEXER_RULE_SPEC = "lexer_rule_spec"
    RULE_ALT_LIST = "rule_alt_list"
    LABELED_ALT = "labeled_alt"
    ALT_LIST = "alt_list"
    ALTERNATIVE = "alternative"
    ELEMENT = "element"
    LABELED_ELEMENT = "labeled_element"
    EBNF = "ebnf"
    BLOCK = "block"
    BLOCK_SUFFIX = "block_suffix"
    ATOM = "atom"
    TERMINAL = "terminal"
    RULEREF = "ruleref"
    EBNF_SUFFIX = "ebnf_suffix"


_KINDS: dict[str, NodeKind] = {kind.value: kind for kind in NodeKind}


def node_kind(node: Tree | Token | None) -> NodeKind | None:
    """Return the NodeKind of a subtree, or None for tokens and unknown rules."""
    if not isinstance(node, Tree):
        return None
    return _KINDS.get(str(node.data))


def _children(node: Tree, kind: NodeKind) -> Iterator[Tree]:
    for child in node.children:
        if node_kind(child) is kind:
            yield child


def _child(node: Tree | None, kind: NodeKind) -> Tree | None:
    if node is None:
        return None
    return next(_children(node, kind), None)


def _token(node: Tree | None, token_type: str) -> Token | None:
    if node is None:
        return None
    for child in node.children:
        if isinstance(child, Token) and child.type == token_type:
            return child
    return None


def _flatten(results: Iterable[list[GElement]]) -> list[GElement]:
    return [element for result in results for element in result]


def _fold(node: Tree) -> list[GElement]:
    return _flatten(visit(child) for child in node.children)


def apply_suffix(element: GElement, suffix: Tree | None) -> GElement:
    """
    Wrap ``element`` according to an ebnf_suffix node.

    PLUS is checked before STAR before QUESTION, so non-greedy suffixes
    (``+?``, ``*?``, ``??``) map to Plus, Star and Optional respectively.
    A missing suffix returns the element unchanged.
    """
    if _token(suffix, "PLUS") is not None:
        return Plus(element)
    if _token(suffix, "STAR") is not None:
        return Star(element)
    if _token(suffix, "QUESTION") is not None:
        return Optional(element)
    return element


def _atom(node: Tree) -> GElement:
    terminal = _child(node, NodeKind.TERMINAL)
    literal = _token(terminal, "STRING_LITERAL")
    if literal is not None:
        return Atom(str(literal).removeprefix("'").removesuffix("'"))
    token_ref = _token(terminal, "TOKEN_REF")
    if token_ref is not None:
        return RuleRef(str(token_ref))
    rule_ref = _token(_child(node, NodeKind.RULEREF), "RULE_REF")
    if rule_ref is not None:
        return RuleRef(str(rule_ref))

    first = node.children[0] if node.children else None
    if isinstance(first, Tree):
        kind = str(first.data)
    elif isinstance(first, Token):
        kind = first.type
    else:
        kind = "empty"
    raise UnrecognizedAtomError(kind, line=getattr(node.meta, "line", None))


def visit(node: Tree | Token | None) -> list[GElement]:
    """Fold one parse tree node into the grammar elements it denotes."""
    if not isinstance(node, Tree):
        return []
    kind = node_kind(node)

    if kind is NodeKind.RULE_ALT_LIST:
        alternatives = (
            visit(_child(alt, NodeKind.ALTERNATIVE)) for alt in _children(node, NodeKind.LABELED_ALT)
        )
        return [mk_choice(_flatten(alternatives))]
    if kind is NodeKind.ALT_LIST:
        alternatives = (visit(alt) for alt in _children(node, NodeKind.ALTERNATIVE))
        return [mk_choice(_flatten(alternatives))]
    if kind is NodeKind.ALTERNATIVE:
        elements = _flatten(visit(el) for el in _children(node, NodeKind.ELEMENT))
        if not elements:
            raise EmptyAlternativeError(line=getattr(node.meta, "line", None))
        return [mk_seq(elements)]
    if kind is NodeKind.ELEMENT:
        suffix = _child(node, NodeKind.EBNF_SUFFIX)
        return [apply_suffix(e, suffix) for e in _fold(node)]
    if kind is NodeKind.EBNF:
        suffix = _child(_child(node, NodeKind.BLOCK_SUFFIX), NodeKind.EBNF_SUFFIX)
        return [apply_suffix(e, suffix) for e in visit(_child(node, NodeKind.BLOCK))]
    if kind is NodeKind.BLOCK:
        return visit(_child(node, NodeKind.ALT_LIST))
    if kind is NodeKind.ATOM:
        return [_atom(node)]
    return _fold(node)


def rules_from_tree(tree: Tree) -> list[Rule]:
    """
    Build the Rule list for every parser rule of a grammar_spec tree.

    Args:
        tree: Root ``grammar_spec`` node.

    Returns:
        list[Rule]: Parser rules in declaration order. Lexer rules are skipped.

    Raises:
        UnrecognizedAtomError: An atom is not a literal, token or rule reference.
        EmptyAlternativeError: An alternative holds no grammar element; the
            error names the rule and, when known, the line.
        ValueError: A parser rule body is empty.
    """
    rules: list[Rule] = []
    skipped = 0
    container = _child(tree, NodeKind.RULES)
    if container is None:
        container = tree
    for spec in _children(container, NodeKind.RULE_SPEC):
        parser_rule = _child(spec, NodeKind.PARSER_RULE_SPEC)
        if parser_rule is None:
            skipped += 1
            continue
        name = str(_token(parser_rule, "RULE_REF"))
        try:
            result = visit(parser_rule)
        except EmptyAlternativeError as exc:
            raise EmptyAlternativeError(name, line=exc.line) from exc
        if not result:
            raise ValueError(f"parser rule {name!r} produced no grammar element")
        rule = Rule(name, result[0])
        logger.debug("extracted %s", rule)
        rules.append(rule)
    logger.info("extracted %d parser rules (%d lexer rules skipped)", len(rules), skipped)
    return rules
