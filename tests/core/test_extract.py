from __future__ import annotations

import pytest
from lark import Token, Tree

from grammar_converter.core.elements import Atom, Choice, Optional, Plus, Rule, RuleRef, Seq, Star
from grammar_converter.core.errors import EmptyAlternativeError, UnrecognizedAtomError
from grammar_converter.core.extract import NodeKind, apply_suffix, node_kind, rules_from_tree, visit


def _literal(text: str) -> Tree:
    return Tree("atom", [Tree("terminal", [Token("STRING_LITERAL", text)])])


def _element(atom: Tree, suffix: str | None = None) -> Tree:
    children: list = [atom]
    if suffix is not None:
        children.append(Tree("ebnf_suffix", [Token(suffix, "?")]))
    return Tree("element", children)


def _parser_rule(name: str, *alternatives: Tree) -> Tree:
    alt_list = Tree("rule_alt_list", [Tree("labeled_alt", [alt]) for alt in alternatives])
    return Tree(
        "rule_spec",
        [Tree("parser_rule_spec", [Token("RULE_REF", name), Tree("rule_block", [alt_list])])],
    )


def test_two_labeled_alternatives_become_a_choice_and_lexer_rules_are_skipped() -> None:
    tree = Tree(
        "grammar_spec",
        [
            Tree("grammar_decl", []),
            Tree(
                "rules",
                [
                    _parser_rule(
                        "r",
                        Tree("alternative", [_element(_literal("'a'"))]),
                        Tree("alternative", [_element(_literal("'b'"))]),
                    ),
                    Tree("rule_spec", [Tree("lexer_rule_spec", [Token("TOKEN_REF", "X")])]),
                ],
            ),
        ],
    )
    assert rules_from_tree(tree) == [Rule("r", Choice((Atom("a"), Atom("b"))))]


def test_atom_priority_and_references() -> None:
    token_ref = Tree("atom", [Tree("terminal", [Token("TOKEN_REF", "ID")])])
    rule_ref = Tree("atom", [Tree("ruleref", [Token("RULE_REF", "expr")])])
    assert visit(_literal("'if'")) == [Atom("if")]
    assert visit(token_ref) == [RuleRef("ID")]
    assert visit(rule_ref) == [RuleRef("expr")]


def test_unrecognized_atom_raises() -> None:
    wildcard = Tree("atom", [Tree("wildcard", [Token("DOT", ".")])])
    with pytest.raises(UnrecognizedAtomError) as info:
        visit(Tree("alternative", [_element(_literal("'a'")), _element(wildcard)]))
    assert info.value.kind == "wildcard"


def test_unrecognized_atom_aborts_whole_grammar() -> None:
    bad = Tree("atom", [Tree("not_set", [Token("TOKEN_REF", "X")])])
    tree = Tree(
        "grammar_spec",
        [
            Tree(
                "rules",
                [
                    _parser_rule("ok", Tree("alternative", [_element(_literal("'a'"))])),
                    _parser_rule("bad", Tree("alternative", [_element(bad)])),
                ],
            )
        ],
    )
    with pytest.raises(UnrecognizedAtomError):
        rules_from_tree(tree)


@pytest.mark.parametrize(
    ("suffix", "wrapper"),
    [("QUESTION", Optional), ("STAR", Star), ("PLUS", Plus)],
)
def test_element_suffix_wraps(suffix, wrapper) -> None:
    assert visit(_element(_literal("'x'"), suffix)) == [wrapper(Atom("x"))]


def test_suffix_precedence_plus_star_question() -> None:
    both = Tree("ebnf_suffix", [Token("STAR", "*"), Token("QUESTION", "?")])
    assert apply_suffix(Atom("x"), both) == Star(Atom("x"))
    every = Tree("ebnf_suffix", [Token("QUESTION", "?"), Token("STAR", "*"), Token("PLUS", "+")])
    assert apply_suffix(Atom("x"), every) == Plus(Atom("x"))
    assert apply_suffix(Atom("x"), None) == Atom("x")


def test_ebnf_block_suffix_applies_to_block() -> None:
    alt_list = Tree(
        "alt_list",
        [
            Tree("alternative", [_element(_literal("'a'"))]),
            Tree("alternative", [_element(_literal("'b'")), _element(_literal("'c'"))]),
        ],
    )
    ebnf = Tree(
        "ebnf",
        [
            Tree("block", [alt_list]),
            Tree("block_suffix", [Tree("ebnf_suffix", [Token("PLUS", "+")])]),
        ],
    )
    assert visit(Tree("element", [ebnf])) == [
        Plus(Choice((Atom("a"), Seq((Atom("b"), Atom("c"))))))
    ]


def test_unknown_nodes_fold_by_concatenation() -> None:
    wrapper = Tree("labeled_element", [Tree("identifier", [Token("RULE_REF", "x")]), _literal("'a'")])
    assert visit(Tree("something_else", [wrapper, Token("ACTION_BLOCK", "{}"), _literal("'b'")])) == [
        Atom("a"),
        Atom("b"),
    ]
    assert visit(Token("RULE_REF", "x")) == []


def test_empty_alternative_is_rejected() -> None:
    with pytest.raises(EmptyAlternativeError) as info:
        visit(Tree("alternative", []))
    assert info.value.rule is None
    assert isinstance(info.value, ValueError)


def test_empty_alternative_error_names_enclosing_rule() -> None:
    tree = Tree(
        "grammar_spec",
        [
            Tree(
                "rules",
                [
                    _parser_rule("ok", Tree("alternative", [_element(_literal("'a'"))])),
                    _parser_rule(
                        "broken",
                        Tree("alternative", [_element(_literal("'b'"))]),
                        Tree("alternative", [Tree("element", [Token("ACTION_BLOCK", "{ }")])]),
                    ),
                ],
            )
        ],
    )
    with pytest.raises(EmptyAlternativeError) as info:
        rules_from_tree(tree)
    assert info.value.rule == "broken"
    assert str(info.value) == "empty alternative in parser rule 'broken'"


def test_node_kind_lookup() -> None:
    assert node_kind(Tree("rule_alt_list", [])) is NodeKind.RULE_ALT_LIST
    assert node_kind(Tree("lexer_alt", [])) is None
    assert node_kind(Token("RULE_REF", "x")) is None
