from __future__ import annotations

from grammar_converter.core.elements import Atom, Choice, Optional, Plus, Rule, RuleRef, Seq, Star
from grammar_converter.core.render import MD_LB, element_to_markdown, to_markdown

X_LINK = "_[x](#grammar-rule-x)_"


def test_top_level_choice_breaks_lines() -> None:
    out = to_markdown([Rule("A", Choice((Atom("x"), Atom("y"))))])
    assert out == "**_A_:**\n ~ `'x'`" + MD_LB + " | `'y'`"
    assert "`'x'`" in out and "`'y'`" in out
    assert MD_LB + " | " in out


def test_nested_choice_stays_inline() -> None:
    element = Seq((RuleRef("x"), Choice((Atom("a"), Atom("b")))))
    assert element_to_markdown(element, top_level=True) == f"{X_LINK} (`'a'` | `'b'`)"


def test_top_level_seq_of_five_breaks_with_indent() -> None:
    rule = Rule("s", Seq(tuple(Atom(c) for c in "abcde")))
    rhs = to_markdown([rule]).split("\n ~ ", 1)[1]
    assert rhs == (MD_LB + "   ").join(f"`'{c}'`" for c in "abcde")


def test_top_level_seq_of_four_stays_on_one_line() -> None:
    rule = Rule("s", Seq(tuple(Atom(c) for c in "abcd")))
    assert to_markdown([rule]) == "**_s_:**\n ~ `'a'` `'b'` `'c'` `'d'`"


def test_nested_long_seq_stays_on_one_line() -> None:
    inner = Seq(tuple(RuleRef(c) for c in "abcde"))
    out = element_to_markdown(Optional(inner), top_level=True)
    assert MD_LB not in out
    assert out.startswith("[_[a](#grammar-rule-a)_ _[b]")


def test_plus_expands_to_one_then_many() -> None:
    assert element_to_markdown(Plus(RuleRef("x"))) == f"{X_LINK} {{{X_LINK}}}"


def test_optional_and_star_use_brackets_without_parentheses() -> None:
    assert element_to_markdown(Optional(Seq((Atom(","), RuleRef("x"))))) == f"[`','` {X_LINK}]"
    assert element_to_markdown(Star(Choice((Atom("a"), RuleRef("x"))))) == f"{{`'a'` | {X_LINK}}}"


def test_grouping_inside_seq() -> None:
    element = Seq((Plus(RuleRef("x")), Star(Atom("y")), Optional(Atom("z")), RuleRef("x")))
    assert element_to_markdown(element) == (
        f"({X_LINK} {{{X_LINK}}}) {{`'y'`}} [`'z'`] {X_LINK}"
    )


def test_blocks_are_separated_by_blank_line() -> None:
    rules = [Rule("a", RuleRef("b")), Rule("b", Atom("t"))]
    assert to_markdown(rules) == (
        "**_a_:**\n ~ _[b](#grammar-rule-b)_\n\n**_b_:**\n ~ `'t'`"
    )


def test_divs_wrap_each_rule_with_anchor() -> None:
    rules = [Rule("a", Atom("x")), Rule("b", Atom("y"))]
    assert to_markdown(rules, divs=True) == (
        ":::{ .grammar-rule #grammar-rule-a }\n**_a_:**\n ~ `'x'`\n:::"
        "\n\n"
        ":::{ .grammar-rule #grammar-rule-b }\n**_b_:**\n ~ `'y'`\n:::"
    )


def test_rendering_is_idempotent() -> None:
    rules = [Rule("a", Choice((Plus(RuleRef("x")), Seq(tuple(Atom(c) for c in "abcdef")))))]
    assert to_markdown(rules, divs=True) == to_markdown(rules, divs=True)
