"""
ANTLR v4 grammar source parsing.

Turns ``.g4`` text into a lark parse tree whose rule names match
grammar_converter.core.extract.NodeKind, and offers parse_rules as the one-call
path from source text to list[Rule].

Coverage
- grammar declarations (``grammar``, ``parser grammar``, ``lexer grammar``),
  ``options``/``tokens``/``channels`` blocks, ``import``, named actions;
- parser rules with arguments, ``returns``, ``throws``, ``locals``, rule
  actions, ``catch``/``finally``, labeled alternatives and elements, element
  options, actions and predicates, ``~`` sets, ``.`` wildcards, greedy and
  non-greedy suffixes;
- lexer rules with ``fragment``, ranges, character sets, lexer commands and
  ``mode`` sections.

Action bodies are blanked by mask_actions before lexing, so braces nest to any
depth and may appear inside string or character literals and comments.

Examples
--------
>>> rules = parse_rules("grammar G; start : 'a' b* ; b : 'b' ;")
>>> [rule.left for rule in rules]
['start', 'b']
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Final

from lark import Lark, Tree
from lark.exceptions import UnexpectedInput

from grammar_converter.core.elements import Rule
from grammar_converter.core.extract import rules_from_tree

from .errors import GrammarSyntaxError

__all__ = [
    "ANTLR_GRAMMAR",
    "mask_actions",
    "parse_grammar",
    "parse_rules",
]

logger = logging.getLogger(__name__)

ANTLR_GRAMMAR: Final[str] = r"""
grammar_spec: grammar_decl prequel_construct* rules mode_spec*

grammar_decl: grammar_type identifier ";"
grammar_type: (LEXER | PARSER)? GRAMMAR

?prequel_construct: options_spec
                  | delegate_grammars
                  | tokens_spec
                  | channels_spec
                  | named_action

options_spec: OPTIONS ACTION_BLOCK
tokens_spec: TOKENS ACTION_BLOCK
channels_spec: CHANNELS ACTION_BLOCK
delegate_grammars: "import" delegate_grammar ("," delegate_grammar)* ";"
delegate_grammar: identifier ("=" identifier)?
named_action: AT_IDENT ("::" identifier)? ACTION_BLOCK

rules: rule_spec*
rule_spec: parser_rule_spec | lexer_rule_spec

// ---- parser rules ----
parser_rule_spec: RULE_REF BRACKET_BLOCK? rule_returns? throws_spec? locals_spec? rule_prequel* ":" rule_block ";" exception_handler* finally_clause?
rule_returns: "returns" BRACKET_BLOCK
throws_spec: "throws" identifier ("," identifier)*
locals_spec: "locals" BRACKET_BLOCK
?rule_prequel: options_spec | rule_action
rule_action: AT_IDENT ACTION_BLOCK
exception_handler: "catch" BRACKET_BLOCK ACTION_BLOCK
finally_clause: "finally" ACTION_BLOCK

rule_block: rule_alt_list
rule_alt_list: labeled_alt ("|" labeled_alt)*
labeled_alt: alternative ("#" identifier)?

alt_list: alternative ("|" alternative)*
alternative: ELEMENT_OPTIONS? element*

element: labeled_element ebnf_suffix?
       | atom ebnf_suffix?
       | ebnf
       | ACTION_BLOCK QUESTION?

labeled_element: identifier (ASSIGN | PLUS_ASSIGN) (atom | block)

ebnf: block block_suffix?
block_suffix: ebnf_suffix
ebnf_suffix: (QUESTION | STAR | PLUS) QUESTION?

block: "(" block_prequel? alt_list ")"
block_prequel: options_spec? rule_action* ":"

atom: terminal
    | ruleref
    | not_set
    | wildcard

terminal: TOKEN_REF ELEMENT_OPTIONS?
        | STRING_LITERAL ELEMENT_OPTIONS?
ruleref: RULE_REF BRACKET_BLOCK? ELEMENT_OPTIONS?
not_set: "~" (set_element | block_set)
block_set: "(" set_element ("|" set_element)* ")"
set_element: TOKEN_REF ELEMENT_OPTIONS?
           | STRING_LITERAL ELEMENT_OPTIONS?
           | char_range
           | BRACKET_BLOCK
wildcard: DOT ELEMENT_OPTIONS?
char_range: STRING_LITERAL RANGE STRING_LITERAL

// ---- lexer rules ----
lexer_rule_spec: FRAGMENT? TOKEN_REF options_spec? ":" lexer_alt_list ";"
lexer_alt_list: lexer_alt ("|" lexer_alt)*
lexer_alt: lexer_element* lexer_commands?
lexer_element: lexer_atom ebnf_suffix?
             | lexer_block ebnf_suffix?
             | labeled_lexer_element ebnf_suffix?
             | ACTION_BLOCK QUESTION?
labeled_lexer_element: identifier (ASSIGN | PLUS_ASSIGN) (lexer_atom | lexer_block)
lexer_block: "(" lexer_alt_list ")"
lexer_atom: char_range
          | terminal
          | not_set
          | BRACKET_BLOCK
          | wildcard
lexer_commands: "->" lexer_command ("," lexer_command)*
lexer_command: (identifier | MODE) ("(" (identifier | INT) ")")?

mode_spec: MODE identifier ";" lexer_rule_spec*

identifier: RULE_REF | TOKEN_REF

// ---- tokens ----
GRAMMAR: "grammar"
LEXER: "lexer"
PARSER: "parser"
FRAGMENT: "fragment"
MODE: "mode"
OPTIONS.2: /options(?=\s*\{)/
TOKENS.2: /tokens(?=\s*\{)/
CHANNELS.2: /channels(?=\s*\{)/

RULE_REF: /[a-z][A-Za-z0-9_]*/
TOKEN_REF: /[A-Z][A-Za-z0-9_]*/
STRING_LITERAL: /'(?:\\.|[^'\\\r\n])*'/
INT: /[0-9]+/
AT_IDENT: /@[A-Za-z_][A-Za-z0-9_]*/
ACTION_BLOCK: /\{[^{}]*\}/
BRACKET_BLOCK: /\[(?:\\.|[^\]\\])*\]/
ELEMENT_OPTIONS: /<[^<>]*>/

QUESTION: "?"
STAR: "*"
PLUS: "+"
ASSIGN: "="
PLUS_ASSIGN: "+="
DOT: "."
RANGE: ".."

LINE_COMMENT: /\/\/[^\n]*/
BLOCK_COMMENT: /\/\*[\s\S]*?\*\//

%import common.WS
%ignore WS
%ignore LINE_COMMENT
%ignore BLOCK_COMMENT
"""


# =============================================================================
# Action masking
# =============================================================================


def _line_end(text: str, i: int) -> int:
    end = text.find("\n", i)
    return len(text) if end < 0 else end


def _comment_end(text: str, i: int) -> int | None:
    """End offset of a comment starting at ``i``, or None when there is none."""
    if text.startswith("//", i):
        return _line_end(text, i)
    if text.startswith("/*", i):
        end = text.find("*/", i + 2)
        return len(text) if end < 0 else end + 2
    return None


def _quoted_end(text: str, i: int) -> int:
    # An unterminated literal stops at the line break and is left to the parser.
    quote = text[i]
    j = i + 1
    while j < len(text):
        ch = text[j]
        if ch == "\\":
            j += 2
        elif ch == quote:
            return j + 1
        elif ch == "\n":
            return j
        else:
            j += 1
    return len(text)


def _bracket_end(text: str, i: int) -> int:
    j = i + 1
    while j < len(text):
        ch = text[j]
        if ch == "\\":
            j += 2
        elif ch == "]":
            return j + 1
        else:
            j += 1
    return len(text)


def _action_end(text: str, i: int) -> int | None:
    """Offset just past the brace closing the action opened at ``i``."""
    depth = 0
    j = i
    while j < len(text):
        comment = _comment_end(text, j)
        if comment is not None:
            j = comment
            continue
        ch = text[j]
        if ch in "\"'":
            j = _quoted_end(text, j)
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return j + 1
        j += 1
    return None


def mask_actions(text: str) -> str:
    """
    Blank the bodies of brace blocks so each one lexes as a flat ``{ ... }``.

    Covers named actions, rule actions, predicates and ``options``/``tokens``/
    ``channels`` blocks. Quoted literals and comments inside a block do not
    count toward brace depth. Grammar string literals, bracket blocks and
    comments outside blocks are skipped unchanged. Newlines are kept and every
    other masked character becomes a space, so offsets, lines and columns match
    the input. An unclosed block is left as is for the parser to report.

    Examples
    --------
    >>> mask_actions('a : {f("}");} b ;')
    'a : {       } b ;'
    """
    chars = list(text)
    i = 0
    while i < len(text):
        comment = _comment_end(text, i)
        if comment is not None:
            i = comment
            continue
        ch = text[i]
        if ch == "'":
            i = _quoted_end(text, i)
        elif ch == "[":
            i = _bracket_end(text, i)
        elif ch == "{":
            end = _action_end(text, i)
            if end is None:
                break
            for j in range(i + 1, end - 1):
                if chars[j] not in "\r\n":
                    chars[j] = " "
            i = end
        else:
            i += 1
    return "".join(chars)


# =============================================================================
# Parsing
# =============================================================================


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        ANTLR_GRAMMAR,
        start="grammar_spec",
        parser="earley",
        lexer="basic",
        propagate_positions=True,
    )


def parse_grammar(text: str) -> Tree:
    """
    Parse ANTLR v4 grammar source into a ``grammar_spec`` tree.

    Args:
        text: Full ``.g4`` source.

    Returns:
        lark.Tree: Root ``grammar_spec`` node.

    Raises:
        GrammarSyntaxError: The source is not valid ANTLR v4 syntax.
    """
    try:
        tree = _parser().parse(mask_actions(text))
    except UnexpectedInput as exc:
        line = exc.line if isinstance(exc.line, int) and exc.line > 0 else None
        column = exc.column if isinstance(exc.column, int) and exc.column > 0 else None
        raise GrammarSyntaxError(type(exc).__name__, line=line, column=column) from exc
    logger.debug("parsed grammar source (%d characters)", len(text))
    return tree


def parse_rules(text: str) -> list[Rule]:
    """Parse ``.g4`` source and extract its parser rules in declaration order."""
    return rules_from_tree(parse_grammar(text))
