"""
Grammar element model.

Defines the closed set of grammar element variants (atoms, rule references,
repetition wrappers, choice and sequence) and the Rule pairing a rule name with
its element tree. All types are frozen dataclasses with structural equality and
no IO.

Responsibilities
- Represent a parser rule body as an immutable tree of GElement values.
- Provide the mk_choice / mk_seq smart constructors that collapse singleton
  containers so that Choice and Seq always hold at least two elements.
- Provide a compact debug rendering via ``str()`` used in log messages.

Notes
- Trees are built bottom-up by the parse-tree fold in grammar_converter.core.extract
  and read by grammar_converter.core.render; nothing mutates them afterwards.
- Optional shadows typing.Optional in this module; annotate with
  ``X | None`` here.

Examples
--------
>>> from grammar_converter.core.elements import Atom, RuleRef, Seq, mk_seq
>>> mk_seq([Atom("x")])
Atom(name='x')
>>> mk_seq([Atom("x"), RuleRef("y")]) == Seq((Atom("x"), RuleRef("y")))
True
>>> str(mk_seq([Atom("x"), RuleRef("y")]))
'x y'
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Union

__all__ = [
    "Atom",
    "RuleRef",
    "Optional",
    "Plus",
    "Star",
    "Choice",
    "Seq",
    "GElement",
    "Rule",
    "mk_choice",
    "mk_seq",
]


@dataclass(slots=True, frozen=True)
class Atom:
    """Terminal literal; ``name`` is the literal text without its quotes."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(slots=True, frozen=True)
class RuleRef:
    """Reference to a parser rule or a lexer token by name."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(slots=True, frozen=True)
class Optional:
    """Zero-or-one occurrence of ``element``."""

    element: GElement

    def __str__(self) -> str:
        return f"{_grouped(self.element)}?"


@dataclass(slots=True, frozen=True)
class Plus:
    """One-or-more occurrences of ``element``."""

    element: GElement

    def __str__(self) -> str:
        return f"{_grouped(self.element)}+"


@dataclass(slots=True, frozen=True)
class Star:
    """Zero-or-more occurrences of ``element``."""

    element: GElement

    def __str__(self) -> str:
        return f"{_grouped(self.element)}*"


@dataclass(slots=True, frozen=True)
class Choice:
    """Alternation over ``elements`` in source order (always two or more)."""

    elements: tuple[GElement, ...]

    def __str__(self) -> str:
        return " | ".join(_grouped(e) for e in self.elements)


@dataclass(slots=True, frozen=True)
class Seq:
    """Concatenation of ``elements`` in source order (always two or more)."""

    elements: tuple[GElement, ...]

    def __str__(self) -> str:
        return " ".join(_grouped(e) for e in self.elements)


GElement = Union[Atom, RuleRef, Optional, Plus, Star, Choice, Seq]


@dataclass(slots=True, frozen=True)
class Rule:
    """Named production: ``left`` is the rule name, ``right`` its element tree."""

    left: str
    right: GElement

    def __str__(self) -> str:
        return f"{self.left} : {self.right}"


def _grouped(element: GElement) -> str:
    if isinstance(element, (Choice, Seq)):
        return f"({element})"
    return str(element)


def mk_choice(elements: Iterable[GElement]) -> GElement:
    """
    Build an alternation, collapsing a single alternative to itself.

    Args:
        elements: Alternatives in source order. Must not be empty.

    Returns:
        GElement: The sole element when exactly one is given, otherwise a Choice.

    Raises:
        ValueError: If ``elements`` is empty.
    """
    items = tuple(elements)
    if not items:
        raise ValueError("mk_choice requires at least one element")
    if len(items) == 1:
        return items[0]
    return Choice(items)


def mk_seq(elements: Iterable[GElement]) -> GElement:
    """
    Build a sequence, collapsing a single element to itself.

    Same contract as mk_choice, producing Seq.
    """
    items = tuple(elements)
    if not items:
        raise ValueError("mk_seq requires at least one element")
    if len(items) == 1:
        return items[0]
    return Seq(items)
