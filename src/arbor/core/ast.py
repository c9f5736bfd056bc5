"""Canonical term, pattern and item trees.

Everything the checker and the evaluator see is built from these nodes.
Surface sugar (cons, list and string literals) has already been lowered to
plain ``Tree`` nodes tagged with one of the two ``ListTag`` members.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Union

from arbor.utils.location import Location


# Operations every program can call without defining them.
BUILTIN_OPERATIONS: tuple[str, ...] = ("display", "print")


class ListTag(Enum):
    """Reserved functors for the internal list encoding.

    Members never compare equal to atom text, so no user atom can collide
    with the list representation.
    """

    CONS = "ListCons"
    EMPTY = "ListEmpty"

    def __str__(self) -> str:
        return self.value


Functor = Union[str, ListTag]


# =============================================================================
# Terms
# =============================================================================


class Term:
    """Base class for terms."""

    pass


@dataclass(frozen=True)
class Tree(Term):
    """Functor applied to an ordered tuple of children.

    Evaluated values are always trees whose descendants are trees.
    """

    functor: Functor
    children: tuple[Term, ...] = ()

    def __str__(self) -> str:
        if not self.children:
            return str(self.functor)
        args_str = ", ".join(str(child) for child in self.children)
        return f"{self.functor}({args_str})"


@dataclass(frozen=True)
class Var(Term):
    """Variable reference by name."""

    name: str
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class App(Term):
    """Call of a named operation: op(arg, ...)."""

    op_name: str
    args: tuple[Term, ...]
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        args_str = ", ".join(str(arg) for arg in self.args)
        return f"{self.op_name}({args_str})"


@dataclass(frozen=True)
class Match(Term):
    """match t1, ..., tn { p1, ..., pn => body, ... }"""

    scrutinees: tuple[Term, ...]
    clauses: tuple[Clause, ...]
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        scrut_str = ", ".join(str(term) for term in self.scrutinees)
        clauses_str = ", ".join(str(clause) for clause in self.clauses)
        return f"match {scrut_str} {{ {clauses_str} }}"


# =============================================================================
# Patterns
# =============================================================================


class Pattern:
    """Base class for patterns."""

    pass


@dataclass(frozen=True)
class TreePattern(Pattern):
    """Matches a tree with the same functor and child count."""

    functor: Functor
    children: tuple[Pattern, ...] = ()

    def __str__(self) -> str:
        if not self.children:
            return str(self.functor)
        args_str = ", ".join(str(child) for child in self.children)
        return f"{self.functor}({args_str})"


@dataclass(frozen=True)
class VarPattern(Pattern):
    """Binds the matched value to a name."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class WildcardPattern(Pattern):
    """Matches anything and binds nothing."""

    def __str__(self) -> str:
        return "_"


@dataclass(frozen=True)
class AsPattern(Pattern):
    """name @ pattern: binds the whole value while matching the inner pattern."""

    name: str
    pattern: Pattern

    def __str__(self) -> str:
        return f"{self.name} @ {self.pattern}"


@dataclass(frozen=True)
class Clause:
    """One alternative of a function or match: patterns => body."""

    patterns: tuple[Pattern, ...]
    body: Term

    @property
    def arity(self) -> int:
        return len(self.patterns)

    def __str__(self) -> str:
        pats_str = ", ".join(str(pattern) for pattern in self.patterns)
        return f"{pats_str} => {self.body}"


# =============================================================================
# Items
# =============================================================================


@dataclass(frozen=True)
class FunctionDef:
    """All clauses of one function, in source order."""

    name: str
    clauses: tuple[Clause, ...]
    location: Location | None = field(default=None, compare=False)

    @property
    def arity(self) -> int:
        """Pattern count of the first clause."""
        return self.clauses[0].arity if self.clauses else 0

    def __str__(self) -> str:
        clauses_str = "; ".join(
            f"{self.name}({', '.join(str(p) for p in clause.patterns)}) = {clause.body}"
            for clause in self.clauses
        )
        return f"fn {clauses_str}"


@dataclass(frozen=True)
class LetBinding:
    """Top-level destructuring binding: let pattern = term."""

    pattern: Pattern
    term: Term
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"let {self.pattern} = {self.term}"


@dataclass(frozen=True)
class ExprItem:
    """Top-level expression evaluated for its effects."""

    term: Term
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return str(self.term)


Item = FunctionDef | LetBinding | ExprItem


# =============================================================================
# Builders
# =============================================================================


def empty_list() -> Tree:
    return Tree(ListTag.EMPTY)


def cons(head: Term, tail: Term) -> Tree:
    return Tree(ListTag.CONS, (head, tail))


def list_tree(elements: Iterable[Term], tail: Term | None = None) -> Tree:
    """Right fold of elements onto tail (the empty list by default)."""
    result = tail if tail is not None else empty_list()
    for element in reversed(list(elements)):
        result = cons(element, result)
    return result


def string_tree(text: str) -> Tree:
    """List of one-character atoms spelling text."""
    return list_tree(Tree(char) for char in text)


def atom(name: str, *children: Term) -> Tree:
    return Tree(name, tuple(children))


def pattern_vars(pattern: Pattern) -> list[str]:
    """Names bound by a pattern, in left-to-right order (repeats kept)."""
    match pattern:
        case TreePattern(_, children):
            return [name for child in children for name in pattern_vars(child)]
        case VarPattern(name):
            return [name]
        case WildcardPattern():
            return []
        case AsPattern(name, inner):
            return [name, *pattern_vars(inner)]
        case _:
            raise TypeError(f"Unknown pattern type: {type(pattern)}")
