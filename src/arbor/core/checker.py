"""Static scope and arity checker.

One left-to-right pass over the canonical items. Function names (and the
built-in operations) are visible everywhere; destructuring bindings only
become visible to the items after them.
"""

from __future__ import annotations

from typing import Iterable

from loguru import logger

from arbor.core.ast import (
    BUILTIN_OPERATIONS,
    App,
    Clause,
    ExprItem,
    FunctionDef,
    Item,
    LetBinding,
    Match,
    Term,
    Tree,
    Var,
    pattern_vars,
)
from arbor.core.errors import ArityMismatch, UnboundOperation, UnboundVariable
from arbor.utils.location import Location


Scope = frozenset[str]


class ScopeChecker:
    """Verifies every reference is bound and clause arities agree."""

    def __init__(self, builtins: Iterable[str] = BUILTIN_OPERATIONS) -> None:
        self.builtins = tuple(builtins)

    def initial_scope(self, items: Iterable[Item]) -> Scope:
        """Built-ins plus every function name in the program."""
        names = set(self.builtins)
        names.update(item.name for item in items if isinstance(item, FunctionDef))
        return frozenset(names)

    def check_program(self, items: list[Item]) -> Scope:
        """Check a whole program.

        Returns:
            The bound set after the last item.

        Raises:
            UnboundVariable, UnboundOperation, ArityMismatch: on the first
            violation found.
        """
        bound = self.initial_scope(items)
        for item in items:
            bound = self.check_item(item, bound)
        logger.debug("check.ok items={} bound={}", len(items), len(bound))
        return bound

    def check_item(self, item: Item, bound: Scope) -> Scope:
        """Check one item and return the bound set for the items after it."""
        match item:
            case FunctionDef(name, clauses):
                self.check_clauses(name, clauses, bound, location=item.location)
                return bound

            case LetBinding(pattern, term):
                # The binding's own variables are not visible in its term.
                self.check_term(term, bound)
                return bound | frozenset(pattern_vars(pattern))

            case ExprItem(term):
                self.check_term(term, bound)
                return bound

            case _:
                raise TypeError(f"Unknown item type: {type(item)}")

    def check_term(self, term: Term, bound: Scope) -> None:
        match term:
            case Tree():
                # Trees are walked with a stack; long list literals nest deeply.
                pending = [term]
                while pending:
                    node = pending.pop()
                    if isinstance(node, Tree):
                        pending.extend(reversed(node.children))
                    else:
                        self.check_term(node, bound)

            case Var(name):
                if name not in bound:
                    raise UnboundVariable(name, term.location)

            case App(op_name, args):
                if op_name not in bound:
                    raise UnboundOperation(op_name, term.location)
                for arg in args:
                    self.check_term(arg, bound)

            case Match(scrutinees, clauses):
                for scrutinee in scrutinees:
                    self.check_term(scrutinee, bound)
                self.check_clauses(
                    "match", clauses, bound, expected=len(scrutinees), location=term.location
                )

            case _:
                raise TypeError(f"Unknown term type: {type(term)}")

    def check_clauses(
        self,
        name: str,
        clauses: tuple[Clause, ...],
        bound: Scope,
        expected: int | None = None,
        location: Location | None = None,
    ) -> None:
        """Check clause arities against ``expected`` (default: the first clause)."""
        if expected is None:
            expected = clauses[0].arity if clauses else 0

        for clause in clauses:
            if clause.arity != expected:
                raise ArityMismatch(name, expected, clause.arity, location)
            local = frozenset(
                var for pattern in clause.patterns for var in pattern_vars(pattern)
            )
            self.check_term(clause.body, bound | local)


def check_program(items: list[Item]) -> Scope:
    """Check a program with the default built-ins."""
    return ScopeChecker().check_program(items)
