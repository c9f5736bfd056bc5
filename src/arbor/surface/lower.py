"""Lowering from the surface AST to the canonical core tree.

Converts cons, list and string sugar into trees tagged with ``ListTag`` and
merges the clauses of each function into a single definition.
"""

from __future__ import annotations

from loguru import logger

from arbor.core.ast import (
    App,
    AsPattern,
    Clause,
    ExprItem,
    FunctionDef,
    Item,
    LetBinding,
    ListTag,
    Match,
    Pattern,
    Term,
    Tree,
    TreePattern,
    Var,
    VarPattern,
    WildcardPattern,
)
from arbor.surface.ast import (
    SurfaceApp,
    SurfaceAsPattern,
    SurfaceClause,
    SurfaceCons,
    SurfaceConsPattern,
    SurfaceExpr,
    SurfaceFunctionClause,
    SurfaceItem,
    SurfaceLet,
    SurfaceList,
    SurfaceListPattern,
    SurfaceMatch,
    SurfacePattern,
    SurfaceString,
    SurfaceStringPattern,
    SurfaceTerm,
    SurfaceTree,
    SurfaceTreePattern,
    SurfaceVar,
    SurfaceVarPattern,
    SurfaceWildcard,
)


class Lowerer:
    """Rewrites surface items into canonical items.

    Performs transformations like:
    - head : tail       -> Tree(CONS, [head, tail])
    - [e0, ..., en]     -> e0 : ... : en : Tree(EMPTY, [])
    - "ab"              -> 'a' : 'b' : Tree(EMPTY, [])
    - fn clauses of f   -> one FunctionDef at f's first occurrence
    """

    def lower_program(self, items: list[SurfaceItem]) -> list[Item]:
        """Lower a whole program.

        Args:
            items: Surface items in source order

        Returns:
            Canonical items in source order, one FunctionDef per name
        """
        output: list[Item | str] = []
        clauses_by_name: dict[str, list[Clause]] = {}
        first_location = {}

        for item in items:
            match item:
                case SurfaceFunctionClause(name, patterns, body):
                    if name not in clauses_by_name:
                        # Placeholder, replaced once every clause has been seen.
                        output.append(name)
                        clauses_by_name[name] = []
                        first_location[name] = item.location
                    clauses_by_name[name].append(self._lower_clause(patterns, body))

                case SurfaceLet(pattern, term):
                    output.append(
                        LetBinding(
                            self.lower_pattern(pattern),
                            self.lower_term(term),
                            location=item.location,
                        )
                    )

                case SurfaceExpr(term):
                    output.append(ExprItem(self.lower_term(term), location=item.location))

                case _:
                    raise TypeError(f"Unknown surface item type: {type(item)}")

        program = [
            FunctionDef(entry, tuple(clauses_by_name[entry]), location=first_location[entry])
            if isinstance(entry, str)
            else entry
            for entry in output
        ]
        logger.debug(
            "lower.done surface_items={} items={} functions={}",
            len(items),
            len(program),
            len(clauses_by_name),
        )
        return program

    def lower_term(self, term: SurfaceTerm) -> Term:
        match term:
            case SurfaceTree(functor, children):
                return Tree(functor, tuple(self.lower_term(child) for child in children))

            case SurfaceVar(name):
                return Var(name, location=term.location)

            case SurfaceApp(op_name, args):
                return App(
                    op_name,
                    tuple(self.lower_term(arg) for arg in args),
                    location=term.location,
                )

            case SurfaceCons(head, tail):
                return Tree(ListTag.CONS, (self.lower_term(head), self.lower_term(tail)))

            case SurfaceString(text):
                return self._list_term([Tree(char) for char in text])

            case SurfaceList(elements):
                return self._list_term([self.lower_term(elt) for elt in elements])

            case SurfaceMatch(scrutinees, clauses):
                return Match(
                    tuple(self.lower_term(scrutinee) for scrutinee in scrutinees),
                    tuple(self._lower_match_clause(clause) for clause in clauses),
                    location=term.location,
                )

            case _:
                raise TypeError(f"Unknown surface term type: {type(term)}")

    def lower_pattern(self, pattern: SurfacePattern) -> Pattern:
        match pattern:
            case SurfaceTreePattern(functor, children):
                return TreePattern(
                    functor, tuple(self.lower_pattern(child) for child in children)
                )

            case SurfaceVarPattern(name):
                return VarPattern(name)

            case SurfaceWildcard():
                return WildcardPattern()

            case SurfaceAsPattern(name, inner):
                return AsPattern(name, self.lower_pattern(inner))

            case SurfaceConsPattern(head, tail):
                return TreePattern(
                    ListTag.CONS, (self.lower_pattern(head), self.lower_pattern(tail))
                )

            case SurfaceStringPattern(text):
                return self._list_pattern([TreePattern(char) for char in text])

            case SurfaceListPattern(elements):
                return self._list_pattern([self.lower_pattern(elt) for elt in elements])

            case _:
                raise TypeError(f"Unknown surface pattern type: {type(pattern)}")

    def _lower_clause(self, patterns: list[SurfacePattern], body: SurfaceTerm) -> Clause:
        return Clause(
            tuple(self.lower_pattern(pattern) for pattern in patterns),
            self.lower_term(body),
        )

    def _lower_match_clause(self, clause: SurfaceClause) -> Clause:
        return self._lower_clause(clause.patterns, clause.body)

    def _list_term(self, elements: list[Term]) -> Term:
        result: Term = Tree(ListTag.EMPTY)
        for element in reversed(elements):
            result = Tree(ListTag.CONS, (element, result))
        return result

    def _list_pattern(self, elements: list[Pattern]) -> Pattern:
        result: Pattern = TreePattern(ListTag.EMPTY)
        for element in reversed(elements):
            result = TreePattern(ListTag.CONS, (element, result))
        return result


# =============================================================================
# Convenience Functions
# =============================================================================


def lower_program(items: list[SurfaceItem]) -> list[Item]:
    """Lower surface items to canonical items."""
    return Lowerer().lower_program(items)


def lower_term(term: SurfaceTerm) -> Term:
    """Lower a single surface term."""
    return Lowerer().lower_term(term)


def lower_pattern(pattern: SurfacePattern) -> Pattern:
    """Lower a single surface pattern."""
    return Lowerer().lower_pattern(pattern)
