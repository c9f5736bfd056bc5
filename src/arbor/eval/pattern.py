"""Pattern matching implementation for the Arbor interpreter."""

from __future__ import annotations

from typing import Sequence

from arbor.core.ast import AsPattern, Clause, Pattern, TreePattern, VarPattern, WildcardPattern
from arbor.core.errors import PatternMatchExhausted
from arbor.eval.printer import render_display
from arbor.eval.value import Substitution, Value, structurally_equal
from arbor.utils.location import Location


class PatternMatcher:
    """Pattern matching against evaluated trees.

    A substitution is threaded through a match attempt and never mutated;
    each new binding produces a new mapping. ``None`` means no match.
    """

    def match(
        self,
        pattern: Pattern,
        value: Value,
        substitution: Substitution | None = None,
    ) -> Substitution | None:
        """Match one value against one pattern.

        Repeated variables (non-linear patterns) must bind structurally
        equal values.
        """
        if substitution is None:
            substitution = {}

        match pattern:
            case TreePattern(functor, children):
                if value.functor != functor or len(value.children) != len(children):
                    return None
                return self.match_all(children, value.children, substitution)

            case VarPattern(name):
                return self._bind(name, value, substitution)

            case WildcardPattern():
                return substitution

            case AsPattern(name, inner):
                inner_substitution = self.match(inner, value, substitution)
                if inner_substitution is None:
                    return None
                return self._bind(name, value, inner_substitution)

            case _:
                raise TypeError(f"Unknown pattern type: {type(pattern)}")

    def match_all(
        self,
        patterns: Sequence[Pattern],
        values: Sequence[Value],
        substitution: Substitution | None = None,
    ) -> Substitution | None:
        """Match values against patterns pairwise, stopping at the first failure.

        Sequences of different length never match.
        """
        if len(patterns) != len(values):
            return None

        result = substitution if substitution is not None else {}
        for pattern, value in zip(patterns, values):
            result = self.match(pattern, value, result)
            if result is None:
                return None
        return result

    def select_clause(
        self,
        clauses: Sequence[Clause],
        values: Sequence[Value],
        op_name: str | None = None,
        location: Location | None = None,
    ) -> tuple[Clause, Substitution]:
        """First clause, in source order, whose patterns accept values.

        Raises:
            PatternMatchExhausted: If no clause matches
        """
        for clause in clauses:
            substitution = self.match_all(clause.patterns, values)
            if substitution is not None:
                return clause, substitution
        raise PatternMatchExhausted(op_name, tuple(values), location, render=render_display)

    def _bind(self, name: str, value: Value, substitution: Substitution) -> Substitution | None:
        if name in substitution:
            return substitution if structurally_equal(substitution[name], value) else None
        return {**substitution, name: value}
