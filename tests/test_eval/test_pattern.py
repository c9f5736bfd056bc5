"""Tests for pattern matching."""

import pytest

from arbor.core.ast import (
    AsPattern,
    Clause,
    ListTag,
    TreePattern,
    VarPattern,
    WildcardPattern,
    atom,
    list_tree,
)
from arbor.core.errors import PatternMatchExhausted
from arbor.eval.pattern import PatternMatcher
from arbor.surface.lower import lower_pattern
from arbor.surface.parser import parse_pattern


def pat(source: str):
    return lower_pattern(parse_pattern(source))


@pytest.fixture
def matcher() -> PatternMatcher:
    return PatternMatcher()


def test_match_tree_success(matcher):
    """Matching a tree pattern binds its variables."""
    value = atom("Suc", atom("Zero"))
    result = matcher.match(pat("Suc(n)"), value)
    assert result == {"n": atom("Zero")}


def test_match_tree_wrong_functor(matcher):
    assert matcher.match(pat("Zero"), atom("Suc", atom("Zero"))) is None


def test_match_tree_wrong_child_count(matcher):
    """F(x) does not match F(A, B), and F(x, y) does not match F(A)."""
    assert matcher.match(pat("F(x)"), atom("F", atom("A"), atom("B"))) is None
    assert matcher.match(pat("F(x, y)"), atom("F", atom("A"))) is None


def test_list_pattern_length_must_agree(matcher):
    assert matcher.match(pat("[a]"), list_tree([atom("A"), atom("B")])) is None
    assert matcher.match(pat("[a, b]"), list_tree([atom("A")])) is None


def test_cons_pattern_on_list(matcher):
    """[A, B, C] against h:t binds h = A and t = [B, C]."""
    result = matcher.match(pat("h:t"), list_tree([atom("A"), atom("B"), atom("C")]))
    assert result == {"h": atom("A"), "t": list_tree([atom("B"), atom("C")])}


def test_wildcard_binds_nothing(matcher):
    assert matcher.match(WildcardPattern(), atom("Anything")) == {}


def test_non_linear_pattern(matcher):
    patterns = (VarPattern("x"), VarPattern("x"))
    same = (atom("V", atom("A")), atom("V", atom("A")))
    different = (atom("V", atom("A")), atom("W", atom("A")))
    assert matcher.match_all(patterns, same) == {"x": same[0]}
    assert matcher.match_all(patterns, different) is None


def test_non_linear_within_tree(matcher):
    assert matcher.match(pat("Pair(x, x)"), atom("Pair", atom("A"), atom("A"))) is not None
    assert matcher.match(pat("Pair(x, x)"), atom("Pair", atom("A"), atom("B"))) is None


def test_as_pattern_binds_whole_value(matcher):
    value = list_tree([atom("A")])
    result = matcher.match(pat("all @ x:_"), value)
    assert result == {"all": value, "x": atom("A")}


def test_as_pattern_inner_failure(matcher):
    assert matcher.match(AsPattern("all", TreePattern(ListTag.EMPTY)), list_tree([atom("A")])) is None


def test_as_pattern_respects_existing_binding(matcher):
    patterns = (VarPattern("v"), AsPattern("v", WildcardPattern()))
    assert matcher.match_all(patterns, (atom("A"), atom("A"))) == {"v": atom("A")}
    assert matcher.match_all(patterns, (atom("A"), atom("B"))) is None


def test_match_all_length_mismatch(matcher):
    assert matcher.match_all((VarPattern("a"),), (atom("A"), atom("B"))) is None
    assert matcher.match_all((), ()) == {}


def test_substitution_not_mutated(matcher):
    start = {"y": atom("Y")}
    result = matcher.match(VarPattern("x"), atom("X"), start)
    assert result == {"y": atom("Y"), "x": atom("X")}
    assert start == {"y": atom("Y")}


def test_select_clause_first_match(matcher):
    clauses = (
        Clause((pat("Zero"),), atom("First")),
        Clause((pat("_"),), atom("Second")),
        Clause((pat("Zero"),), atom("Third")),
    )
    clause, substitution = matcher.select_clause(clauses, (atom("Zero"),))
    assert clause.body == atom("First")
    assert substitution == {}

    clause, _ = matcher.select_clause(clauses, (atom("Suc", atom("Zero")),))
    assert clause.body == atom("Second")


def test_select_clause_exhausted(matcher):
    clauses = (Clause((pat("Zero"),), atom("A")),)
    with pytest.raises(PatternMatchExhausted) as exc_info:
        matcher.select_clause(clauses, (atom("One"),), op_name="f")
    assert exc_info.value.op_name == "f"
    assert exc_info.value.message == "pattern match failure: f(One)"
