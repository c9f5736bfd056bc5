"""Tests for runtime values and environments."""

import pytest

from arbor.core.ast import Tree, atom, cons, empty_list, list_tree, string_tree
from arbor.core.errors import UnboundName
from arbor.eval.value import (
    EMPTY_LIST,
    DefinedOperation,
    Environment,
    as_list,
    is_char,
    structurally_equal,
)


class TestStructuralEquality:
    """Tests for recursive shape equality."""

    def test_equal_trees(self):
        assert structurally_equal(atom("Pair", atom("A"), atom("B")), atom("Pair", atom("A"), atom("B")))

    def test_different_functor(self):
        assert not structurally_equal(atom("A"), atom("B"))

    def test_prefix_children_are_not_equal(self):
        short = atom("F", atom("A"))
        long = atom("F", atom("A"), atom("B"))
        assert not structurally_equal(short, long)
        assert not structurally_equal(long, short)

    def test_reserved_tag_differs_from_atom_text(self):
        assert not structurally_equal(empty_list(), atom("ListEmpty"))
        assert not structurally_equal(cons(atom("A"), empty_list()), atom("ListCons", atom("A"), empty_list()))

    def test_deep_list(self):
        left = list_tree(atom("X") for _ in range(5000))
        right = list_tree(atom("X") for _ in range(5000))
        assert structurally_equal(left, right)


class TestListHelpers:
    """Tests for list inspection helpers."""

    def test_as_list(self):
        assert as_list(list_tree([atom("A"), atom("B")])) == [atom("A"), atom("B")]

    def test_as_list_empty(self):
        assert as_list(EMPTY_LIST) == []

    def test_as_list_improper(self):
        assert as_list(cons(atom("A"), atom("B"))) is None

    def test_as_list_wrong_shape(self):
        assert as_list(Tree(EMPTY_LIST.functor, (atom("A"),))) is None

    def test_is_char(self):
        assert is_char(atom("a"))
        assert not is_char(atom("ab"))
        assert not is_char(atom("a", atom("b")))
        assert all(is_char(element) for element in as_list(string_tree("hey")))


class TestEnvironment:
    """Tests for the frame chain."""

    def test_lookup_nearest_first(self):
        outer = Environment({"x": atom("Outer")})
        inner = outer.extend({"x": atom("Inner")})
        assert inner.lookup("x") == atom("Inner")
        assert outer.lookup("x") == atom("Outer")

    def test_lookup_falls_through(self):
        env = Environment.empty().extend({"y": atom("Y")})
        env.parent.define_all({"x": atom("X")})
        assert env.lookup("x") == atom("X")

    def test_lookup_missing(self):
        with pytest.raises(UnboundName) as exc_info:
            Environment.empty().lookup("nope")
        assert exc_info.value.name == "nope"
        assert exc_info.value.lookup_kind == "name"

    def test_extend_does_not_touch_parent(self):
        base = Environment.empty()
        base.extend({"x": atom("X")})
        assert "x" not in base

    def test_depth(self):
        env = Environment.empty().extend({}).extend({})
        assert env.depth() == 3


def test_defined_operation_arity():
    from arbor.core.ast import Clause, VarPattern

    op = DefinedOperation("f", (Clause((VarPattern("a"), VarPattern("b")), atom("A")),))
    assert op.arity == 2
    assert str(op) == "<fn:f/2>"
