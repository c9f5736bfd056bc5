"""Tests for value rendering."""

from arbor.core.ast import ListTag, Tree, atom, cons, empty_list, list_tree, string_tree
from arbor.eval.printer import render, render_atom, render_display, render_print, string_text


class TestRenderAtom:
    def test_capitalised_atom_is_bare(self):
        assert render_atom("Zero") == "Zero"

    def test_other_atoms_are_quoted(self):
        assert render_atom("a") == "'a'"
        assert render_atom("hello world") == "'hello world'"

    def test_quote_is_escaped(self):
        assert render_atom("it's") == "'it\\'s'"


class TestRenderDisplay:
    """Tests for the human-oriented form."""

    def test_nested_tree(self):
        assert render_display(atom("Suc", atom("Suc", atom("Zero")))) == "Suc(Suc(Zero))"

    def test_list(self):
        assert render_display(list_tree([atom("One"), atom("Two")])) == "[One, Two]"

    def test_empty_list_is_empty_string(self):
        assert render_display(empty_list()) == '""'
        assert render_print(empty_list()) == '""'
        assert render_display(empty_list(), raw=True) == ""

    def test_empty_list_nested(self):
        assert render_display(atom("Box", empty_list())) == 'Box("")'

    def test_string(self):
        assert render_display(string_tree("hi there")) == '"hi there"'

    def test_string_escapes(self):
        assert render_display(string_tree('a"b\n')) == '"a\\"b\\n"'

    def test_raw_string(self):
        assert render_display(string_tree("hi\n"), raw=True) == "hi\n"

    def test_raw_only_affects_top_level(self):
        value = atom("Box", string_tree("hi"))
        assert render_display(value, raw=True) == 'Box("hi")'

    def test_improper_cons(self):
        assert render_display(cons(atom("A"), atom("B"))) == "A : B"

    def test_list_of_strings(self):
        value = list_tree([string_tree("ab"), string_tree("c")])
        assert render_display(value) == '["ab", "c"]'

    def test_malformed_reserved_tree(self):
        assert render_display(Tree(ListTag.CONS, (atom("A"),))) == "ListCons(A)"


class TestRenderPrint:
    """Tests for the machine-oriented form."""

    def test_string_shown_element_by_element(self):
        assert render_print(string_tree("ok")) == "['o', 'k']"

    def test_plain_values_match_display(self):
        value = atom("Pair", atom("A"), list_tree([atom("B")]))
        assert render_print(value) == render_display(value) == "Pair(A, [B])"


def test_string_text():
    assert string_text(string_tree("abc")) == "abc"
    assert string_text(empty_list()) == ""
    assert string_text(list_tree([atom("Ab")])) is None


def test_render_without_strings():
    assert render(string_tree("a"), strings=False) == "['a']"
