"""Tests for lowering surface items to canonical items."""

from arbor.core.ast import (
    App,
    AsPattern,
    Clause,
    ExprItem,
    FunctionDef,
    LetBinding,
    ListTag,
    Match,
    Tree,
    TreePattern,
    Var,
    VarPattern,
    WildcardPattern,
    cons,
    empty_list,
    list_tree,
    string_tree,
)
from arbor.surface.lower import Lowerer, lower_pattern, lower_program, lower_term
from arbor.surface.parser import parse_pattern, parse_program, parse_term


class TestLowerTerms:
    """Tests for term sugar."""

    def test_cons_becomes_reserved_tree(self):
        result = lower_term(parse_term("x : xs"))
        assert result == Tree(ListTag.CONS, (Var("x"), Var("xs")))

    def test_list_literal_is_right_fold(self):
        result = lower_term(parse_term("[A, B]"))
        assert result == cons(Tree("A"), cons(Tree("B"), empty_list()))

    def test_empty_list_literal(self):
        assert lower_term(parse_term("[]")) == Tree(ListTag.EMPTY)

    def test_string_is_list_of_char_atoms(self):
        result = lower_term(parse_term('"hi"'))
        assert result == list_tree([Tree("h"), Tree("i")])
        assert result == string_tree("hi")

    def test_cons_onto_list(self):
        result = lower_term(parse_term("A : [B]"))
        assert result == list_tree([Tree("A"), Tree("B")])

    def test_application_and_match(self):
        result = lower_term(parse_term("match f(x) { [] => E, _ => N }"))
        assert result == Match(
            (App("f", (Var("x"),)),),
            (
                Clause((TreePattern(ListTag.EMPTY),), Tree("E")),
                Clause((WildcardPattern(),), Tree("N")),
            ),
        )

    def test_reserved_tag_names_stay_atoms(self):
        result = lower_term(parse_term("ListCons(A, B)"))
        assert result.functor == "ListCons"
        assert result != cons(Tree("A"), Tree("B"))


class TestLowerPatterns:
    """Tests for pattern sugar."""

    def test_cons_pattern(self):
        result = lower_pattern(parse_pattern("h:t"))
        assert result == TreePattern(ListTag.CONS, (VarPattern("h"), VarPattern("t")))

    def test_string_pattern_matches_string_value_shape(self):
        result = lower_pattern(parse_pattern('"ab"'))
        assert result == TreePattern(
            ListTag.CONS,
            (
                TreePattern("a"),
                TreePattern(ListTag.CONS, (TreePattern("b"), TreePattern(ListTag.EMPTY))),
            ),
        )

    def test_as_pattern(self):
        result = lower_pattern(parse_pattern("all @ [x]"))
        assert result == AsPattern(
            "all", TreePattern(ListTag.CONS, (VarPattern("x"), TreePattern(ListTag.EMPTY)))
        )


class TestLowerProgram:
    """Tests for item consolidation."""

    def test_clauses_merged_at_first_occurrence(self):
        items = lower_program(
            parse_program("fn f(Zero) = A; display(A); fn f(Suc(n)) = B; let x = A;")
        )
        assert [type(item) for item in items] == [FunctionDef, ExprItem, LetBinding]
        definition = items[0]
        assert definition.name == "f"
        assert [clause.body for clause in definition.clauses] == [Tree("A"), Tree("B")]
        assert definition.arity == 1

    def test_interleaved_functions_keep_order(self):
        items = lower_program(parse_program("fn a = A; fn b = B; fn a = C;"))
        assert [item.name for item in items] == ["a", "b"]
        assert len(items[0].clauses) == 2

    def test_let_and_expression_pass_through(self):
        items = lower_program(parse_program('let h:t = "ab"; print(t);'))
        assert items == [
            LetBinding(
                TreePattern(ListTag.CONS, (VarPattern("h"), VarPattern("t"))),
                string_tree("ab"),
            ),
            ExprItem(App("print", (Var("t"),))),
        ]

    def test_lowering_is_pure(self):
        surface = parse_program("fn f(x:xs) = [x, \"s\"]; let [a, _] = f([A]);")
        assert Lowerer().lower_program(surface) == Lowerer().lower_program(surface)
        assert lower_program(surface) == lower_program(surface)

    def test_locations_are_kept(self):
        items = lower_program(parse_program("\nfn f = A;"))
        assert items[0].location.line == 2
