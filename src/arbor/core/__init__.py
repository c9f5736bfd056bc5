"""Core language: canonical AST, errors and the scope checker."""

from arbor.core.ast import (
    BUILTIN_OPERATIONS,
    App,
    AsPattern,
    Clause,
    ExprItem,
    Functor,
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
    atom,
    cons,
    empty_list,
    list_tree,
    pattern_vars,
    string_tree,
)
from arbor.core.checker import ScopeChecker, check_program
from arbor.core.errors import (
    ArborError,
    ArityMismatch,
    CheckError,
    EvaluationError,
    PatternMatchExhausted,
    UnboundName,
    UnboundOperation,
    UnboundVariable,
)

__all__ = [
    # AST
    "BUILTIN_OPERATIONS",
    "Functor",
    "ListTag",
    "Term",
    "Tree",
    "Var",
    "App",
    "Match",
    "Pattern",
    "TreePattern",
    "VarPattern",
    "WildcardPattern",
    "AsPattern",
    "Clause",
    "FunctionDef",
    "LetBinding",
    "ExprItem",
    "Item",
    # Builders
    "atom",
    "cons",
    "empty_list",
    "list_tree",
    "string_tree",
    "pattern_vars",
    # Checker
    "ScopeChecker",
    "check_program",
    # Errors
    "ArborError",
    "CheckError",
    "EvaluationError",
    "UnboundVariable",
    "UnboundOperation",
    "ArityMismatch",
    "PatternMatchExhausted",
    "UnboundName",
]
