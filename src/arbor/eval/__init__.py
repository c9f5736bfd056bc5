"""Evaluation: runtime values, pattern matching, rendering and the evaluator."""

from arbor.eval.machine import Evaluator
from arbor.eval.pattern import PatternMatcher
from arbor.eval.printer import render, render_display, render_print, string_text
from arbor.eval.value import (
    EMPTY_LIST,
    BuiltinOperation,
    DefinedOperation,
    Environment,
    Operation,
    Substitution,
    Value,
    as_list,
    structurally_equal,
)

__all__ = [
    "Evaluator",
    "PatternMatcher",
    # Values
    "Value",
    "Substitution",
    "EMPTY_LIST",
    "Environment",
    "Operation",
    "BuiltinOperation",
    "DefinedOperation",
    "as_list",
    "structurally_equal",
    # Rendering
    "render",
    "render_display",
    "render_print",
    "string_text",
]
