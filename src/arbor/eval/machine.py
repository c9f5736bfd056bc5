"""Evaluator for the canonical item list."""

from __future__ import annotations

import sys
from typing import Callable

from loguru import logger

from arbor.core.ast import (
    App,
    ExprItem,
    FunctionDef,
    Item,
    LetBinding,
    ListTag,
    Match,
    Term,
    Tree,
    Var,
)
from arbor.core.errors import PatternMatchExhausted, UnboundName
from arbor.eval.pattern import PatternMatcher
from arbor.eval.printer import render_display, render_print
from arbor.eval.value import (
    EMPTY_LIST,
    BuiltinOperation,
    DefinedOperation,
    Environment,
    Operation,
    Value,
)
from arbor.utils.location import Location


def _write_stdout(line: str) -> None:
    sys.stdout.write(line + "\n")


class Evaluator:
    """Call-by-value, pattern-directed evaluator.

    Holds the two pieces of shared state: the global environment and the
    operation table. Both only change between top-level items.
    """

    def __init__(
        self,
        write: Callable[[str], None] | None = None,
        hoist_definitions: bool = True,
        raw_display: bool = False,
    ) -> None:
        self.pattern_matcher = PatternMatcher()
        self.global_env = Environment.empty()
        self.write = write if write is not None else _write_stdout
        self.hoist_definitions = hoist_definitions
        self.raw_display = raw_display
        self.operations: dict[str, Operation] = {
            "display": BuiltinOperation("display", self._display),
            "print": BuiltinOperation("print", self._print),
        }

    # =====================================================================
    # Built-ins
    # =====================================================================

    def _display(self, *values: Value) -> Value:
        """Write the values on one line in human-oriented form."""
        self.write(" ".join(render_display(value, raw=self.raw_display) for value in values))
        return EMPTY_LIST

    def _print(self, *values: Value) -> Value:
        """Write each value on its own line in machine-oriented form."""
        for value in values:
            self.write(render_print(value))
        return EMPTY_LIST

    # =====================================================================
    # Items
    # =====================================================================

    def evaluate_program(self, items: list[Item]) -> list[Value]:
        """Run items in order.

        With ``hoist_definitions`` every function is registered before the
        first binding or expression runs. Otherwise a function only becomes
        callable once its definition has been reached.

        Returns:
            The values of the bare expressions, in order
        """
        if self.hoist_definitions:
            for item in items:
                if isinstance(item, FunctionDef):
                    self.define(item)

        results = []
        for item in items:
            value = self.execute(item)
            if value is not None:
                results.append(value)
        return results

    def execute(self, item: Item) -> Value | None:
        """Process one top-level item; returns the value of a bare expression."""
        match item:
            case FunctionDef():
                self.define(item)
                return None

            case LetBinding(pattern, term):
                value = self.evaluate(term, self.global_env)
                substitution = self.pattern_matcher.match(pattern, value)
                if substitution is None:
                    raise PatternMatchExhausted(None, (value,), item.location, render=render_display)
                self.global_env.define_all(substitution)
                logger.debug("eval.let names={}", ",".join(substitution) or "<none>")
                return None

            case ExprItem(term):
                return self.evaluate(term, self.global_env)

            case _:
                raise TypeError(f"Unknown item type: {type(item)}")

    def define(self, definition: FunctionDef) -> None:
        """Register (or replace) a function in the operation table."""
        self.operations[definition.name] = DefinedOperation(definition.name, definition.clauses)
        logger.debug(
            "eval.define name={} clauses={} arity={}",
            definition.name,
            len(definition.clauses),
            definition.arity,
        )

    # =====================================================================
    # Terms
    # =====================================================================

    def evaluate(self, term: Term, env: Environment | None = None) -> Value:
        """Evaluate term to a value.

        Arguments and children are evaluated left to right before use.
        """
        if env is None:
            env = self.global_env

        match term:
            case Tree():
                return self._evaluate_tree(term, env)

            case Var(name):
                try:
                    return env.lookup(name)
                except UnboundName as e:
                    # A bare reference to a function without parameters calls it.
                    op = self.operations.get(name)
                    if isinstance(op, DefinedOperation) and op.arity == 0:
                        return self.apply(op, (), env)
                    raise UnboundName(name, location=term.location) from e

            case App(op_name, args):
                values = tuple([self.evaluate(arg, env) for arg in args])
                op = self.lookup_operation(op_name, term.location)
                return self.apply(op, values, env)

            case Match(scrutinees, clauses):
                values = tuple([self.evaluate(scrutinee, env) for scrutinee in scrutinees])
                clause, substitution = self.pattern_matcher.select_clause(
                    clauses, values, location=term.location
                )
                return self.evaluate(clause.body, env.extend(substitution))

            case _:
                raise TypeError(f"Unknown term type: {type(term)}")

    def _evaluate_tree(self, tree: Tree, env: Environment) -> Value:
        """Evaluate a tree, walking cons spines without recursing.

        Heads are evaluated front to back, then the final tail. A subtree
        whose parts all evaluate to themselves is returned unchanged.
        """
        spine: list[Tree] = []
        tail: Term = tree
        while isinstance(tail, Tree) and tail.functor is ListTag.CONS and len(tail.children) == 2:
            spine.append(tail)
            tail = tail.children[1]

        heads = [self.evaluate(cell.children[0], env) for cell in spine]

        if isinstance(tail, Tree):
            children = tuple([self.evaluate(child, env) for child in tail.children])
            if all(new is old for new, old in zip(children, tail.children)):
                result = tail
            else:
                result = Tree(tail.functor, children)
        else:
            result = self.evaluate(tail, env)

        for cell, head in zip(reversed(spine), reversed(heads)):
            if head is cell.children[0] and result is cell.children[1]:
                result = cell
            else:
                result = Tree(ListTag.CONS, (head, result))
        return result

    def lookup_operation(self, name: str, location: Location | None = None) -> Operation:
        """Resolve an operation by name.

        Raises:
            UnboundName: If no operation of that name has been registered
        """
        op = self.operations.get(name)
        if op is None:
            raise UnboundName(name, kind="operation", location=location)
        return op

    def apply(self, op: Operation, args: tuple[Value, ...], env: Environment) -> Value:
        """Apply an operation to evaluated arguments.

        A user-defined body runs in ``env`` (the caller's environment)
        extended with the bindings of the selected clause.
        """
        match op:
            case BuiltinOperation(_, impl):
                return impl(*args)

            case DefinedOperation(name, clauses):
                clause, substitution = self.pattern_matcher.select_clause(
                    clauses, args, op_name=name
                )
                return self.evaluate(clause.body, env.extend(substitution))

            case _:
                raise TypeError(f"Cannot apply non-operation: {op}")
