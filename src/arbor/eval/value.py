"""Runtime values, operations and environments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

from arbor.core.ast import Clause, ListTag, Tree
from arbor.core.errors import UnboundName


# An evaluated term: a Tree whose descendants are all Trees.
Value = Tree

Substitution = Mapping[str, Value]

EMPTY_LIST: Value = Tree(ListTag.EMPTY)


def structurally_equal(left: Value, right: Value) -> bool:
    """Recursive shape equality.

    Two trees are equal iff their functors are equal, they have the same
    number of children and the children are pairwise equal. Child
    sequences of different length are never compared positionally.
    """
    pending = [(left, right)]
    while pending:
        a, b = pending.pop()
        if a is b:
            continue
        if not isinstance(a, Tree) or not isinstance(b, Tree):
            return False
        if a.functor != b.functor or len(a.children) != len(b.children):
            return False
        pending.extend(zip(a.children, b.children))
    return True


def as_list(value: Value) -> list[Value] | None:
    """Elements of a proper list, or None if value is not one."""
    elements = []
    while True:
        if value.functor is ListTag.EMPTY and not value.children:
            return elements
        if value.functor is ListTag.CONS and len(value.children) == 2:
            head, value = value.children
            elements.append(head)
            continue
        return None


def is_char(value: Value) -> bool:
    """One-character user atom without children."""
    return isinstance(value.functor, str) and len(value.functor) == 1 and not value.children


@dataclass(frozen=True)
class BuiltinOperation:
    """Operation implemented in Python.

    The implementation receives the evaluated arguments and returns a value.
    """

    name: str
    impl: Callable[..., Value]

    def __str__(self) -> str:
        return f"<builtin:{self.name}>"


@dataclass(frozen=True)
class DefinedOperation:
    """Operation defined by the program's clauses."""

    name: str
    clauses: tuple[Clause, ...]

    @property
    def arity(self) -> int:
        return self.clauses[0].arity if self.clauses else 0

    def __str__(self) -> str:
        return f"<fn:{self.name}/{self.arity}>"


Operation = BuiltinOperation | DefinedOperation


class Environment:
    """Chain of binding frames, nearest first.

    Only the global frame is ever extended in place (``define_all``); every
    clause or match invocation gets a fresh frame from ``extend``.
    """

    __slots__ = ("bindings", "parent")

    def __init__(
        self,
        bindings: Mapping[str, Value] | None = None,
        parent: Environment | None = None,
    ) -> None:
        self.bindings: dict[str, Value] = dict(bindings) if bindings else {}
        self.parent = parent

    @staticmethod
    def empty() -> Environment:
        """Create an empty environment."""
        return Environment()

    def lookup(self, name: str) -> Value:
        """Find the nearest binding of name.

        Raises:
            UnboundName: If no frame binds name
        """
        frame: Environment | None = self
        while frame is not None:
            if name in frame.bindings:
                return frame.bindings[name]
            frame = frame.parent
        raise UnboundName(name)

    def __contains__(self, name: str) -> bool:
        frame: Environment | None = self
        while frame is not None:
            if name in frame.bindings:
                return True
            frame = frame.parent
        return False

    def extend(self, bindings: Substitution) -> Environment:
        """New frame holding bindings, layered on top of this one."""
        return Environment(bindings, self)

    def define_all(self, bindings: Substitution) -> None:
        """Merge bindings into this frame in place."""
        self.bindings.update(bindings)

    def depth(self) -> int:
        count = 0
        frame: Environment | None = self
        while frame is not None:
            count += 1
            frame = frame.parent
        return count

    def __str__(self) -> str:
        return f"Environment({len(self.bindings)} bindings, depth {self.depth()})"
