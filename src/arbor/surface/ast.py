"""Surface language AST.

Produced by the parser and consumed once by lowering. Unlike the core
tree, the surface keeps the sugared forms: cons (``head : tail``), string
literals and list literals, and one item per function clause.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from arbor.utils.location import Location


# =============================================================================
# Surface Terms
# =============================================================================


class SurfaceTerm:
    """Base class for surface terms."""

    pass


@dataclass(frozen=True)
class SurfaceTree(SurfaceTerm):
    """Atom with optional children: Atom or Atom(t1, ..., tn)."""

    functor: str
    children: list[SurfaceTerm] = field(default_factory=list)
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        if not self.children:
            return self.functor
        args_str = ", ".join(str(child) for child in self.children)
        return f"{self.functor}({args_str})"


@dataclass(frozen=True)
class SurfaceVar(SurfaceTerm):
    """Variable reference by name: x."""

    name: str
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class SurfaceApp(SurfaceTerm):
    """Operation call: f(t1, ..., tn)."""

    op_name: str
    args: list[SurfaceTerm] = field(default_factory=list)
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        args_str = ", ".join(str(arg) for arg in self.args)
        return f"{self.op_name}({args_str})"


@dataclass(frozen=True)
class SurfaceCons(SurfaceTerm):
    """Cons sugar: head : tail."""

    head: SurfaceTerm
    tail: SurfaceTerm
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"({self.head} : {self.tail})"


@dataclass(frozen=True)
class SurfaceString(SurfaceTerm):
    """String literal: "text"."""

    text: str
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return f'"{self.text}"'


@dataclass(frozen=True)
class SurfaceList(SurfaceTerm):
    """List literal: [t1, ..., tn]."""

    elements: list[SurfaceTerm] = field(default_factory=list)
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return "[" + ", ".join(str(elt) for elt in self.elements) + "]"


@dataclass(frozen=True)
class SurfaceClause:
    """Match clause: p1, ..., pn => body."""

    patterns: list[SurfacePattern]
    body: SurfaceTerm
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        pats_str = ", ".join(str(pattern) for pattern in self.patterns)
        return f"{pats_str} => {self.body}"


@dataclass(frozen=True)
class SurfaceMatch(SurfaceTerm):
    """match t1, ..., tn { clause, ... }"""

    scrutinees: list[SurfaceTerm]
    clauses: list[SurfaceClause]
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        scrut_str = ", ".join(str(term) for term in self.scrutinees)
        clauses_str = ", ".join(str(clause) for clause in self.clauses)
        return f"match {scrut_str} {{ {clauses_str} }}"


# =============================================================================
# Surface Patterns
# =============================================================================


class SurfacePattern:
    """Base class for surface patterns."""

    pass


@dataclass(frozen=True)
class SurfaceTreePattern(SurfacePattern):
    """Atom pattern with optional children."""

    functor: str
    children: list[SurfacePattern] = field(default_factory=list)
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        if not self.children:
            return self.functor
        args_str = ", ".join(str(child) for child in self.children)
        return f"{self.functor}({args_str})"


@dataclass(frozen=True)
class SurfaceVarPattern(SurfacePattern):
    """Binding occurrence: x."""

    name: str
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class SurfaceWildcard(SurfacePattern):
    """Wildcard: _."""

    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return "_"


@dataclass(frozen=True)
class SurfaceAsPattern(SurfacePattern):
    """As-pattern: name @ pattern."""

    name: str
    pattern: SurfacePattern
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"{self.name} @ {self.pattern}"


@dataclass(frozen=True)
class SurfaceConsPattern(SurfacePattern):
    """Cons pattern: head : tail."""

    head: SurfacePattern
    tail: SurfacePattern
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"({self.head} : {self.tail})"


@dataclass(frozen=True)
class SurfaceStringPattern(SurfacePattern):
    """String literal pattern."""

    text: str
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return f'"{self.text}"'


@dataclass(frozen=True)
class SurfaceListPattern(SurfacePattern):
    """List literal pattern: [p1, ..., pn]."""

    elements: list[SurfacePattern] = field(default_factory=list)
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return "[" + ", ".join(str(elt) for elt in self.elements) + "]"


# =============================================================================
# Surface Items
# =============================================================================


class SurfaceItem:
    """Base class for top-level items."""

    pass


@dataclass(frozen=True)
class SurfaceFunctionClause(SurfaceItem):
    """One clause of a function: fn name(p1, ..., pn) = body.

    Clauses of the same name are merged during lowering.
    """

    name: str
    patterns: list[SurfacePattern]
    body: SurfaceTerm
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        pats_str = ", ".join(str(pattern) for pattern in self.patterns)
        return f"fn {self.name}({pats_str}) = {self.body}"


@dataclass(frozen=True)
class SurfaceLet(SurfaceItem):
    """Destructuring binding: let pattern = term."""

    pattern: SurfacePattern
    term: SurfaceTerm
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"let {self.pattern} = {self.term}"


@dataclass(frozen=True)
class SurfaceExpr(SurfaceItem):
    """Bare expression evaluated for effect."""

    term: SurfaceTerm
    location: Location | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return str(self.term)
