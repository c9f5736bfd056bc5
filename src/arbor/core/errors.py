"""Error types raised by the checker and the evaluator."""

from typing import Any, Callable

from arbor.utils.location import Location


class ArborError(Exception):
    """Base class for every failure reported to the user."""

    location: Location | None

    def __init__(self, message: str, location: Location | None = None):
        super().__init__(message)
        self.message = message
        self.location = location

    @property
    def kind(self) -> str:
        return type(self).__name__

    def describe(self) -> str:
        """Message prefixed with the location when one is known."""
        if self.location is not None:
            return f"{self.location}: {self.message}"
        return self.message


# =============================================================================
# Static errors
# =============================================================================


class CheckError(ArborError):
    """Raised by the scope/arity checker before evaluation starts."""


class UnboundVariable(CheckError):
    """Variable referenced where no binder is visible."""

    def __init__(self, name: str, location: Location | None = None):
        self.name = name
        super().__init__(f"unbound variable: {name!r}", location)


class UnboundOperation(CheckError):
    """Operation called where no definition is visible."""

    def __init__(self, name: str, location: Location | None = None):
        self.name = name
        super().__init__(f"unbound operation: {name!r}", location)


class ArityMismatch(CheckError):
    """Clause pattern count differs from the expected count."""

    def __init__(
        self,
        name: str,
        expected: int,
        found: int,
        location: Location | None = None,
    ):
        self.name = name
        self.expected = expected
        self.found = found
        super().__init__(
            f"{name}: every clause must have {expected} pattern(s), found one with {found}",
            location,
        )


# =============================================================================
# Runtime errors
# =============================================================================


class EvaluationError(ArborError):
    """Raised while running a checked program."""


class PatternMatchExhausted(EvaluationError):
    """No clause of a function, match or binding accepted the values."""

    def __init__(
        self,
        op_name: str | None = None,
        values: tuple = (),
        location: Location | None = None,
        render: Callable[[Any], str] = str,
    ):
        self.op_name = op_name
        self.values = values
        shown = ", ".join(render(value) for value in values)
        if op_name is not None:
            message = f"pattern match failure: {op_name}({shown})"
        else:
            message = f"pattern match failure: ({shown})"
        super().__init__(message, location)


class UnboundName(EvaluationError):
    """Runtime lookup of a variable or operation failed."""

    def __init__(self, name: str, kind: str = "name", location: Location | None = None):
        self.name = name
        self.lookup_kind = kind
        if kind == "operation":
            message = f"no such operation: {name!r}"
        else:
            message = f"unbound name: {name!r}"
        super().__init__(message, location)
