"""Source locations for error reporting."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """Source code location with line and column info (both 1-based)."""

    line: int
    column: int
    file: str | None = None

    def with_file(self, file: str | None) -> "Location":
        return Location(self.line, self.column, file)

    def __str__(self) -> str:
        if self.file:
            return f"{self.file}:{self.line}:{self.column}"
        return f"line {self.line}, column {self.column}"
