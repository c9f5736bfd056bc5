"""Driver tying the pipeline stages together."""

from __future__ import annotations

import contextlib
import sys
from pathlib import Path
from typing import Callable, Iterator

from loguru import logger

from arbor.config.settings import InterpreterSettings, load_settings
from arbor.core.ast import Item
from arbor.core.checker import ScopeChecker
from arbor.core.errors import ArborError
from arbor.eval.machine import Evaluator
from arbor.surface.ast import SurfaceItem
from arbor.surface.lower import Lowerer
from arbor.surface.parser import parse_program


class Interpreter:
    """Parse, lower, check and evaluate Arbor programs.

    Each run gets a fresh evaluator; the one used by the most recent run
    stays available as ``evaluator``.
    """

    def __init__(
        self,
        settings: InterpreterSettings | None = None,
        write: Callable[[str], None] | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.write = write
        self.lowerer = Lowerer()
        self.checker = ScopeChecker()
        self.evaluator: Evaluator | None = None

    def parse(self, source: str, filename: str | None = None) -> list[SurfaceItem]:
        return parse_program(source, filename)

    def lower(self, surface_items: list[SurfaceItem]) -> list[Item]:
        return self.lowerer.lower_program(surface_items)

    def check(self, items: list[Item]) -> None:
        self.checker.check_program(items)

    def compile(self, source: str, filename: str | None = None) -> list[Item]:
        """Parse, lower and check source, returning canonical items."""
        with _recursion_limit(self.settings.recursion_limit), _located(filename):
            items = self.lower(self.parse(source, filename))
            self.check(items)
        return items

    def run_source(self, source: str, filename: str | None = None) -> list[Item]:
        """Compile and evaluate source.

        Returns:
            The canonical items that were executed

        Raises:
            ArborError: On the first parse, check or evaluation failure
        """
        items = self.compile(source, filename)
        self.evaluator = Evaluator(
            write=self.write,
            hoist_definitions=self.settings.hoist_definitions,
            raw_display=self.settings.raw_display,
        )
        logger.info("run.start file={} items={}", filename or "<string>", len(items))
        with _recursion_limit(self.settings.recursion_limit), _located(filename):
            self.evaluator.evaluate_program(items)
        logger.info("run.done file={}", filename or "<string>")
        return items

    def run_file(self, path: str | Path) -> list[Item]:
        path = Path(path)
        return self.run_source(path.read_text(encoding="utf-8"), str(path))


@contextlib.contextmanager
def _located(filename: str | None) -> Iterator[None]:
    """Attach filename to the location of any ArborError leaving the block."""
    try:
        yield
    except ArborError as e:
        if filename and e.location is not None and e.location.file is None:
            e.location = e.location.with_file(filename)
        raise


@contextlib.contextmanager
def _recursion_limit(limit: int) -> Iterator[None]:
    """Raise the interpreter recursion limit to at least limit inside the block."""
    previous = sys.getrecursionlimit()
    sys.setrecursionlimit(max(previous, limit))
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)
