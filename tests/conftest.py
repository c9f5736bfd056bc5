"""Test configuration and shared fixtures."""

from pathlib import Path

import pytest

from arbor.config.settings import InterpreterSettings
from arbor.interpreter import Interpreter


@pytest.fixture
def programs_dir() -> Path:
    """Returns the absolute path to the example programs."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def run_program():
    """Run source text and return the lines written by display/print."""

    def _run(source: str, **settings) -> list[str]:
        lines: list[str] = []
        interpreter = Interpreter(InterpreterSettings(**settings), write=lines.append)
        interpreter.run_source(source)
        return lines

    return _run
