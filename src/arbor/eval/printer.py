"""Textual rendering of values for the ``display`` and ``print`` built-ins."""

from __future__ import annotations

from arbor.core.ast import ListTag
from arbor.eval.value import Value, as_list, is_char

_STRING_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t", "\r": "\\r"}
_ATOM_ESCAPES = {"\\": "\\\\", "'": "\\'", "\n": "\\n", "\t": "\\t", "\r": "\\r"}


def _escape(text: str, table: dict[str, str]) -> str:
    return "".join(table.get(char, char) for char in text)


def render_atom(name: str) -> str:
    """Capitalised atoms print bare, everything else single-quoted."""
    if name and "A" <= name[0] <= "Z":
        return name
    return "'" + _escape(name, _ATOM_ESCAPES) + "'"


def string_text(value: Value) -> str | None:
    """The text of a list of one-character atoms, else None.

    The empty list is the empty string.
    """
    elements = as_list(value)
    if elements is None or not all(is_char(element) for element in elements):
        return None
    return "".join(element.functor for element in elements)


def render(value: Value, strings: bool = True) -> str:
    """Render a value.

    Args:
        value: Evaluated tree
        strings: Render lists of one-character atoms as string literals
    """
    if strings:
        text = string_text(value)
        if text is not None:
            return '"' + _escape(text, _STRING_ESCAPES) + '"'

    elements = as_list(value)
    if elements is not None:
        if not elements:
            return '""'
        return "[" + ", ".join(render(element, strings) for element in elements) + "]"

    if value.functor is ListTag.CONS and len(value.children) == 2:
        head, tail = value.children
        return f"{render(head, strings)} : {render(tail, strings)}"

    if isinstance(value.functor, ListTag):
        name = str(value.functor)
    else:
        name = render_atom(value.functor)
    if not value.children:
        return name
    return f"{name}({', '.join(render(child, strings) for child in value.children)})"


def render_display(value: Value, raw: bool = False) -> str:
    """Human-oriented form; with raw, a top-level string is written bare."""
    if raw:
        text = string_text(value)
        if text is not None:
            return text
    return render(value, strings=True)


def render_print(value: Value) -> str:
    """Machine-oriented form: strings are shown element by element."""
    return render(value, strings=False)
