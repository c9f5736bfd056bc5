"""Parsy-based parser for the surface language.

Grammar:
    program  ::= (item ";")*

    item     ::= "fn" IDENT ("(" pattern,* ")")? "=" term
               | "let" pattern "=" term
               | term

    term     ::= term1 (":" term)?
    term1    ::= ATOM ("(" term,* ")")?
               | IDENT "(" term,* ")"
               | IDENT
               | STRING
               | "[" term,* "]"
               | "(" term ")"
               | "match" term,+ "{" clause,* "}"

    clause   ::= pattern,* "=>" term

    pattern  ::= pattern1 (":" pattern)?
    pattern1 ::= ATOM ("(" pattern,* ")")?
               | "_"
               | IDENT ("@" pattern)?
               | STRING
               | "[" pattern,* "]"
               | "(" pattern ")"

ATOM is a bare atom (``Zero``) or a quoted atom (``'zero'``). Comma
separated lists may be empty and may end with a trailing comma. Whitespace
and ``//`` comments may appear between any two tokens.
"""

from __future__ import annotations

import re

import parsy
from parsy import eof, fail, generate, line_info, line_info_at, regex, string, success

from arbor.core.errors import ArborError
from arbor.surface.ast import (
    SurfaceApp,
    SurfaceAsPattern,
    SurfaceClause,
    SurfaceCons,
    SurfaceConsPattern,
    SurfaceExpr,
    SurfaceFunctionClause,
    SurfaceItem,
    SurfaceLet,
    SurfaceList,
    SurfaceListPattern,
    SurfaceMatch,
    SurfacePattern,
    SurfaceString,
    SurfaceStringPattern,
    SurfaceTerm,
    SurfaceTree,
    SurfaceTreePattern,
    SurfaceVar,
    SurfaceVarPattern,
    SurfaceWildcard,
)
from arbor.utils.location import Location


KEYWORDS = frozenset({"fn", "let", "match", "_"})

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}


class ParseError(ArborError):
    """Error during parsing."""

    def __init__(self, message: str, location: Location):
        super().__init__(message, location)


def unescape(text: str) -> str:
    """Decode backslash escapes; an unknown escape yields the character itself."""
    return re.sub(r"\\(.)", lambda m: _ESCAPES.get(m.group(1), m.group(1)), text)


# =============================================================================
# Lexical layer
# =============================================================================

ignore = regex(r"(?:\s+|//[^\n\r]*)*")


def lexeme(parser: parsy.Parser) -> parsy.Parser:
    return parser << ignore


def symbol(text: str) -> parsy.Parser:
    return lexeme(string(text)).desc(repr(text))


def keyword(word: str) -> parsy.Parser:
    return lexeme(regex(word + r"(?![A-Za-z0-9_])")).desc(repr(word))


location = line_info.map(lambda info: Location(info[0] + 1, info[1] + 1))

lparen = symbol("(")
rparen = symbol(")")
lbracket = symbol("[")
rbracket = symbol("]")
lbrace = symbol("{")
rbrace = symbol("}")
comma = symbol(",")
semicolon = symbol(";")
colon = symbol(":")
at_sign = symbol("@")
arrow = symbol("=>")
equals = lexeme(regex(r"=(?!>)")).desc("'='")


def _not_keyword(name: str) -> parsy.Parser:
    return fail("identifier") if name in KEYWORDS else success(name)


identifier = lexeme(regex(r"[a-z_][A-Za-z0-9_]*").bind(_not_keyword)).desc("identifier")
bare_atom = lexeme(regex(r"[A-Z][A-Za-z0-9_]*")).desc("atom")
quoted_atom = lexeme(regex(r"'(?:\\.|[^'\\\n\r])*'")).map(lambda s: unescape(s[1:-1])).desc(
    "quoted atom"
)
atom_name = bare_atom | quoted_atom
string_literal = lexeme(regex(r'"(?:\\.|[^"\\\n\r])*"')).map(lambda s: unescape(s[1:-1])).desc(
    "string literal"
)
wildcard = lexeme(regex(r"_(?![A-Za-z0-9_])")).desc("'_'")


def comma_list(parser: parsy.Parser) -> parsy.Parser:
    """Zero or more comma separated items with an optional trailing comma."""
    return parser.sep_by(comma) << comma.optional()


def parenthesized(parser: parsy.Parser) -> parsy.Parser:
    return lparen >> comma_list(parser) << rparen


# =============================================================================
# Terms
# =============================================================================


@generate
def term():
    loc = yield location
    head = yield term1
    tail = yield (colon >> term).optional()
    if tail is None:
        return head
    return SurfaceCons(head, tail, location=loc)


@generate
def tree_term():
    loc = yield location
    functor = yield atom_name
    children = yield parenthesized(term).optional()
    return SurfaceTree(functor, children or [], location=loc)


@generate
def var_or_app():
    loc = yield location
    name = yield identifier
    args = yield parenthesized(term).optional()
    if args is None:
        return SurfaceVar(name, location=loc)
    return SurfaceApp(name, args, location=loc)


@generate
def string_term():
    loc = yield location
    text = yield string_literal
    return SurfaceString(text, location=loc)


@generate
def list_term():
    loc = yield location
    elements = yield lbracket >> comma_list(term) << rbracket
    return SurfaceList(elements, location=loc)


@generate
def match_clause():
    loc = yield location
    patterns = yield comma_list(pattern)
    yield arrow
    body = yield term
    return SurfaceClause(patterns, body, location=loc)


@generate
def match_term():
    loc = yield location
    yield keyword("match")
    scrutinees = yield term.sep_by(comma, min=1)
    yield lbrace
    clauses = yield comma_list(match_clause)
    yield rbrace
    return SurfaceMatch(scrutinees, clauses, location=loc)


term1 = (
    match_term
    | tree_term
    | var_or_app
    | string_term
    | list_term
    | (lparen >> term << rparen)
)


# =============================================================================
# Patterns
# =============================================================================


@generate
def pattern():
    loc = yield location
    head = yield pattern1
    tail = yield (colon >> pattern).optional()
    if tail is None:
        return head
    return SurfaceConsPattern(head, tail, location=loc)


@generate
def tree_pattern():
    loc = yield location
    functor = yield atom_name
    children = yield parenthesized(pattern).optional()
    return SurfaceTreePattern(functor, children or [], location=loc)


@generate
def wildcard_pattern():
    loc = yield location
    yield wildcard
    return SurfaceWildcard(location=loc)


@generate
def var_or_as_pattern():
    loc = yield location
    name = yield identifier
    inner = yield (at_sign >> pattern).optional()
    if inner is None:
        return SurfaceVarPattern(name, location=loc)
    return SurfaceAsPattern(name, inner, location=loc)


@generate
def string_pattern():
    loc = yield location
    text = yield string_literal
    return SurfaceStringPattern(text, location=loc)


@generate
def list_pattern():
    loc = yield location
    elements = yield lbracket >> comma_list(pattern) << rbracket
    return SurfaceListPattern(elements, location=loc)


pattern1 = (
    tree_pattern
    | wildcard_pattern
    | var_or_as_pattern
    | string_pattern
    | list_pattern
    | (lparen >> pattern << rparen)
)


# =============================================================================
# Items
# =============================================================================


@generate
def function_clause():
    loc = yield location
    yield keyword("fn")
    name = yield identifier
    patterns = yield parenthesized(pattern).optional()
    yield equals
    body = yield term
    return SurfaceFunctionClause(name, patterns or [], body, location=loc)


@generate
def let_binding():
    loc = yield location
    yield keyword("let")
    bound = yield pattern
    yield equals
    value = yield term
    return SurfaceLet(bound, value, location=loc)


@generate
def expression_item():
    loc = yield location
    value = yield term
    return SurfaceExpr(value, location=loc)


item = function_clause | let_binding | expression_item

program = ignore >> (item << semicolon).many()


# =============================================================================
# Entry points
# =============================================================================


def _run(parser: parsy.Parser, source: str, filename: str | None):
    try:
        return (parser << eof).parse(source)
    except parsy.ParseError as e:
        line, column = line_info_at(e.stream, e.index)
        found = repr(e.stream[e.index]) if e.index < len(e.stream) else "end of input"
        expected = " or ".join(sorted(e.expected))
        raise ParseError(
            f"expected {expected}, found {found}",
            Location(line + 1, column + 1, filename),
        ) from e


def parse_program(source: str, filename: str | None = None) -> list[SurfaceItem]:
    """Parse source text into surface items.

    Raises:
        ParseError: If the text does not follow the grammar
    """
    return _run(program, source, filename)


def parse_term(source: str) -> SurfaceTerm:
    """Parse a single term (surrounding whitespace allowed)."""
    return _run(ignore >> term, source, None)


def parse_pattern(source: str) -> SurfacePattern:
    """Parse a single pattern (surrounding whitespace allowed)."""
    return _run(ignore >> pattern, source, None)
