"""Surface language: AST, parser and lowering to the core tree."""

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
from arbor.surface.lower import Lowerer, lower_pattern, lower_program, lower_term
from arbor.surface.parser import ParseError, parse_pattern, parse_program, parse_term

__all__ = [
    # Terms
    "SurfaceTerm",
    "SurfaceTree",
    "SurfaceVar",
    "SurfaceApp",
    "SurfaceCons",
    "SurfaceString",
    "SurfaceList",
    "SurfaceMatch",
    "SurfaceClause",
    # Patterns
    "SurfacePattern",
    "SurfaceTreePattern",
    "SurfaceVarPattern",
    "SurfaceWildcard",
    "SurfaceAsPattern",
    "SurfaceConsPattern",
    "SurfaceStringPattern",
    "SurfaceListPattern",
    # Items
    "SurfaceItem",
    "SurfaceFunctionClause",
    "SurfaceLet",
    "SurfaceExpr",
    # Parser
    "ParseError",
    "parse_program",
    "parse_term",
    "parse_pattern",
    # Lowering
    "Lowerer",
    "lower_program",
    "lower_term",
    "lower_pattern",
]
