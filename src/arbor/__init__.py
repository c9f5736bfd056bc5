"""Arbor: an interpreter for a small untyped tree-rewriting language."""

__version__ = "0.1.0"
