"""Utility helpers for rmlwrap."""

from .rdf import as_statement, has_named_graphs, isomorphic, parse_statements, serialize_statements

__all__ = [
    "as_statement",
    "has_named_graphs",
    "isomorphic",
    "parse_statements",
    "serialize_statements",
]
