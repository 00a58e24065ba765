"""
Graph data helpers built on rdflib.

Converts between serialized RDF text and flat lists of ``Statement`` tuples,
and compares statement sets up to blank node renaming.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from typing import Any

from rdflib import Dataset, Graph
from rdflib.compare import isomorphic as graphs_isomorphic
from rdflib.graph import DATASET_DEFAULT_GRAPH_ID

from ..core.models.execution import SERIALIZATION_FORMATS, Statement


def _rdflib_format(format: str) -> str:
    if format in SERIALIZATION_FORMATS:
        return SERIALIZATION_FORMATS[format].rdflib_format
    return format


def _graph_name(graph: Any) -> Any:
    """Normalize a context to its identifier; the default graph becomes None."""
    if graph is None:
        return None
    if isinstance(graph, Graph):
        graph = graph.identifier
    if graph == DATASET_DEFAULT_GRAPH_ID:
        return None
    return graph


def as_statement(item: Sequence[Any]) -> Statement:
    """Coerce a 3- or 4-tuple of rdflib terms into a Statement."""
    if isinstance(item, Statement):
        return Statement(item.subject, item.predicate, item.object, _graph_name(item.graph))
    if len(item) == 3:
        s, p, o = item
        return Statement(s, p, o)
    if len(item) == 4:
        s, p, o, g = item
        return Statement(s, p, o, _graph_name(g))
    raise ValueError(f"Expected a triple or quad, got {len(item)} terms")


def parse_statements(text: str, format: str = "nquads") -> list[Statement]:
    """
    Parse serialized RDF into a list of statements.

    Args:
        text: Serialized graph data
        format: Engine serialization name (e.g. "nquads", "jsonld") or an
            rdflib parser name

    Returns:
        Statements in no particular order; default-graph statements have
        ``graph=None``

    Raises:
        Whatever rdflib raises for malformed input; callers wrap it.
    """
    if not text.strip():
        return []

    dataset = Dataset()
    parsed_into = dataset.parse(data=text, format=_rdflib_format(format))

    # Depending on the rdflib version, unnamed statements land either in the
    # dataset's default graph or in a graph named after the parse source.
    default_ids = {DATASET_DEFAULT_GRAPH_ID, parsed_into.identifier}

    statements = []
    for context in dataset.graphs():
        name = None if context.identifier in default_ids else context.identifier
        for s, p, o in context:
            statements.append(Statement(s, p, o, name))
    return statements


def has_named_graphs(statements: Iterable[Sequence[Any]]) -> bool:
    return any(as_statement(item).graph is not None for item in statements)


def serialize_statements(statements: Iterable[Sequence[Any]]) -> str:
    """
    Serialize statements to sorted N-Triples, or N-Quads if any are named.

    Sorting the lines makes the output stable for equal inputs. N-Triples is
    a subset of Turtle, so the result can be fed to parsers expecting Turtle.
    """
    lines = []
    for name, graph in _group_by_graph(statements).items():
        for line in graph.serialize(format="nt").splitlines():
            line = line.strip()
            if not line:
                continue
            if name is not None:
                # N-Triples rows end in " ."; the graph term goes right before it
                line = f"{line[:-1].rstrip()} {name.n3()} ."
            lines.append(line)

    lines.sort()
    return "\n".join(lines) + "\n" if lines else ""


def _group_by_graph(statements: Iterable[Sequence[Any]]) -> dict[Any, Graph]:
    groups: dict[Any, Graph] = defaultdict(Graph)
    for item in statements:
        st = as_statement(item)
        groups[st.graph].add((st.subject, st.predicate, st.object))
    return groups


def isomorphic(left: Iterable[Sequence[Any]], right: Iterable[Sequence[Any]]) -> bool:
    """
    Check two statement collections for equality up to blank node renaming.

    Graph names must match exactly; each named graph is compared on its own.
    """
    left_groups = _group_by_graph(left)
    right_groups = _group_by_graph(right)
    if left_groups.keys() != right_groups.keys():
        return False
    return all(graphs_isomorphic(left_groups[key], right_groups[key]) for key in left_groups)
