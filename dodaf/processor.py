"""JSON-LD processing on top of rdflib's JSON-LD plugin.

All operations go through an rdflib Graph: the document is expanded to RDF
with the ``json-ld`` parser, then written back out as compacted JSON-LD,
N-Quads or canonical N-Quads. ``context`` is applied as the expansion
context only when the document does not carry its own ``@context``, so bare
documents are read with the ontology's term mappings.

These functions raise on malformed input. The validators in
``shacl_validation`` and ``validation`` catch and report.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from rdflib import Dataset, Graph
from rdflib.compare import to_canonical_graph

from .config import DEFAULT_BASE

logger = logging.getLogger(__name__)


def expand_context(document: Any, context: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """The context to expand ``document`` with, or None when it brings its own."""
    if context is None:
        return None
    if isinstance(document, Mapping) and "@context" in document:
        return None
    return dict(context)


def to_graph(
    document: Any,
    context: Mapping[str, Any] | None = None,
    base: str = DEFAULT_BASE,
) -> Graph:
    """Expand a JSON-LD document (a parsed JSON value) into a Graph."""
    if not isinstance(document, (Mapping, list)):
        raise ValueError(f"JSON-LD document must be an object or array, got {type(document).__name__}")
    g = Graph()
    g.parse(
        data=json.dumps(document),
        format="json-ld",
        context=expand_context(document, context),
        base=base,
    )
    logger.debug("Expanded JSON-LD document into %d triples", len(g))
    return g


def expand(
    document: Any,
    context: Mapping[str, Any] | None = None,
    base: str = DEFAULT_BASE,
) -> list[dict[str, Any]]:
    """Expanded (flattened) JSON-LD node objects; empty when nothing expands."""
    expanded = json.loads(to_graph(document, context, base).serialize(format="json-ld"))
    return expanded if isinstance(expanded, list) else [expanded]


def compact(
    document: Any,
    context: Mapping[str, Any],
    base: str = DEFAULT_BASE,
) -> dict[str, Any]:
    """Compact ``document`` against ``context``."""
    return compact_graph(to_graph(document, context, base), context)


def compact_graph(graph: Graph, context: Mapping[str, Any]) -> dict[str, Any]:
    """Compacted JSON-LD for an already expanded graph."""
    compacted = json.loads(graph.serialize(format="json-ld", context=dict(context), auto_compact=True))
    if isinstance(compacted, list):
        compacted = {"@context": dict(context), "@graph": compacted}
    return compacted


def to_nquads(
    document: Any,
    context: Mapping[str, Any] | None = None,
    base: str = DEFAULT_BASE,
) -> str:
    """Convert a JSON-LD document to N-Quads, one statement per line, sorted."""
    ds = Dataset()
    for triple in to_graph(document, context, base):
        ds.add(triple)
    return _sorted_lines(ds.serialize(format="nquads"))


def normalize(
    document: Any,
    context: Mapping[str, Any] | None = None,
    base: str = DEFAULT_BASE,
) -> str:
    """Canonical N-Quads: blank nodes relabelled deterministically, lines sorted.

    Two documents describing the same graph normalize to the same text.
    """
    canonical = Graph()
    canonical += to_canonical_graph(to_graph(document, context, base))
    return _sorted_lines(canonical.serialize(format="nt"))


def parse_nquads(text: str) -> Graph:
    """Load N-Quads into a single Graph (the union of all graphs in the text)."""
    ds = Dataset(default_union=True)
    ds.parse(data=text, format="nquads")
    g = Graph()
    for triple in ds.triples((None, None, None)):
        g.add(triple)
    return g


def _sorted_lines(text: str) -> str:
    lines = sorted(line.strip() for line in text.splitlines() if line.strip())
    return "".join(f"{line}\n" for line in lines)
