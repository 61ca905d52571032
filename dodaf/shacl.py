"""SHACL shape generation.

One ``sh:NodeShape`` named ``<classIri>Shape`` per schema, targeting the
schema's class. Each annotated field becomes a property shape, named
``<classIri>Shape_<field>`` or anonymous when ``inline_property_shapes`` is
set, carrying ``sh:path`` and every facet present on its PropertyMeta:

    ============== =====================================================
    min/max count  ``sh:minCount``/``sh:maxCount`` as xsd:integer
    datatype       ``sh:datatype``
    node kind      ``sh:nodeKind`` (``sh:IRI``/``sh:BlankNode``/``sh:Literal``)
    pattern        ``sh:pattern``
    enumeration    ``sh:in`` as a closed RDF list, declared order kept
    fixed value    ``sh:hasValue``
    ============== =====================================================

Anonymous property shapes and list heads get blank node ids hashed from the
class IRI and field name. The Turtle output is byte-identical between runs,
and graphs generated for different schemas can be merged without sharing
blank nodes.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Any, Iterable

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.collection import Collection
from rdflib.term import Node

from .config import DODAF_SHACL_OPTIONS, ShaclOptions
from .types import ArtifactReport, NodeKind, PropertyMeta, SemanticSchema
from .vocab import PREFIXES, RDF, RDFS, SH, XSD

logger = logging.getLogger(__name__)


_NODE_KINDS = {
    NodeKind.IRI: SH.IRI,
    NodeKind.BLANK_NODE: SH.BlankNode,
    NodeKind.LITERAL: SH.Literal,
}


def generate_shacl_graph(
    schemas: Iterable[SemanticSchema],
    options: ShaclOptions | None = None,
) -> Graph:
    options = options or ShaclOptions()
    schemas = list(schemas)

    sg = Graph()
    if options.include_base:
        sg.bind("", options.base, override=True)
    for prefix, namespace in {**PREFIXES, **options.custom_prefixes}.items():
        sg.bind(prefix, namespace, override=True)

    for schema in schemas:
        shape = URIRef(f"{schema.class_iri}Shape")
        sg.add((shape, RDF.type, SH.NodeShape))
        sg.add((shape, SH.targetClass, schema.class_iri))
        if schema.comment:
            sg.add((shape, RDFS.comment, Literal(schema.comment)))

        for name, meta in schema.properties.items():
            if options.inline_property_shapes:
                prop_shape = _bnode("ps", schema.class_iri, name)
            else:
                prop_shape = URIRef(f"{schema.class_iri}Shape_{name}")
                sg.add((prop_shape, RDF.type, SH.PropertyShape))
            sg.add((shape, SH.property, prop_shape))
            sg.add((prop_shape, SH.path, meta.iri))
            _add_facets(sg, prop_shape, meta, _bnode("list", schema.class_iri, name))

    logger.debug("Generated SHACL graph: %d node shapes, %d triples", len(schemas), len(sg))
    return sg


def _add_facets(sg: Graph, prop_shape: Node, meta: PropertyMeta, list_head: BNode) -> None:
    if meta.min_count is not None:
        sg.add((prop_shape, SH.minCount, Literal(meta.min_count, datatype=XSD.integer)))
    if meta.max_count is not None:
        sg.add((prop_shape, SH.maxCount, Literal(meta.max_count, datatype=XSD.integer)))
    if meta.datatype is not None:
        sg.add((prop_shape, SH.datatype, meta.datatype))
    if meta.node_kind is not None:
        sg.add((prop_shape, SH.nodeKind, _NODE_KINDS[meta.node_kind]))
    if meta.pattern is not None:
        sg.add((prop_shape, SH.pattern, Literal(meta.pattern)))
    if meta.enumeration is not None:
        sg.add((prop_shape, SH["in"], _rdf_list(sg, meta.enumeration, list_head)))
    if meta.has_value is not None:
        sg.add((prop_shape, SH.hasValue, _shacl_value(meta.has_value)))


def _rdf_list(sg: Graph, values: tuple[Any, ...], head: BNode) -> Node:
    """Build a closed rdf:first/rdf:rest list; the empty list is rdf:nil."""
    if not values:
        return RDF.nil
    Collection(sg, head, [_shacl_value(v) for v in values])
    return head


def _bnode(kind: str, class_iri: URIRef, field_name: str) -> BNode:
    digest = hashlib.sha1(f"{class_iri}|{field_name}".encode("utf-8")).hexdigest()[:16]
    return BNode(f"{kind}{digest}")


def _shacl_value(value: Any) -> Node:
    # IRIs stay IRIs, strings are plain literals, anything else is xsd:string
    if isinstance(value, URIRef):
        return value
    if isinstance(value, str):
        return Literal(value)
    return Literal(str(value), datatype=XSD.string)


def generate_shacl_turtle(
    schemas: Iterable[SemanticSchema],
    options: ShaclOptions | None = None,
) -> str:
    """Serialize the SHACL shapes for ``schemas`` as Turtle."""
    return generate_shacl_graph(schemas, options).serialize(format="turtle")


def generate_dodaf_shacl_turtle(schemas: Iterable[SemanticSchema]) -> str:
    return generate_shacl_turtle(schemas, DODAF_SHACL_OPTIONS)


def validate_shacl_turtle(turtle: str) -> ArtifactReport:
    """Syntax self-check: re-parse generated Turtle."""
    report = ArtifactReport(artifact="SHACL shapes")
    try:
        Graph().parse(data=turtle, format="turtle")
    except Exception as exc:
        logger.warning("Generated SHACL Turtle does not parse: %s", exc)
        report.errors.append(f"SHACL syntax error: {exc}")
    return report
