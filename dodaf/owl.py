"""OWL ontology generation.

Builds an rdflib Graph from semantic schemas and serializes it as Turtle:

  - one ``owl:Ontology`` declaration with optional ``owl:versionIRI`` and
    ``owl:imports``
  - ``owl:Class`` per schema, labelled with the class IRI's local name
  - ``owl:DatatypeProperty``/``owl:ObjectProperty`` per annotated field, with
    ``rdfs:domain`` = the owning class and ``rdfs:range`` = the declared
    range, falling back to the datatype facet for data properties only
  - ``owl:FunctionalProperty``/``owl:InverseFunctionalProperty`` as extra
    ``rdf:type`` triples
  - optionally, ``rdfs:subClassOf`` triples inferred from a ``type`` field's
    enumeration (see OwlOptions.infer_subclass_from_type_enum)
"""

from __future__ import annotations

import logging
from typing import Iterable

from rdflib import Graph, Literal, URIRef

from .config import DODAF_OWL_OPTIONS, OwlOptions
from .types import ArtifactReport, SemanticSchema
from .vocab import OWL, PREFIXES, RDF, RDFS, local_name

logger = logging.getLogger(__name__)


def generate_owl_graph(
    schemas: Iterable[SemanticSchema],
    options: OwlOptions | None = None,
) -> Graph:
    options = options or OwlOptions()
    schemas = list(schemas)

    g = Graph()
    # named prefixes bound last win over the default prefix for the same namespace
    g.bind("", options.ontology_iri + "#", override=True)
    for prefix, namespace in {**PREFIXES, **options.custom_prefixes}.items():
        g.bind(prefix, namespace, override=True)

    ontology = URIRef(options.ontology_iri)
    g.add((ontology, RDF.type, OWL.Ontology))
    if options.version_iri:
        g.add((ontology, OWL.versionIRI, URIRef(options.version_iri)))
    for imported in options.imports:
        g.add((ontology, OWL.imports, URIRef(imported)))

    known_classes = {schema.class_iri for schema in schemas}

    for schema in schemas:
        cls = schema.class_iri
        g.add((cls, RDF.type, OWL.Class))
        if options.include_annotations:
            if schema.comment:
                g.add((cls, RDFS.comment, Literal(schema.comment)))
            g.add((cls, RDFS.label, Literal(local_name(cls))))

        for name, meta in schema.properties.items():
            prop = meta.iri
            g.add((prop, RDF.type, OWL.ObjectProperty if meta.is_object else OWL.DatatypeProperty))
            g.add((prop, RDFS.domain, cls))

            # object properties without an explicit range get none
            if meta.range is not None:
                g.add((prop, RDFS.range, meta.range))
            elif not meta.is_object and meta.datatype is not None:
                g.add((prop, RDFS.range, meta.datatype))

            if meta.functional:
                g.add((prop, RDF.type, OWL.FunctionalProperty))
            if meta.inverse_functional:
                g.add((prop, RDF.type, OWL.InverseFunctionalProperty))
            if options.include_annotations:
                g.add((prop, RDFS.label, Literal(name)))

            if (
                options.infer_subclass_from_type_enum
                and name == "type"
                and meta.is_object
                and meta.enumeration
            ):
                for value in meta.enumeration:
                    if isinstance(value, str) and URIRef(value) in known_classes:
                        g.add((cls, RDFS.subClassOf, URIRef(value)))

    logger.debug("Generated OWL graph: %d schemas, %d triples", len(schemas), len(g))
    return g


def generate_owl_turtle(
    schemas: Iterable[SemanticSchema],
    options: OwlOptions | None = None,
) -> str:
    """Serialize the OWL ontology for ``schemas`` as Turtle."""
    return generate_owl_graph(schemas, options).serialize(format="turtle")


def generate_dodaf_owl_turtle(schemas: Iterable[SemanticSchema]) -> str:
    return generate_owl_turtle(schemas, DODAF_OWL_OPTIONS)


def validate_owl_turtle(turtle: str) -> ArtifactReport:
    """Syntax self-check: re-parse generated Turtle.

    A failure here means the generator emitted broken Turtle; it is reported,
    not raised.
    """
    report = ArtifactReport(artifact="OWL ontology")
    try:
        Graph().parse(data=turtle, format="turtle")
    except Exception as exc:
        logger.warning("Generated OWL Turtle does not parse: %s", exc)
        report.errors.append(f"OWL syntax error: {exc}")
    return report
