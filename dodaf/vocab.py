"""Vocabulary registry: namespace prefixes and typed IRI constants.

Every IRI the ontology uses is issued here. The standard W3C vocabularies come
from ``rdflib.namespace``; the DoDAF, Dublin Core, FOAF and schema.org terms
the ontology relies on are closed namespaces, so a misspelled term fails at
import time instead of silently producing a new IRI.

    >>> DODAF.Architecture
    rdflib.term.URIRef('https://dodaf.defense.gov/ontology#Architecture')
    >>> iri("dodaf", "View") == DODAF.View
    True
"""

from __future__ import annotations

from types import MappingProxyType

from rdflib import URIRef
from rdflib.namespace import OWL, RDF, RDFS, SH, XSD, ClosedNamespace

__all__ = [
    "PREFIXES", "RDF", "RDFS", "OWL", "XSD", "SH", "DCT", "FOAF", "SCHEMA", "DODAF",
    "DATATYPES", "SchemaDefinitionError", "iri", "ensure_iri", "is_absolute_iri",
    "local_name", "namespace_of",
]


class SchemaDefinitionError(ValueError):
    """Raised when a schema is defined with a malformed IRI or inconsistent facets."""


# ---------------------------------------------------------------------------
# Prefix table
# ---------------------------------------------------------------------------

PREFIXES: MappingProxyType[str, str] = MappingProxyType({
    "rdf": str(RDF),
    "rdfs": str(RDFS),
    "owl": str(OWL),
    "xsd": str(XSD),
    "sh": str(SH),
    "dct": "http://purl.org/dc/terms/",
    "foaf": "http://xmlns.com/foaf/0.1/",
    "schema": "https://schema.org/",
    "dodaf": "https://dodaf.defense.gov/ontology#",
})


# ---------------------------------------------------------------------------
# Closed namespaces for the terms the ontology uses
# ---------------------------------------------------------------------------

DCT = ClosedNamespace(PREFIXES["dct"], [
    "created", "modified", "creator", "hasVersion", "title",
])

FOAF = ClosedNamespace(PREFIXES["foaf"], [
    "organization", "Organization", "Person",
])

SCHEMA = ClosedNamespace(PREFIXES["schema"], [
    "name", "description",
])

DODAF = ClosedNamespace(PREFIXES["dodaf"], [
    # Classes
    "Architecture",
    "ArchitectureMetadata",
    "View",
    "Product",
    "Element",
    "ElementMetadata",
    "Relationship",
    "Metadata",
    # Properties
    "name",
    "description",
    "purpose",
    "version",
    "status",
    "properties",
    "metadata",
    "views",
    "products",
    "elements",
    "relationships",
    "architecture",
    "organization",
    "classification",
    "viewId",
    "productId",
    "sourceId",
    "targetId",
    "type",
    "number",
    "viewType",
    "elementType",
    "relationshipType",
])


# ---------------------------------------------------------------------------
# Common datatypes
# ---------------------------------------------------------------------------

DATATYPES: MappingProxyType[str, URIRef] = MappingProxyType({
    "string": XSD.string,
    "integer": XSD.integer,
    "boolean": XSD.boolean,
    "dateTime": XSD.dateTime,
    "uri": XSD.anyURI,
})


# ---------------------------------------------------------------------------
# IRI helpers
# ---------------------------------------------------------------------------

_FORBIDDEN_IRI_CHARS = frozenset('<>"{}|^`\\')


def iri(prefix: str, local: str) -> URIRef:
    """Build an IRI from a registered prefix and a local name."""
    try:
        base = PREFIXES[prefix]
    except KeyError:
        raise SchemaDefinitionError(f"Unknown prefix '{prefix}'") from None
    return ensure_iri(base + local)


def ensure_iri(value: object, what: str = "IRI") -> URIRef:
    """Return ``value`` as a URIRef, rejecting anything that is not an absolute IRI."""
    if not isinstance(value, str):
        raise SchemaDefinitionError(f"{what} must be a string, got {type(value).__name__}")
    if not value:
        raise SchemaDefinitionError(f"{what} must not be empty")
    scheme, sep, _ = value.partition(":")
    if not sep or not scheme or not scheme[0].isalpha():
        raise SchemaDefinitionError(f"{what} '{value}' is not absolute (no scheme)")
    if any(ch.isspace() or ch in _FORBIDDEN_IRI_CHARS for ch in value):
        raise SchemaDefinitionError(f"{what} '{value}' contains characters not allowed in an IRI")
    return value if isinstance(value, URIRef) else URIRef(value)


def is_absolute_iri(value: object) -> bool:
    try:
        ensure_iri(value)
    except SchemaDefinitionError:
        return False
    return True


def local_name(value: str) -> str:
    """Substring after the last ``#`` or ``/`` (the whole string if neither occurs)."""
    index = max(value.rfind("#"), value.rfind("/"))
    return value[index + 1:] if index >= 0 else value


def namespace_of(value: str) -> str:
    """Prefix of ``value`` up to and including the last ``#`` or ``/``."""
    index = max(value.rfind("#"), value.rfind("/"))
    return value[:index + 1] if index >= 0 else ""
