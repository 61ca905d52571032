"""DoDAF 2.0 ontology schemas.

The core architecture structure as semantic schemas: an Architecture holds
Views, a View holds Products, a Product holds Elements and Relationships.
Nested node objects need their own ``type`` to be targeted by the shapes of
their class.

The DoDAF type of an element, relationship or view is carried in
``elementType``/``relationshipType``/``viewType``; ``type`` stays the JSON-LD
``@type`` alias. ``id`` is structural only (it is the node's ``@id``), and so
is the free-form ``properties`` object.
"""

from __future__ import annotations

from .dsl import (
    EXACTLY_ONE,
    OPTIONAL,
    ZERO_OR_MORE,
    Array,
    Class,
    DataProperty,
    DateTime,
    ObjectProperty,
    Reference,
    String,
    Uri,
    datatype,
    one_of,
    pattern,
)
from .metamodel import ELEMENT_STATUSES, VIEW_TYPES
from .vocab import DCT, DODAF, FOAF, SCHEMA, XSD

__all__ = [
    "ARCHITECTURE", "ARCHITECTURE_METADATA", "VIEW", "PRODUCT", "ELEMENT",
    "ELEMENT_METADATA", "RELATIONSHIP", "DODAF_SCHEMAS", "VIEW_TYPES",
    "ELEMENT_STATUSES", "PRODUCT_NUMBER_PATTERN",
]

PRODUCT_NUMBER_PATTERN = r"^[A-Z]{2,3}-\d+[a-z]?$"


def _name():
    return DataProperty(String(min_length=1), SCHEMA.name, EXACTLY_ONE, datatype(XSD.string))


def _description(required: bool = True):
    if required:
        return DataProperty(String(), SCHEMA.description, EXACTLY_ONE, datatype(XSD.string))
    return DataProperty(String(required=False), SCHEMA.description, OPTIONAL, datatype(XSD.string))


def _timestamp(iri):
    return DataProperty(DateTime(required=False), iri, OPTIONAL, range=XSD.dateTime)


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------

ARCHITECTURE_METADATA = Class(
    DODAF.ArchitectureMetadata,
    {
        "id": Uri(required=False),
        "created": _timestamp(DCT.created),
        "modified": _timestamp(DCT.modified),
        "author": DataProperty(String(required=False, min_length=1), DCT.creator, ZERO_OR_MORE),
        "organization": DataProperty(String(required=False), FOAF.organization, OPTIONAL),
        "classification": DataProperty(String(required=False), DODAF.classification, OPTIONAL),
        "purpose": DataProperty(String(required=False), DODAF.purpose, OPTIONAL),
    },
    comment="Metadata for architectures",
)

ELEMENT_METADATA = Class(
    DODAF.ElementMetadata,
    {
        "id": Uri(required=False),
        "created": _timestamp(DCT.created),
        "modified": _timestamp(DCT.modified),
        "author": DataProperty(String(required=False, min_length=1), DCT.creator, ZERO_OR_MORE),
        "version": DataProperty(String(required=False, min_length=1), DCT.hasVersion, OPTIONAL),
        "status": DataProperty(
            String(required=False), DODAF.status, OPTIONAL, one_of(ELEMENT_STATUSES),
        ),
    },
    comment="Metadata for architectural elements",
)


# ---------------------------------------------------------------------------
# Elements and relationships
# ---------------------------------------------------------------------------

ELEMENT = Class(
    DODAF.Element,
    {
        "id": Uri(),
        "productId": ObjectProperty(Uri(required=False), DODAF.productId, OPTIONAL, range=DODAF.Product),
        "elementType": DataProperty(String(), DODAF.elementType, EXACTLY_ONE, datatype(XSD.string)),
        "name": _name(),
        "description": _description(required=False),
        "properties": Reference(required=False),
        "metadata": ObjectProperty(Reference(required=False), DODAF.metadata, OPTIONAL),
    },
    comment="DoDAF architectural element",
)

RELATIONSHIP = Class(
    DODAF.Relationship,
    {
        "id": Uri(),
        "productId": ObjectProperty(Uri(required=False), DODAF.productId, OPTIONAL, range=DODAF.Product),
        "relationshipType": DataProperty(
            String(), DODAF.relationshipType, EXACTLY_ONE, datatype(XSD.string),
        ),
        "name": _name(),
        "description": _description(required=False),
        "sourceId": ObjectProperty(Uri(), DODAF.sourceId, EXACTLY_ONE, range=DODAF.Element),
        "targetId": ObjectProperty(Uri(), DODAF.targetId, EXACTLY_ONE, range=DODAF.Element),
        "properties": Reference(required=False),
    },
    comment="DoDAF architectural relationship",
)


# ---------------------------------------------------------------------------
# Products, views, architecture
# ---------------------------------------------------------------------------

PRODUCT = Class(
    DODAF.Product,
    {
        "id": Uri(),
        "viewId": ObjectProperty(Uri(required=False), DODAF.viewId, OPTIONAL, range=DODAF.View),
        "number": DataProperty(
            String(min_length=1), DODAF.number, EXACTLY_ONE, pattern(PRODUCT_NUMBER_PATTERN),
        ),
        "name": _name(),
        "description": _description(required=False),
        "purpose": DataProperty(String(required=False), DODAF.purpose, OPTIONAL),
        "elements": ObjectProperty(Array(required=False), DODAF.elements, ZERO_OR_MORE, range=DODAF.Element),
        "relationships": ObjectProperty(
            Array(required=False), DODAF.relationships, ZERO_OR_MORE, range=DODAF.Relationship,
        ),
    },
    comment="DoDAF architectural product",
)

VIEW = Class(
    DODAF.View,
    {
        "id": Uri(),
        "viewType": DataProperty(String(), DODAF.viewType, EXACTLY_ONE, one_of(VIEW_TYPES)),
        "name": _name(),
        "description": _description(required=False),
        "purpose": DataProperty(String(required=False), DODAF.purpose, OPTIONAL),
        "products": ObjectProperty(Array(required=False), DODAF.products, ZERO_OR_MORE, range=DODAF.Product),
    },
    comment="DoDAF architectural view",
)

ARCHITECTURE = Class(
    DODAF.Architecture,
    {
        "id": Uri(),
        "name": _name(),
        "description": _description(),
        "version": DataProperty(String(required=False, min_length=1), DCT.hasVersion, OPTIONAL),
        "created": _timestamp(DCT.created),
        "modified": _timestamp(DCT.modified),
        "views": ObjectProperty(Array(required=False), DODAF.views, ZERO_OR_MORE, range=DODAF.View),
        "metadata": ObjectProperty(Reference(required=False), DODAF.metadata, OPTIONAL),
    },
    comment="DoDAF architecture definition",
)

DODAF_SCHEMAS = (
    ARCHITECTURE,
    ARCHITECTURE_METADATA,
    VIEW,
    PRODUCT,
    ELEMENT,
    ELEMENT_METADATA,
    RELATIONSHIP,
)
