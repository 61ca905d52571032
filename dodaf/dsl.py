"""Semantic schema builder.

Schema authors describe one ontology class per schema::

    WIDGET = Class(
        EX.Widget,
        {
            "id": Uri(),
            "name": DataProperty(String(), EX.name, REQUIRED, datatype(XSD.string)),
            "owner": ObjectProperty(Uri(required=False), EX.owner, OPTIONAL, IRI_NODE),
        },
        comment="A widget",
    )

``DataProperty``/``ObjectProperty`` attach a PropertyMeta to a structural
field. Constraint helpers are plain facet mappings that merge left to right;
keyword facets are applied last. A field left as a plain ``Field`` (``"id"``
above) is structural only and does not appear in any generated artifact.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from .types import (
    AnnotatedField,
    Field,
    FieldDefinition,
    NodeKind,
    Optionality,
    PropertyKind,
    PropertyMeta,
    SemanticSchema,
)
from .vocab import SchemaDefinitionError, ensure_iri

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Classes
# ---------------------------------------------------------------------------

def Class(
    class_iri: str,
    fields: Mapping[str, FieldDefinition],
    comment: str = "",
    context: Mapping[str, Any] | None = None,
) -> SemanticSchema:
    """Build a semantic schema for the OWL class ``class_iri``.

    ``fields`` is an ordered mapping of field name to a plain Field or an
    annotated property. ``context`` holds raw JSON-LD term overrides that the
    context generator merges ahead of the property mappings.
    """
    if not isinstance(fields, Mapping):
        raise SchemaDefinitionError(
            f"Class fields must be a mapping of name to field, got {type(fields).__name__}"
        )
    return SemanticSchema(
        class_iri=class_iri,
        fields=tuple(fields.items()),
        comment=comment,
        context=dict(context or {}),
    )


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

_FACETS = frozenset({
    "kind",
    "min_count",
    "max_count",
    "datatype",
    "node_kind",
    "enumeration",
    "pattern",
    "has_value",
    "functional",
    "inverse_functional",
    "domain",
    "range",
})


def DataProperty(
    schema: Field,
    iri: str,
    *constraints: Mapping[str, Any],
    **facets: Any,
) -> AnnotatedField:
    """Attach datatype-property metadata (OWL DatatypeProperty) to ``schema``.

    An explicit ``kind=`` facet wins over the data default.
    """
    return _annotate(schema, iri, constraints, facets, PropertyKind.DATA)


def ObjectProperty(
    schema: Field,
    iri: str,
    *constraints: Mapping[str, Any],
    **facets: Any,
) -> AnnotatedField:
    """Attach object-property metadata (OWL ObjectProperty) to ``schema``."""
    return _annotate(schema, iri, constraints, facets, PropertyKind.OBJECT)


def FunctionalDataProperty(
    schema: Field,
    iri: str,
    *constraints: Mapping[str, Any],
    **facets: Any,
) -> AnnotatedField:
    """A DataProperty flagged owl:FunctionalProperty.

    An explicit ``functional=`` keyword still wins; overriding it is logged.
    """
    return DataProperty(schema, iri, *constraints, **_functional(iri, facets))


def FunctionalObjectProperty(
    schema: Field,
    iri: str,
    *constraints: Mapping[str, Any],
    **facets: Any,
) -> AnnotatedField:
    """An ObjectProperty flagged owl:FunctionalProperty."""
    return ObjectProperty(schema, iri, *constraints, **_functional(iri, facets))


def _functional(iri: str, facets: dict[str, Any]) -> dict[str, Any]:
    if "functional" in facets and facets["functional"] is not True:
        logger.warning(
            "functional=%r overrides the functional property wrapper for <%s>",
            facets["functional"], iri,
        )
    return {"functional": True, **facets}


def _annotate(
    schema: Field,
    iri: str,
    constraints: Iterable[Mapping[str, Any]],
    facets: Mapping[str, Any],
    default_kind: PropertyKind,
) -> AnnotatedField:
    if isinstance(schema, AnnotatedField):
        raise SchemaDefinitionError(f"Field for <{iri}> already carries property metadata")
    if not isinstance(schema, Field):
        raise SchemaDefinitionError(
            f"Property <{iri}> must wrap a Field, got {type(schema).__name__}"
        )

    merged: dict[str, Any] = {}
    for constraint in constraints:
        merged.update(constraint)
    merged.update(facets)

    unknown = sorted(set(merged) - _FACETS)
    if unknown:
        raise SchemaDefinitionError(f"Unknown property facets for <{iri}>: {', '.join(unknown)}")

    kind = merged.pop("kind", None) or default_kind
    return AnnotatedField(field=schema, meta=PropertyMeta(iri=iri, kind=kind, **merged))


# ---------------------------------------------------------------------------
# Structural field constructors
# ---------------------------------------------------------------------------

def _optionality(required: bool) -> Optionality:
    return Optionality.REQUIRED if required else Optionality.OPTIONAL


def String(
    *,
    required: bool = True,
    min_length: int | None = None,
    max_length: int | None = None,
    description: str = "",
) -> Field:
    return Field(str, _optionality(required), None, min_length, max_length, description)


def Integer(*, required: bool = True, description: str = "") -> Field:
    return Field(int, _optionality(required), description=description)


def Boolean(*, required: bool = True, description: str = "") -> Field:
    return Field(bool, _optionality(required), description=description)


def DateTime(*, required: bool = True, description: str = "") -> Field:
    return Field(str, _optionality(required), format="date-time", description=description)


def Uri(*, required: bool = True, description: str = "") -> Field:
    return Field(str, _optionality(required), format="uri", description=description)


def Reference(*, required: bool = True, description: str = "") -> Field:
    """A nested node object."""
    return Field(dict, _optionality(required), description=description)


def Array(
    *,
    required: bool = True,
    min_length: int | None = None,
    max_length: int | None = None,
    description: str = "",
) -> Field:
    return Field(list, _optionality(required), None, min_length, max_length, description)


# ---------------------------------------------------------------------------
# Constraint helpers
# ---------------------------------------------------------------------------

REQUIRED = MappingProxyType({"min_count": 1})
OPTIONAL = MappingProxyType({"max_count": 1})
EXACTLY_ONE = MappingProxyType({"min_count": 1, "max_count": 1})
ZERO_OR_MORE = MappingProxyType({})
ONE_OR_MORE = MappingProxyType({"min_count": 1})
IRI_NODE = MappingProxyType({"node_kind": NodeKind.IRI})


def pattern(regex: str) -> Mapping[str, Any]:
    return MappingProxyType({"pattern": regex})


def one_of(values: Iterable[Any]) -> Mapping[str, Any]:
    """Enumeration constraint (sh:in); order is preserved."""
    return MappingProxyType({"enumeration": tuple(values)})


def datatype(iri: str) -> Mapping[str, Any]:
    return MappingProxyType({"datatype": ensure_iri(iri, "Datatype IRI")})


def has_value(value: Any) -> Mapping[str, Any]:
    return MappingProxyType({"has_value": value})
