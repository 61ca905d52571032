"""Core types for the semantic schema layer.

A semantic schema is a structural object schema (named fields) plus RDF
metadata: a class IRI, a human-readable comment, an optional JSON-LD context
fragment and one PropertyMeta per annotated field.

Metadata never lives on the structural field itself. A field that carries RDF
meaning is wrapped in an AnnotatedField, which pairs the untouched Field with
its PropertyMeta; the schema's property map is derived from those pairs once,
at construction time, and is read-only afterwards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Union

from rdflib import URIRef

from .vocab import SchemaDefinitionError, ensure_iri, is_absolute_iri, local_name


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class PropertyKind(Enum):
    """Discriminates OWL DatatypeProperty from ObjectProperty."""
    DATA = "data"
    OBJECT = "object"


class NodeKind(Enum):
    """How a property value must be serialized in RDF (sh:nodeKind)."""
    IRI = "IRI"
    BLANK_NODE = "BlankNode"
    LITERAL = "Literal"


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class Optionality(Enum):
    """Whether a structural field must be present in an instance."""
    REQUIRED = "required"
    OPTIONAL = "optional"


# ---------------------------------------------------------------------------
# Field: a structural field definition
# ---------------------------------------------------------------------------

_VALUE_TYPES = (str, int, float, bool, list, dict)
_FORMATS = ("uri", "date-time")


@dataclass(frozen=True)
class Field:
    """A plain structural field: type, presence and string facets.

    Fields have no RDF meaning on their own; a Field left unannotated is
    invisible to the context, OWL and SHACL generators.
    """
    value_type: type = str
    optionality: Optionality = Optionality.REQUIRED
    format: str | None = None
    min_length: int | None = None
    max_length: int | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if self.value_type not in _VALUE_TYPES:
            names = ", ".join(t.__name__ for t in _VALUE_TYPES)
            raise SchemaDefinitionError(
                f"Unsupported field type {self.value_type!r} (expected one of {names})"
            )
        if self.format is not None and self.format not in _FORMATS:
            raise SchemaDefinitionError(f"Unsupported field format '{self.format}'")
        _check_count("min_length", self.min_length)
        _check_count("max_length", self.max_length)
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise SchemaDefinitionError(
                f"min_length {self.min_length} exceeds max_length {self.max_length}"
            )

    @property
    def required(self) -> bool:
        return self.optionality == Optionality.REQUIRED

    def check(self, name: str, value: Any) -> list[str]:
        """Return the structural problems of ``value`` for the field called ``name``."""
        if not _is_instance(value, self.value_type):
            return [
                f"Field '{name}' must be of type {self.value_type.__name__}, "
                f"got {type(value).__name__}"
            ]
        errors = []
        if isinstance(value, (str, list)):
            if self.min_length is not None and len(value) < self.min_length:
                errors.append(f"Field '{name}' is shorter than {self.min_length}")
            if self.max_length is not None and len(value) > self.max_length:
                errors.append(f"Field '{name}' is longer than {self.max_length}")
        if isinstance(value, str):
            if self.format == "uri" and not is_absolute_iri(value):
                errors.append(f"Field '{name}' must be an absolute URI")
            if self.format == "date-time" and not _is_datetime(value):
                errors.append(f"Field '{name}' must be an ISO 8601 date-time")
        return errors


def _is_instance(value: Any, value_type: type) -> bool:
    # bool is an int subclass but never a valid number here
    if isinstance(value, bool):
        return value_type is bool
    if value_type is float:
        return isinstance(value, (int, float))
    return isinstance(value, value_type)


def _is_datetime(value: str) -> bool:
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


def _check_count(name: str, value: int | None) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SchemaDefinitionError(f"{name} must be a non-negative integer, got {value!r}")


def _coerce(enum: type[Enum], value: Any, name: str) -> Any:
    try:
        return enum(value)
    except ValueError:
        raise SchemaDefinitionError(f"Invalid {name} {value!r}") from None


# ---------------------------------------------------------------------------
# PropertyMeta: RDF/OWL/SHACL metadata for one field
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PropertyMeta:
    """Metadata attached to one structural field.

    ``iri`` is the property IRI (the SHACL path and the OWL property). The
    remaining attributes are optional facets; ``None`` means "not set".
    ``enumeration`` keeps the declared order, which is the order of the
    generated ``sh:in`` list.
    """
    iri: URIRef
    kind: PropertyKind = PropertyKind.DATA
    min_count: int | None = None
    max_count: int | None = None
    datatype: URIRef | None = None
    node_kind: NodeKind | None = None
    enumeration: tuple[Any, ...] | None = None
    pattern: str | None = None
    has_value: Any = None
    functional: bool = False
    inverse_functional: bool = False
    domain: URIRef | None = None
    range: URIRef | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "iri", ensure_iri(self.iri, "Property IRI"))
        object.__setattr__(self, "kind", _coerce(PropertyKind, self.kind, "kind"))
        for name in ("datatype", "domain", "range"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, ensure_iri(value, f"{name} IRI"))
        if self.node_kind is not None:
            object.__setattr__(self, "node_kind", _coerce(NodeKind, self.node_kind, "node_kind"))
        if self.enumeration is not None:
            object.__setattr__(self, "enumeration", tuple(self.enumeration))

        _check_count("min_count", self.min_count)
        _check_count("max_count", self.max_count)
        if (
            self.min_count is not None
            and self.max_count is not None
            and self.min_count > self.max_count
        ):
            raise SchemaDefinitionError(
                f"min_count {self.min_count} exceeds max_count {self.max_count} "
                f"for <{self.iri}>"
            )
        if self.pattern is not None:
            try:
                re.compile(self.pattern)
            except re.error as exc:
                raise SchemaDefinitionError(
                    f"Invalid pattern {self.pattern!r} for <{self.iri}>: {exc}"
                ) from exc

    @property
    def is_object(self) -> bool:
        return self.kind == PropertyKind.OBJECT


@dataclass(frozen=True)
class AnnotatedField:
    """A structural field paired with its property metadata."""
    field: Field
    meta: PropertyMeta


FieldDefinition = Union[Field, AnnotatedField]


# ---------------------------------------------------------------------------
# SemanticSchema
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class SemanticSchema:
    """A structural object schema tagged with a class IRI.

    ``fields`` keeps declaration order; every generator walks it in that
    order, which keeps the generated artifacts stable run to run.
    ``properties`` is derived: field name to PropertyMeta for every
    annotated field.
    """
    class_iri: URIRef
    fields: tuple[tuple[str, FieldDefinition], ...]
    comment: str = ""
    context: Mapping[str, Any] = field(default_factory=dict)
    properties: Mapping[str, PropertyMeta] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.class_iri is None:
            raise SchemaDefinitionError("A semantic schema needs a class IRI")
        object.__setattr__(self, "class_iri", ensure_iri(self.class_iri, "Class IRI"))

        seen = set()
        for name, definition in self.fields:
            if not isinstance(name, str) or not name:
                raise SchemaDefinitionError(f"Invalid field name {name!r}")
            if name in seen:
                raise SchemaDefinitionError(f"Field '{name}' is declared twice")
            if not isinstance(definition, (Field, AnnotatedField)):
                raise SchemaDefinitionError(
                    f"Field '{name}' must be a Field or an annotated property, "
                    f"got {type(definition).__name__}"
                )
            seen.add(name)

        for key, value in self.context.items():
            if not isinstance(key, str) or not isinstance(value, (str, dict)):
                raise SchemaDefinitionError(f"Invalid context entry {key!r}: {value!r}")

        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "context", MappingProxyType(dict(self.context)))
        object.__setattr__(self, "properties", MappingProxyType({
            name: definition.meta
            for name, definition in self.fields
            if isinstance(definition, AnnotatedField)
        }))

    def __repr__(self) -> str:
        return f"SemanticSchema({self.name}, {len(self.properties)} properties)"

    @property
    def name(self) -> str:
        """Short class name: the local name of the class IRI."""
        return local_name(self.class_iri)

    @property
    def has_rdf(self) -> bool:
        return bool(self.class_iri)

    @property
    def field_names(self) -> list[str]:
        return [name for name, _ in self.fields]

    def structural_field(self, name: str) -> Field:
        for field_name, definition in self.fields:
            if field_name == name:
                return definition.field if isinstance(definition, AnnotatedField) else definition
        raise KeyError(name)

    def structural_errors(self, instance: Any) -> list[str]:
        """Check a compact-form instance dict against the structural fields.

        Checks presence of required fields, value types, string lengths and
        formats. Keys the schema does not declare are ignored.
        """
        if not isinstance(instance, Mapping):
            return [f"{self.name} instance must be an object, got {type(instance).__name__}"]
        errors = []
        for name, definition in self.fields:
            spec = definition.field if isinstance(definition, AnnotatedField) else definition
            value = instance.get(name)
            if value is None:
                if spec.required:
                    errors.append(f"Missing required field '{name}'")
                continue
            errors.extend(spec.check(name, value))
        return errors


# ---------------------------------------------------------------------------
# ArtifactReport: advisory check of a generated artifact
# ---------------------------------------------------------------------------

@dataclass
class ArtifactReport:
    """Result of an advisory check (context consistency, Turtle syntax).

    Generators never raise for these problems; the report is returned to
    whoever asked for the check.
    """
    errors: list[str] = field(default_factory=list)
    artifact: str = "artifact"

    @property
    def valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        status = "VALID" if self.valid else "INVALID"
        lines.append(f"{self.artifact}: {status}")
        lines.append("-" * 50)
        if self.errors:
            lines.append(f"  Errors ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"    - {e}")
        else:
            lines.append("  No issues found.")
        return "\n".join(lines)
