"""Document validation: is a JSON-LD document a well-formed DoDAF architecture?

Checks run in layers, each a precondition for the next:

  1. Expansion
    The document is expanded to RDF. A document without its own @context is
    read with the validator's context. Nothing to expand is an error.

  2. Compaction
    The expanded graph is compacted against the validator's context. The
    compacted document is what a successful validation hands back.

  3. Structure
    The root node must have an absolute id, be typed as the root class and
    carry the root schema's required fields (name, description). Every
    Architecture, View, Product, Element and Relationship node must have an
    absolute id. Any failure here stops validation.

  4. Metamodel (optional, advisory)
    Each element and relationship is checked against the metamodel record of
    its DoDAF type. Findings are warnings.

  5. SHACL (on request)
    The document is run through a ShaclValidator. Violations become errors,
    warnings and infos become warnings.

``validate`` never raises; every failure ends up in the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from rdflib import BNode, Graph, Literal, URIRef
from rdflib.term import Node

from .config import DEFAULT_BASE, DODAF_SHACL_OPTIONS
from .context import generate_dodaf_context
from .metamodel import (
    validate_element_against_metamodel,
    validate_relationship_against_metamodel,
)
from .ontology import DODAF_SCHEMAS
from .processor import compact_graph, normalize, to_graph, to_nquads
from .shacl_validation import ShaclValidationResult, ShaclValidator
from .types import SemanticSchema, Severity
from .vocab import DODAF, RDF, local_name

logger = logging.getLogger(__name__)

_IDENTIFIED_CLASSES = (
    DODAF.Architecture,
    DODAF.View,
    DODAF.Product,
    DODAF.Element,
    DODAF.Relationship,
)


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------

@dataclass
class DocumentValidationResult:
    """Outcome of validating one document.

    ``normalized`` is the compacted document, present only when valid.
    ``shacl_result`` is set when a SHACL pass ran.
    """
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    normalized: dict[str, Any] | None = None
    shacl_result: ShaclValidationResult | None = None

    def summary(self) -> str:
        lines = []
        status = "VALID" if self.valid else "INVALID"
        lines.append(f"DoDAF Document Validation: {status}")
        lines.append("-" * 50)
        if self.errors:
            lines.append(f"  Errors ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"    - {e}")
        if self.warnings:
            lines.append(f"  Warnings ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"    - {w}")
        if not self.errors and not self.warnings:
            lines.append("  No issues found.")
        return "\n".join(lines)


def _invalid(*errors: str) -> DocumentValidationResult:
    return DocumentValidationResult(valid=False, errors=list(errors))


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------

class DocumentValidator:
    """Validates DoDAF architecture documents.

    Collaborators are injected: ``context`` (defaults to the DoDAF context of
    ``schemas``) and ``shacl_validator`` (built from ``schemas`` at
    construction when not given). The shapes graph is read-only afterwards,
    so one validator can serve concurrent ``validate`` calls.
    """

    def __init__(
        self,
        schemas: Iterable[SemanticSchema] = DODAF_SCHEMAS,
        context: Mapping[str, Any] | None = None,
        shacl_validator: ShaclValidator | None = None,
        check_metamodel: bool = True,
        root_class: URIRef = DODAF.Architecture,
        base: str = DEFAULT_BASE,
    ) -> None:
        self.schemas = tuple(schemas)
        self.context = dict(context) if context is not None else generate_dodaf_context(self.schemas)
        self.check_metamodel = check_metamodel
        self.root_class = root_class
        self.base = base
        if shacl_validator is None:
            shacl_validator = ShaclValidator.from_schemas(
                self.schemas, DODAF_SHACL_OPTIONS, context=self.context,
            )
        self.shacl_validator = shacl_validator
        self._by_class = {schema.class_iri: schema for schema in self.schemas}

    # -- validation ------------------------------------------------------

    def validate(self, document: Any, include_shacl: bool = False) -> DocumentValidationResult:
        try:
            graph = to_graph(document, self.context, self.base)
        except Exception as exc:
            logger.warning("JSON-LD expansion failed: %s", exc)
            return _invalid(f"Invalid JSON-LD document: could not expand: {exc}")
        if len(graph) == 0:
            return _invalid("Invalid JSON-LD document: could not expand")

        try:
            compacted = compact_graph(graph, self.context)
        except Exception as exc:
            logger.warning("JSON-LD compaction failed: %s", exc)
            return _invalid(f"Validation error: {exc}")

        errors = self._structural_errors(graph)
        if errors:
            return _invalid(*errors)

        warnings = self._metamodel_warnings(graph) if self.check_metamodel else []

        shacl_result = None
        if include_shacl:
            shacl_result = self.shacl_validator.validate(document)
            for r in shacl_result.results:
                message = f"SHACL: {r.message}"
                if r.focus_node:
                    message += f" (focus: {r.focus_node}"
                    message += f", path: {r.path})" if r.path else ")"
                if r.severity == Severity.ERROR:
                    errors.append(message)
                else:
                    warnings.append(message)

        valid = not errors
        logger.debug("Document validation: valid=%s, %d errors, %d warnings",
                     valid, len(errors), len(warnings))
        return DocumentValidationResult(
            valid=valid,
            errors=errors,
            warnings=warnings,
            normalized=compacted if valid else None,
            shacl_result=shacl_result,
        )

    def _structural_errors(self, graph: Graph) -> list[str]:
        root = self._find_root(graph)
        if root is None or isinstance(root, BNode):
            return ["Invalid DoDAF architecture: missing required id field"]
        if (root, RDF.type, self.root_class) not in graph:
            return ["Invalid DoDAF architecture: missing or incorrect type field"]

        errors = []
        root_schema = self._by_class.get(self.root_class)
        if root_schema is not None:
            record = self._record(graph, root, root_schema)
            errors.extend(
                f"Invalid DoDAF architecture: {e}" for e in root_schema.structural_errors(record)
            )

        for cls in _IDENTIFIED_CLASSES:
            for node in graph.subjects(RDF.type, cls):
                if isinstance(node, BNode):
                    errors.append(
                        f"Invalid DoDAF architecture: {local_name(cls)} node is missing its id"
                    )
        return errors

    def _find_root(self, graph: Graph) -> Node | None:
        """The root-typed node, preferring one that is never an object.

        Without any root-typed node, the first node that is never an object.
        """
        objects = set(graph.objects())
        candidates = sorted({s for s in graph.subjects() if s not in objects}, key=str)
        typed = [s for s in candidates if (s, RDF.type, self.root_class) in graph]
        if typed:
            return typed[0]
        typed = sorted(set(graph.subjects(RDF.type, self.root_class)), key=str)
        if typed:
            return typed[0]
        if candidates:
            return candidates[0]
        subjects = sorted(set(graph.subjects()), key=str)
        return subjects[0] if subjects else None

    def _metamodel_warnings(self, graph: Graph) -> list[str]:
        warnings = []
        checks = (
            (DODAF.Element, DODAF.elementType, validate_element_against_metamodel),
            (DODAF.Relationship, DODAF.relationshipType, validate_relationship_against_metamodel),
        )
        for cls, type_property, check in checks:
            schema = self._by_class.get(cls)
            if schema is None:
                continue
            for node in sorted(set(graph.subjects(RDF.type, cls)), key=str):
                record = self._record(graph, node, schema)
                type_value = graph.value(node, type_property)
                if type_value is not None:
                    record["type"] = str(type_value)
                result = check(record)
                warnings.extend(f"{node}: {e}" for e in result.errors)
        return warnings

    @staticmethod
    def _record(graph: Graph, node: Node, schema: SemanticSchema) -> dict[str, Any]:
        """Read ``node`` back into a compact-form dict keyed by the schema's field names."""
        record: dict[str, Any] = {}
        if isinstance(node, URIRef):
            record["id"] = str(node)
        for name, meta in schema.properties.items():
            values = sorted(graph.objects(node, meta.iri), key=str)
            if not values:
                continue
            value_type = schema.structural_field(name).value_type
            if value_type is list:
                record[name] = [_python_value(v) for v in values]
            elif value_type is dict:
                record[name] = {"id": str(values[0])}
            else:
                record[name] = _python_value(values[0])
        return record

    # -- conversions -----------------------------------------------------

    def to_nquads(self, document: Any) -> str:
        try:
            return to_nquads(document, self.context, self.base)
        except Exception as exc:
            raise ValueError(f"Could not convert document to N-Quads: {exc}") from exc

    def normalize(self, document: Any) -> str:
        """Canonical N-Quads of ``document``."""
        try:
            return normalize(document, self.context, self.base)
        except Exception as exc:
            raise ValueError(f"Could not normalize document: {exc}") from exc


def _python_value(node: Node) -> Any:
    if isinstance(node, Literal):
        return node.toPython()
    return str(node)
