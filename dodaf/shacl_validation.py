"""SHACL validation of JSON-LD instance documents.

Pipeline for one document:

  1. expand the JSON-LD document to RDF and write it out as N-Quads
  2. parse the N-Quads into a fresh data graph
  3. run pySHACL against the validator's shapes graph
  4. map each sh:ValidationResult into a ShaclValidationError

Every failure along the way (malformed JSON, expansion error, engine error)
comes back as a non-conforming result with one synthetic error; nothing
raises to the caller. The only loud failure is ``ShaclValidator.from_turtle``
given shapes Turtle that does not parse.

The shapes graph is built once per validator and only read afterwards. Each
``validate`` call builds its own data graph, so one validator can serve
concurrent calls as long as pySHACL does not mutate the shapes graph.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from rdflib import Graph

from .config import DEFAULT_BASE, ShaclOptions
from .context import generate_context
from .processor import parse_nquads, to_nquads
from .shacl import generate_shacl_graph
from .types import SemanticSchema, Severity
from .vocab import RDF, SH, local_name

logger = logging.getLogger(__name__)


class ShapesLoadError(ValueError):
    """Raised when pre-supplied SHACL shapes Turtle does not parse."""


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ShaclValidationError:
    """A single SHACL validation result."""
    focus_node: str
    path: str
    constraint: str
    message: str
    severity: Severity = Severity.ERROR
    source_shape: str = ""

    def __repr__(self) -> str:
        return (
            f"ShaclValidationError({local_name(self.focus_node)}.{local_name(self.path)}: "
            f"{self.message})"
        )


@dataclass
class ShaclValidationResult:
    """Conformance report for one document.

    ``results`` is sorted by focus node, path and message. ``report`` is the
    raw pySHACL validation-report graph, kept for auditing; it is None when
    validation never reached the engine.
    """
    conforms: bool
    results: list[ShaclValidationError] = field(default_factory=list)
    report: Graph | None = None
    results_text: str = ""

    @property
    def errors(self) -> list[ShaclValidationError]:
        return [r for r in self.results if r.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ShaclValidationError]:
        return [r for r in self.results if r.severity != Severity.ERROR]

    def summary(self) -> str:
        lines = []
        status = "CONFORMS" if self.conforms else "DOES NOT CONFORM"
        lines.append(f"SHACL Validation: {status}")
        lines.append("-" * 50)
        if self.results:
            lines.append(f"  Results ({len(self.results)}):")
            for r in self.results:
                node = local_name(r.focus_node) or r.focus_node
                path = local_name(r.path) or r.path
                lines.append(f"    - [{r.severity.value}] {node}.{path}: {r.message}")
        elif not self.conforms:
            lines.append("  Validation did not run.")
        else:
            lines.append("  No violations found.")
        return "\n".join(lines)


def _failure(message: str) -> ShaclValidationResult:
    return ShaclValidationResult(
        conforms=False,
        results=[ShaclValidationError(
            focus_node="",
            path="",
            constraint="",
            message=message,
            severity=Severity.ERROR,
        )],
    )


def map_severity(severity: object) -> Severity:
    """Map a SHACL severity IRI to Severity; anything unrecognized is an error."""
    text = "" if severity is None else str(severity)
    if "Violation" in text:
        return Severity.ERROR
    if "Warning" in text:
        return Severity.WARNING
    if "Info" in text:
        return Severity.INFO
    return Severity.ERROR


def read_results(results_graph: Graph) -> list[ShaclValidationError]:
    """Collect the sh:ValidationResult nodes of a validation-report graph."""
    results = []
    for result in results_graph.subjects(RDF.type, SH.ValidationResult):
        focus = results_graph.value(result, SH.focusNode)
        path = results_graph.value(result, SH.resultPath)
        message = results_graph.value(result, SH.resultMessage)
        severity = results_graph.value(result, SH.resultSeverity)
        shape = results_graph.value(result, SH.sourceShape)
        component = results_graph.value(result, SH.sourceConstraintComponent)

        results.append(ShaclValidationError(
            focus_node=str(focus) if focus is not None else "",
            path=str(path) if path is not None else "",
            constraint=str(component) if component is not None else "",
            message=str(message) if message is not None else "",
            severity=map_severity(severity),
            source_shape=str(shape) if shape is not None else "",
        ))
    results.sort(key=lambda r: (r.focus_node, r.path, r.message))
    return results


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------

class ShaclValidator:
    """Validates JSON-LD documents against a fixed shapes graph.

    ``context`` is the expansion context used for documents without their
    own ``@context``.
    """

    def __init__(
        self,
        shapes_graph: Graph,
        context: Mapping[str, Any] | None = None,
        base: str = DEFAULT_BASE,
    ) -> None:
        self.shapes_graph = shapes_graph
        self.context = dict(context) if context is not None else None
        self.base = base
        node_shapes = len(set(shapes_graph.subjects(RDF.type, SH.NodeShape)))
        logger.info("SHACL validator ready: %d node shapes, %d triples", node_shapes, len(shapes_graph))

    @classmethod
    def from_schemas(
        cls,
        schemas: Iterable[SemanticSchema],
        options: ShaclOptions | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> ShaclValidator:
        """Shapes generated from ``schemas``; the context defaults to theirs."""
        schemas = list(schemas)
        if context is None:
            context = generate_context(schemas)
        return cls(generate_shacl_graph(schemas, options), context=context)

    @classmethod
    def from_turtle(
        cls,
        turtle: str,
        context: Mapping[str, Any] | None = None,
    ) -> ShaclValidator:
        """Shapes from pre-supplied Turtle. Raises ShapesLoadError if it does not parse."""
        shapes = Graph()
        try:
            shapes.parse(data=turtle, format="turtle")
        except Exception as exc:
            raise ShapesLoadError(f"Could not parse SHACL shapes: {exc}") from exc
        return cls(shapes, context=context)

    def validate(self, document: Any) -> ShaclValidationResult:
        """Validate a parsed JSON-LD document."""
        try:
            nquads = to_nquads(document, self.context, self.base)
            data_graph = parse_nquads(nquads)
        except Exception as exc:
            logger.warning("JSON-LD expansion failed: %s", exc)
            return _failure(f"SHACL validation error: {exc}")
        return self.validate_graph(data_graph)

    def validate_string(self, text: str) -> ShaclValidationResult:
        """Validate JSON-LD given as JSON text."""
        try:
            document = json.loads(text)
        except ValueError as exc:
            logger.warning("Document is not valid JSON: %s", exc)
            return _failure(f"SHACL validation error: invalid JSON: {exc}")
        return self.validate(document)

    def validate_graph(self, data_graph: Graph) -> ShaclValidationResult:
        """Run the shapes against an RDF data graph."""
        try:
            from pyshacl import validate as pyshacl_validate

            conforms, results_graph, results_text = pyshacl_validate(
                data_graph,
                shacl_graph=self.shapes_graph,
                inference="none",
                abort_on_first=False,
            )
        except Exception as exc:
            logger.warning("SHACL engine failed: %s", exc)
            return _failure(f"SHACL validation error: {exc}")

        results = read_results(results_graph)
        logger.debug("SHACL validation: conforms=%s, %d results", conforms, len(results))
        return ShaclValidationResult(
            conforms=bool(conforms),
            results=results,
            report=results_graph,
            results_text=results_text,
        )

    def shapes_as_turtle(self) -> str:
        return self.shapes_graph.serialize(format="turtle")


# ---------------------------------------------------------------------------
# Convenience functions
# ---------------------------------------------------------------------------

def validate_with_shacl(
    document: Any,
    schemas: Iterable[SemanticSchema],
) -> ShaclValidationResult:
    """One-shot validation of ``document`` against shapes generated from ``schemas``."""
    return ShaclValidator.from_schemas(schemas).validate(document)


def validate_string_with_shacl(
    text: str,
    shapes_turtle: str,
    context: Mapping[str, Any] | None = None,
) -> ShaclValidationResult:
    """One-shot validation of JSON text against shapes given as Turtle."""
    try:
        validator = ShaclValidator.from_turtle(shapes_turtle, context=context)
    except ShapesLoadError as exc:
        logger.warning("%s", exc)
        return _failure(f"SHACL validation error: {exc}")
    return validator.validate_string(text)


def format_validation_report(result: ShaclValidationResult) -> str:
    """Itemized human-readable report."""
    if result.conforms:
        return "Validation successful: document conforms to SHACL shapes"

    lines = [
        "Validation failed: document does not conform to SHACL shapes",
        "",
        f"Found {len(result.results)} result(s):",
        "",
    ]
    for i, r in enumerate(result.results, 1):
        lines.append(f"{i}. {r.severity.value.upper()}: {r.message}")
        if r.focus_node:
            lines.append(f"   Focus Node: {r.focus_node}")
        if r.path:
            lines.append(f"   Path: {r.path}")
        if r.constraint:
            lines.append(f"   Constraint: {local_name(r.constraint)}")
        if r.source_shape:
            lines.append(f"   Source Shape: {r.source_shape}")
        lines.append("")
    return "\n".join(lines)
