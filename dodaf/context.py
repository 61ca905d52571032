"""JSON-LD context generation.

The merged context is built in a fixed precedence order, later entries
overwriting earlier ones of the same key:

  1. ``@base``, ``@version`` and the ``id``/``type`` keyword aliases
  2. standard prefixes from the vocabulary registry
  3. caller-supplied custom prefixes
  4. per schema, in list order: the schema's own context fragment, then one
     ``field name -> property IRI`` entry per annotated field
  5. the schema's class short name, only if that key is still free

Overwrites are silent in the output and logged at debug level.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Mapping

from .config import DODAF_CONTEXT_OPTIONS, ContextOptions
from .types import ArtifactReport, SemanticSchema
from .vocab import PREFIXES

logger = logging.getLogger(__name__)

_KEYWORD_ALIASES = {"id": "@id", "type": "@type"}


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

def generate_context(
    schemas: Iterable[SemanticSchema],
    options: ContextOptions | None = None,
) -> dict[str, Any]:
    """Merge the schemas into one JSON-LD context object."""
    options = options or ContextOptions()
    context: dict[str, Any] = {
        "@base": options.base,
        "@version": float(options.version),
    }
    context.update(_KEYWORD_ALIASES)

    if options.include_standard_prefixes:
        _merge(context, PREFIXES, "standard prefix")
    _merge(context, options.custom_prefixes, "custom prefix")

    count = 0
    for schema in schemas:
        _merge(context, schema.context, f"{schema.name} context fragment")
        _merge(
            context,
            {name: str(meta.iri) for name, meta in schema.properties.items()},
            f"{schema.name} property",
        )
        context.setdefault(schema.name, str(schema.class_iri))
        count += 1

    logger.debug("Generated JSON-LD context from %d schemas (%d entries)", count, len(context))
    return context


def generate_dodaf_context(schemas: Iterable[SemanticSchema]) -> dict[str, Any]:
    """Context with the DoDAF base and compact DoDAF terms."""
    return generate_context(schemas, DODAF_CONTEXT_OPTIONS)


def _merge(context: dict[str, Any], entries: Mapping[str, Any], source: str) -> None:
    for key, value in entries.items():
        previous = context.get(key)
        if previous is not None and previous != value:
            logger.debug("Context key '%s' overwritten by %s: %r -> %r", key, source, previous, value)
        context[key] = value


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

def export_context_json(context: Mapping[str, Any]) -> str:
    """Pretty-printed JSON (2-space indent) for diff-friendly files."""
    return json.dumps(context, indent=2, ensure_ascii=False)


def generate_context_file(
    schemas: Iterable[SemanticSchema],
    options: ContextOptions | None = None,
) -> str:
    return export_context_json(generate_context(schemas, options))


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def validate_context(
    context: Mapping[str, Any],
    schemas: Iterable[SemanticSchema],
) -> ArtifactReport:
    """Advisory consistency check of a context against its schemas.

    Reports every annotated field whose name is missing from the context or
    mapped to a different IRI than its metadata declares, and every IRI that
    two or more terms map to. Compact IRIs (``dodaf:name``) are expanded
    through the context's own prefixes before comparing.
    """
    report = ArtifactReport(artifact="JSON-LD context")
    prefixes = _prefixes(context)

    seen = set()
    for schema in schemas:
        for name, meta in schema.properties.items():
            if (name, meta.iri) in seen:
                continue
            seen.add((name, meta.iri))
            if name not in context:
                report.errors.append(f"Property '{name}' is not mapped in context")
                continue
            mapped = _expand(_term_iri(context[name]), prefixes)
            if mapped != str(meta.iri):
                report.errors.append(
                    f"Property '{name}' is mapped to '{mapped}' but declared as '{meta.iri}'"
                )

    by_iri: dict[str, list[str]] = {}
    for key, value in context.items():
        if key.startswith("@"):
            continue
        term_iri = _term_iri(value)
        if not term_iri or term_iri.startswith("@"):
            continue
        by_iri.setdefault(_expand(term_iri, prefixes), []).append(key)

    for term_iri, names in by_iri.items():
        if len(names) > 1:
            report.errors.append(f"IRI '{term_iri}' is mapped to multiple terms: {', '.join(names)}")

    if not report.valid:
        logger.debug("Context validation found %d problems", len(report.errors))
    return report


def _term_iri(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        term_id = value.get("@id")
        return term_id if isinstance(term_id, str) else None
    return None


def _prefixes(context: Mapping[str, Any]) -> dict[str, str]:
    return {
        key: value
        for key, value in context.items()
        if not key.startswith("@") and isinstance(value, str) and value.endswith(("#", "/"))
    }


def _expand(value: str | None, prefixes: Mapping[str, str]) -> str | None:
    if value is None or "://" in value:
        return value
    prefix, sep, local = value.partition(":")
    if sep and prefix in prefixes:
        return prefixes[prefix] + local
    return value
