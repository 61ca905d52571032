"""Command-line interface.

    python -m dodaf validate architecture.json [--shacl] [--output report.json]
    python -m dodaf generate {context,owl,shacl,all} [--out-dir dist]
    python -m dodaf analyze architecture.json

Exit status is 0 on success and 1 when validation or generation fails.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from .context import export_context_json, generate_dodaf_context, validate_context
from .ontology import DODAF_SCHEMAS
from .owl import generate_dodaf_owl_turtle, validate_owl_turtle
from .shacl import generate_dodaf_shacl_turtle, validate_shacl_turtle
from .validation import DocumentValidator

logger = logging.getLogger(__name__)

ARTIFACT_FILES = {
    "context": "dodaf-context.json",
    "owl": "dodaf.owl.ttl",
    "shacl": "dodaf.shapes.ttl",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dodaf",
        description="DoDAF 2.0 ontology tools: artifact generation and document validation",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="More logging (-v info, -vv debug)")
    sub = parser.add_subparsers(dest="command", required=True)

    validate = sub.add_parser("validate", help="Validate a DoDAF architecture document")
    validate.add_argument("file", type=Path, help="JSON-LD architecture document")
    validate.add_argument("-s", "--shacl", action="store_true", help="Include SHACL validation")
    validate.add_argument("-o", "--output", type=Path, help="Write the result as JSON to this file")

    generate = sub.add_parser("generate", help="Generate semantic artifacts")
    generate.add_argument("artifact", choices=[*ARTIFACT_FILES, "all"])
    generate.add_argument("--out-dir", type=Path, default=Path("dist"),
                          help="Output directory (default: dist)")

    analyze = sub.add_parser("analyze", help="Summarize a DoDAF architecture document")
    analyze.add_argument("file", type=Path, help="JSON-LD architecture document")

    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def _load(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def cmd_validate(args: argparse.Namespace) -> int:
    print(f"Validating DoDAF architecture: {args.file}")
    try:
        document = _load(args.file)
    except (OSError, ValueError) as exc:
        print(f"Cannot read {args.file}: {exc}", file=sys.stderr)
        return 1

    result = DocumentValidator().validate(document, include_shacl=args.shacl)

    if result.valid:
        print("Architecture is valid")
    else:
        print("Architecture validation failed")
        print("Errors:")
        for i, error in enumerate(result.errors, 1):
            print(f"  {i}. {error}")
    if result.warnings:
        print("Warnings:")
        for i, warning in enumerate(result.warnings, 1):
            print(f"  {i}. {warning}")
    if result.shacl_result is not None:
        print(f"SHACL validation: {'PASSED' if result.shacl_result.conforms else 'FAILED'}")

    if args.output:
        payload = {
            "valid": result.valid,
            "errors": result.errors,
            "warnings": result.warnings,
        }
        if result.shacl_result is not None:
            payload["shaclConforms"] = result.shacl_result.conforms
        args.output.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.info("Wrote validation result to %s", args.output)
        print(f"Results saved to: {args.output}")

    return 0 if result.valid else 1


def cmd_generate(args: argparse.Namespace) -> int:
    wanted = list(ARTIFACT_FILES) if args.artifact == "all" else [args.artifact]
    args.out_dir.mkdir(parents=True, exist_ok=True)

    failed = False
    for artifact in wanted:
        print(f"Generating {artifact}...")
        if artifact == "context":
            context = generate_dodaf_context(DODAF_SCHEMAS)
            text = export_context_json(context) + "\n"
            report = validate_context(context, DODAF_SCHEMAS)
        elif artifact == "owl":
            text = generate_dodaf_owl_turtle(DODAF_SCHEMAS)
            report = validate_owl_turtle(text)
        else:
            text = generate_dodaf_shacl_turtle(DODAF_SCHEMAS)
            report = validate_shacl_turtle(text)

        path = args.out_dir / ARTIFACT_FILES[artifact]
        path.write_text(text, encoding="utf-8")
        logger.info("Wrote %s to %s", artifact, path)

        if report.valid:
            print(f"  {path}")
        else:
            failed = True
            print(report.summary())

    return 1 if failed else 0


def cmd_analyze(args: argparse.Namespace) -> int:
    print(f"Analyzing DoDAF architecture: {args.file}")
    try:
        document = _load(args.file)
    except (OSError, ValueError) as exc:
        print(f"Cannot read {args.file}: {exc}", file=sys.stderr)
        return 1
    if not isinstance(document, dict):
        print("Architecture document must be a JSON object", file=sys.stderr)
        return 1

    for line in analyze(document):
        print(line)
    return 0


def analyze(document: dict[str, Any]) -> list[str]:
    """Counts of views, products, elements and relationships."""
    views = _nodes(document, "views")
    products = [p for v in views for p in _nodes(v, "products")]
    elements = [e for p in products for e in _nodes(p, "elements")]
    relationships = [r for p in products for r in _nodes(p, "relationships")]

    lines = [
        "Architecture Summary:",
        f"  Name: {document.get('name') or 'N/A'}",
        f"  Description: {document.get('description') or 'N/A'}",
        f"  Views: {len(views)}",
        f"  Products: {len(products)}",
        f"  Elements: {len(elements)}",
        f"  Relationships: {len(relationships)}",
    ]
    view_types = sorted({str(v["viewType"]) for v in views if v.get("viewType")})
    if view_types:
        lines.append(f"  View types: {', '.join(view_types)}")
    return lines


def _nodes(node: dict[str, Any], key: str) -> list[dict[str, Any]]:
    value = node.get(key) or []
    if isinstance(value, dict):
        value = [value]
    return [item for item in value if isinstance(item, dict)] if isinstance(value, list) else []


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

_COMMANDS = {
    "validate": cmd_validate,
    "generate": cmd_generate,
    "analyze": cmd_analyze,
}


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    return _COMMANDS[args.command](args)
