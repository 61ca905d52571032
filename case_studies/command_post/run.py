"""Command Post: end-to-end walk through the DoDAF ontology tooling.

  STEP 1: Artifacts
    Generate the JSON-LD context, OWL ontology and SHACL shapes from the
    DoDAF schemas and run their self-checks.

  STEP 2: Document validation
    Validate the conforming document, then the structurally broken ones.
    Structural failures stop validation before SHACL runs.

  STEP 3: SHACL
    Validate a structurally sound document that breaks three shapes.

  STEP 4: Metamodel
    An element of an unknown type is accepted; the synthesized default
    record reports what it lacks as a warning.

Run with: python -m case_studies.command_post.run
"""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))

from dodaf.context import generate_dodaf_context, validate_context
from dodaf.ontology import DODAF_SCHEMAS
from dodaf.owl import generate_dodaf_owl_turtle, validate_owl_turtle
from dodaf.shacl import generate_dodaf_shacl_turtle, validate_shacl_turtle
from dodaf.shacl_validation import format_validation_report
from dodaf.validation import DocumentValidator

from .architecture import (
    broken_missing_name,
    broken_shapes,
    broken_untyped_root,
    build_architecture,
    unknown_element_type,
)


def print_header(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def print_indented(text: str) -> None:
    for line in text.split("\n"):
        print(f"  {line}")


def run_artifacts() -> None:
    print_header("STEP 1: Artifacts")

    context = generate_dodaf_context(DODAF_SCHEMAS)
    print(f"\n  Context: {len(context)} entries")
    print_indented(validate_context(context, DODAF_SCHEMAS).summary())

    owl = generate_dodaf_owl_turtle(DODAF_SCHEMAS)
    print(f"\n  OWL ontology: {len(owl.splitlines())} lines of Turtle")
    print_indented(validate_owl_turtle(owl).summary())

    shapes = generate_dodaf_shacl_turtle(DODAF_SCHEMAS)
    print(f"\n  SHACL shapes: {len(shapes.splitlines())} lines of Turtle")
    print_indented(validate_shacl_turtle(shapes).summary())


def run_document_validation(validator: DocumentValidator) -> None:
    print_header("STEP 2: Document validation")

    scenarios = [
        ("Conforming architecture", build_architecture()),
        ("Root without type", broken_untyped_root()),
        ("Root without name", broken_missing_name()),
    ]
    for title, document in scenarios:
        print(f"\n  {title}")
        print("  " + "-" * 46)
        print_indented(validator.validate(document).summary())


def run_shacl(validator: DocumentValidator) -> None:
    print_header("STEP 3: SHACL")

    result = validator.validate(broken_shapes(), include_shacl=True)
    print_indented(result.summary())
    if result.shacl_result is not None:
        print()
        print_indented(format_validation_report(result.shacl_result))


def run_metamodel(validator: DocumentValidator) -> None:
    print_header("STEP 4: Metamodel")

    result = validator.validate(unknown_element_type())
    print_indented(result.summary())


def main() -> None:
    validator = DocumentValidator()
    run_artifacts()
    run_document_validation(validator)
    run_shacl(validator)
    run_metamodel(validator)

    print(f"\n{'=' * 60}")
    print("  Command Post case study complete")
    print(f"{'=' * 60}")


if __name__ == "__main__":
    main()
