"""Tests for the document validator."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from rdflib import Namespace

from dodaf.context import generate_dodaf_context
from dodaf.dsl import REQUIRED, Class, DataProperty, String
from dodaf.ontology import DODAF_SCHEMAS
from dodaf.shacl_validation import ShaclValidator
from dodaf.validation import DocumentValidationResult, DocumentValidator

from case_studies.command_post.architecture import (
    BASE,
    broken_missing_name,
    broken_shapes,
    broken_untyped_root,
    build_architecture,
    unknown_element_type,
)

EX = Namespace("https://ex.org#")


@pytest.fixture(scope="module")
def validator():
    return DocumentValidator()


def _minimal(**extra):
    doc = {
        "id": "https://example.org/arch/1",
        "type": "Architecture",
        "name": "Test",
        "description": "d",
    }
    doc.update(extra)
    return doc


# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------

class TestStructure:
    def test_minimal_architecture_is_valid(self, validator):
        result = validator.validate(_minimal())
        assert result.valid, result.summary()
        assert result.errors == []

    def test_missing_type(self, validator):
        result = validator.validate({"@id": "arch-1", "name": "Test", "description": "d"})
        assert not result.valid
        assert any("type" in e for e in result.errors)
        assert result.errors == ["Invalid DoDAF architecture: missing or incorrect type field"]

    def test_wrong_type(self, validator):
        result = validator.validate(_minimal(type="View"))
        assert result.errors == ["Invalid DoDAF architecture: missing or incorrect type field"]

    def test_missing_id(self, validator):
        doc = _minimal()
        del doc["id"]
        result = validator.validate(doc)
        assert result.errors == ["Invalid DoDAF architecture: missing required id field"]

    def test_missing_name(self, validator):
        doc = _minimal()
        del doc["name"]
        result = validator.validate(doc)
        assert not result.valid
        assert result.errors == ["Invalid DoDAF architecture: Missing required field 'name'"]

    def test_missing_description(self, validator):
        doc = _minimal()
        del doc["description"]
        result = validator.validate(doc)
        assert "Invalid DoDAF architecture: Missing required field 'description'" in result.errors

    def test_nested_node_without_id(self, validator):
        doc = _minimal(views=[{"type": "View", "viewType": "OV", "name": "Operational View"}])
        result = validator.validate(doc)
        assert not result.valid
        assert "Invalid DoDAF architecture: View node is missing its id" in result.errors

    def test_root_referenced_by_its_view(self, validator):
        # the view links back, so the root is also an object; its id sorts after the view's
        doc = _minimal(id="https://ex.org/zarch", views=[{
            "id": "https://ex.org/v1",
            "type": "View",
            "viewType": "OV",
            "name": "V",
            "https://dodaf.defense.gov/ontology#architecture": {"@id": "https://ex.org/zarch"},
        }])
        result = validator.validate(doc)
        assert result.valid, result.summary()
        assert result.errors == []

    def test_relative_ids_resolve_against_base(self, validator):
        result = validator.validate(_minimal(id="arch-1"))
        assert result.valid, result.summary()

    def test_explicit_context_respected(self, validator):
        doc = _minimal()
        doc["@context"] = generate_dodaf_context(DODAF_SCHEMAS)
        assert validator.validate(doc).valid


class TestExpansionFailures:
    def test_nothing_to_expand(self, validator):
        result = validator.validate({})
        assert not result.valid
        assert result.errors == ["Invalid JSON-LD document: could not expand"]

    @pytest.mark.parametrize("bad", ["not a document", 42, None])
    def test_not_a_document(self, validator, bad):
        result = validator.validate(bad)
        assert not result.valid
        assert result.errors[0].startswith("Invalid JSON-LD document: could not expand")

    def test_invalid_result_has_no_normalized_form(self, validator):
        result = validator.validate({})
        assert result.normalized is None


class TestNormalizedOutput:
    def test_compacted_on_success(self, validator):
        result = validator.validate(_minimal())
        assert result.normalized is not None
        assert "@context" in result.normalized
        assert result.normalized["name"] == "Test"


# ---------------------------------------------------------------------------
# Case study documents
# ---------------------------------------------------------------------------

class TestCommandPost:
    def test_conforming_architecture(self, validator):
        result = validator.validate(build_architecture())
        assert result.valid, result.summary()
        assert result.warnings == []

    def test_untyped_root(self, validator):
        result = validator.validate(broken_untyped_root())
        assert result.errors == ["Invalid DoDAF architecture: missing or incorrect type field"]

    def test_missing_name(self, validator):
        result = validator.validate(broken_missing_name())
        assert not result.valid

    def test_unknown_element_type_is_a_warning(self, validator):
        result = validator.validate(unknown_element_type())
        assert result.valid
        assert result.warnings == [
            f"{BASE}/elements/widget: Required property 'description' is missing "
            "for element type 'CustomWidget'"
        ]

    def test_metamodel_checks_can_be_turned_off(self):
        result = DocumentValidator(check_metamodel=False).validate(unknown_element_type())
        assert result.valid
        assert result.warnings == []

    def test_broken_shapes_pass_without_shacl(self, validator):
        assert validator.validate(broken_shapes()).valid


class TestShaclPass:
    def test_conforming_architecture(self, validator):
        result = validator.validate(build_architecture(), include_shacl=True)
        assert result.valid, result.summary()
        assert result.shacl_result is not None
        assert result.shacl_result.conforms

    def test_shape_violations_are_errors(self, validator):
        result = validator.validate(broken_shapes(), include_shacl=True)
        assert not result.valid
        assert len(result.errors) == 3
        assert all(e.startswith("SHACL: ") for e in result.errors)
        assert result.normalized is None

    def test_structural_failure_skips_shacl(self, validator):
        result = validator.validate(broken_untyped_root(), include_shacl=True)
        assert result.shacl_result is None

    def test_shapes_built_at_construction(self):
        validator = DocumentValidator()
        shacl = validator.shacl_validator
        assert isinstance(shacl, ShaclValidator)
        assert len(shacl.shapes_graph) > 0
        validator.validate(build_architecture(), include_shacl=True)
        validator.validate(broken_shapes(), include_shacl=True)
        assert validator.shacl_validator is shacl

    def test_injected_shacl_validator(self):
        widget = Class(EX.Widget, {"name": DataProperty(String(), EX.name, REQUIRED)})
        shacl = ShaclValidator.from_schemas([widget])
        validator = DocumentValidator(shacl_validator=shacl)
        assert validator.shacl_validator is shacl
        result = validator.validate(_minimal(), include_shacl=True)
        assert result.valid


# ---------------------------------------------------------------------------
# Conversions and reporting
# ---------------------------------------------------------------------------

class TestConversions:
    def test_to_nquads(self, validator):
        text = validator.to_nquads(_minimal())
        assert "<https://example.org/arch/1>" in text
        assert "<https://schema.org/name>" in text

    def test_normalize_is_stable(self, validator):
        assert validator.normalize(_minimal()) == validator.normalize(dict(reversed(list(_minimal().items()))))

    def test_conversion_errors_raise_value_error(self, validator):
        with pytest.raises(ValueError, match="N-Quads"):
            validator.to_nquads("not a document")
        with pytest.raises(ValueError, match="normalize"):
            validator.normalize("not a document")


class TestSummary:
    def test_valid_summary(self):
        summary = DocumentValidationResult(valid=True).summary()
        assert "VALID" in summary
        assert "No issues found." in summary

    def test_invalid_summary(self):
        result = DocumentValidationResult(valid=False, errors=["boom"], warnings=["hmm"])
        summary = result.summary()
        assert "INVALID" in summary
        assert "Errors (1):" in summary
        assert "Warnings (1):" in summary
