"""Tests for JSON-LD context generation and context validation."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import json

import pytest
from rdflib import Namespace

from dodaf.config import ContextOptions, DODAF_CONTEXT_OPTIONS
from dodaf.context import (
    export_context_json,
    generate_context,
    generate_context_file,
    generate_dodaf_context,
    validate_context,
)
from dodaf.dsl import REQUIRED, Class, DataProperty, ObjectProperty, String, Uri
from dodaf.ontology import DODAF_SCHEMAS
from dodaf.vocab import PREFIXES, SCHEMA

EX = Namespace("https://ex.org#")


def _schemas():
    widget = Class(EX.Widget, {
        "id": Uri(),
        "name": DataProperty(String(), EX.name, REQUIRED),
        "owner": ObjectProperty(Uri(required=False), EX.owner),
    })
    person = Class(EX.Person, {
        "name": DataProperty(String(), EX.name),
        "email": DataProperty(String(), EX.email),
    })
    return [widget, person]


class TestGenerateContext:
    def test_base_and_version(self):
        ctx = generate_context(_schemas())
        assert ctx["@base"] == PREFIXES["dodaf"]
        assert ctx["@version"] == 1.1
        assert isinstance(ctx["@version"], float)

    def test_keyword_aliases(self):
        ctx = generate_context(_schemas())
        assert ctx["id"] == "@id"
        assert ctx["type"] == "@type"

    def test_standard_prefixes(self):
        ctx = generate_context(_schemas())
        for prefix, namespace in PREFIXES.items():
            assert ctx[prefix] == namespace

    def test_standard_prefixes_can_be_left_out(self):
        ctx = generate_context(_schemas(), ContextOptions(include_standard_prefixes=False))
        assert "rdfs" not in ctx

    def test_completeness(self):
        schemas = _schemas()
        ctx = generate_context(schemas)
        for schema in schemas:
            for name, meta in schema.properties.items():
                assert ctx[name] == str(meta.iri)

    def test_plain_fields_not_mapped(self):
        ctx = generate_context(_schemas())
        assert ctx["id"] == "@id"
        assert "size" not in ctx

    def test_class_short_names(self):
        ctx = generate_context(_schemas())
        assert ctx["Widget"] == str(EX.Widget)
        assert ctx["Person"] == str(EX.Person)

    def test_class_name_does_not_overwrite(self):
        schema = Class(EX.Widget, {"Widget": DataProperty(String(), EX.widgetLabel)})
        ctx = generate_context([schema])
        assert ctx["Widget"] == str(EX.widgetLabel)

    def test_custom_prefixes_overwrite_standard(self):
        options = ContextOptions(custom_prefixes={"schema": "http://schema.org/"})
        ctx = generate_context(_schemas(), options)
        assert ctx["schema"] == "http://schema.org/"

    def test_fragment_then_properties(self):
        schema = Class(
            EX.Widget,
            {"name": DataProperty(String(), EX.name)},
            context={"ex": "https://ex.org#", "name": "https://other.org/name"},
        )
        ctx = generate_context([schema])
        assert ctx["ex"] == "https://ex.org#"
        assert ctx["name"] == str(EX.name)

    def test_deterministic(self):
        first = generate_context_file(_schemas())
        second = generate_context_file(_schemas())
        assert first == second


class TestDodafContext:
    def test_dodaf_terms(self):
        ctx = generate_dodaf_context(DODAF_SCHEMAS)
        assert ctx["name"] == str(SCHEMA.name)
        assert ctx["dodaf"] == PREFIXES["dodaf"]
        assert ctx["Architecture"] == PREFIXES["dodaf"] + "Architecture"

    def test_preset_uses_dodaf_base(self):
        assert DODAF_CONTEXT_OPTIONS.base == PREFIXES["dodaf"]

    def test_dodaf_context_is_consistent(self):
        ctx = generate_dodaf_context(DODAF_SCHEMAS)
        report = validate_context(ctx, DODAF_SCHEMAS)
        assert report.valid, report.summary()


class TestExport:
    def test_pretty_json(self):
        text = export_context_json({"@base": "https://ex.org/", "name": "https://ex.org#name"})
        assert text.startswith("{\n  \"@base\"")
        assert json.loads(text)["name"] == "https://ex.org#name"

    def test_context_file_round_trip(self):
        text = generate_context_file(_schemas())
        assert json.loads(text) == generate_context(_schemas())


class TestValidateContext:
    def test_generated_context_is_valid(self):
        schemas = _schemas()
        report = validate_context(generate_context(schemas), schemas)
        assert report.valid
        assert report.errors == []

    def test_unmapped_property(self):
        schemas = _schemas()
        ctx = generate_context(schemas)
        del ctx["email"]
        report = validate_context(ctx, schemas)
        assert not report.valid
        assert "Property 'email' is not mapped in context" in report.errors

    def test_mismatched_property(self):
        schemas = _schemas()
        ctx = generate_context(schemas)
        ctx["email"] = "https://other.org/email"
        report = validate_context(ctx, schemas)
        assert any("Property 'email' is mapped to" in e for e in report.errors)

    def test_compact_iri_expanded(self):
        schemas = _schemas()
        ctx = generate_context(schemas)
        ctx["ex"] = "https://ex.org#"
        ctx["email"] = "ex:email"
        report = validate_context(ctx, schemas)
        assert report.valid, report.errors

    def test_term_definition_object(self):
        schemas = _schemas()
        ctx = generate_context(schemas)
        ctx["owner"] = {"@id": str(EX.owner), "@type": "@id"}
        report = validate_context(ctx, schemas)
        assert report.valid, report.errors

    def test_collision(self):
        schemas = _schemas()
        ctx = generate_context(schemas)
        ctx["label"] = str(EX.name)
        report = validate_context(ctx, schemas)
        assert not report.valid
        assert any("is mapped to multiple terms" in e and "label" in e for e in report.errors)

    def test_summary(self):
        schemas = _schemas()
        ctx = generate_context(schemas)
        del ctx["email"]
        summary = validate_context(ctx, schemas).summary()
        assert "INVALID" in summary
        assert "email" in summary
