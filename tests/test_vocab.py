"""Tests for the vocabulary registry."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from rdflib import URIRef
from rdflib.namespace import XSD

from dodaf.vocab import (
    DATATYPES,
    DCT,
    DODAF,
    PREFIXES,
    SCHEMA,
    SchemaDefinitionError,
    ensure_iri,
    iri,
    is_absolute_iri,
    local_name,
    namespace_of,
)


class TestPrefixes:
    def test_standard_prefixes_present(self):
        for prefix in ("rdf", "rdfs", "owl", "xsd", "sh", "dct", "foaf", "schema", "dodaf"):
            assert prefix in PREFIXES

    def test_dodaf_namespace(self):
        assert PREFIXES["dodaf"] == "https://dodaf.defense.gov/ontology#"

    def test_prefix_table_is_read_only(self):
        with pytest.raises(TypeError):
            PREFIXES["ex"] = "https://example.org/"


class TestClosedNamespaces:
    def test_terms_are_uriref(self):
        assert isinstance(DODAF.Architecture, URIRef)
        assert DODAF.Architecture == URIRef("https://dodaf.defense.gov/ontology#Architecture")

    def test_external_terms(self):
        assert SCHEMA.name == URIRef("https://schema.org/name")
        assert DCT.created == URIRef("http://purl.org/dc/terms/created")

    def test_unknown_term_rejected(self):
        with pytest.raises(AttributeError):
            DODAF.Architekture


class TestDatatypes:
    def test_table(self):
        assert DATATYPES["string"] == XSD.string
        assert DATATYPES["integer"] == XSD.integer
        assert DATATYPES["boolean"] == XSD.boolean
        assert DATATYPES["dateTime"] == XSD.dateTime
        assert DATATYPES["uri"] == XSD.anyURI


class TestIriHelpers:
    def test_iri_from_prefix(self):
        assert iri("dodaf", "View") == DODAF.View

    def test_iri_unknown_prefix(self):
        with pytest.raises(SchemaDefinitionError, match="Unknown prefix"):
            iri("nope", "View")

    def test_ensure_iri_accepts_absolute(self):
        result = ensure_iri("https://ex.org#Widget")
        assert isinstance(result, URIRef)
        assert result == "https://ex.org#Widget"

    def test_ensure_iri_keeps_uriref(self):
        ref = URIRef("urn:example:thing")
        assert ensure_iri(ref) is ref

    @pytest.mark.parametrize("bad", ["", "Widget", "://x", "https://ex.org/a b", "https://ex.org/<x>", 42, None])
    def test_ensure_iri_rejects(self, bad):
        with pytest.raises(SchemaDefinitionError):
            ensure_iri(bad)

    def test_schema_definition_error_is_value_error(self):
        with pytest.raises(ValueError):
            ensure_iri("not an iri")

    def test_is_absolute_iri(self):
        assert is_absolute_iri("https://ex.org/w1")
        assert not is_absolute_iri("arch-1")

    def test_local_name(self):
        assert local_name("https://ex.org#Widget") == "Widget"
        assert local_name("https://ex.org/things/w1") == "w1"
        assert local_name("Widget") == "Widget"

    def test_namespace_of(self):
        assert namespace_of("https://ex.org#Widget") == "https://ex.org#"
        assert namespace_of("https://ex.org/things/w1") == "https://ex.org/things/"
        assert namespace_of("Widget") == ""
