"""Tests for JSON-LD processing (expansion, compaction, N-Quads, normalization)."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from rdflib import Literal, URIRef
from rdflib.namespace import RDF

from dodaf.processor import compact, expand, normalize, parse_nquads, to_graph, to_nquads

CONTEXT = {
    "id": "@id",
    "type": "@type",
    "name": "https://ex.org#name",
    "Widget": "https://ex.org#Widget",
}

W1 = URIRef("https://ex.org/w1")


def _doc(**extra):
    doc = {"id": "https://ex.org/w1", "type": "Widget", "name": "Widget One"}
    doc.update(extra)
    return doc


class TestToGraph:
    def test_bare_document_uses_context(self):
        g = to_graph(_doc(), CONTEXT)
        assert (W1, RDF.type, URIRef("https://ex.org#Widget")) in g
        assert (W1, URIRef("https://ex.org#name"), Literal("Widget One")) in g

    def test_own_context_wins(self):
        doc = {
            "@context": {"label": "https://ex.org#label"},
            "@id": "https://ex.org/w1",
            "label": "x",
        }
        g = to_graph(doc, CONTEXT)
        assert (W1, URIRef("https://ex.org#label"), Literal("x")) in g

    def test_without_context_unmapped_terms_drop(self):
        g = to_graph({"@id": "https://ex.org/w1", "name": "Widget One"})
        assert len(g) == 0

    def test_relative_id_resolved_against_base(self):
        g = to_graph({"@id": "w1", "https://ex.org#name": "x"}, base="https://ex.org/")
        assert (W1, URIRef("https://ex.org#name"), Literal("x")) in g

    @pytest.mark.parametrize("bad", ["text", 42, None])
    def test_rejects_non_documents(self, bad):
        with pytest.raises(ValueError):
            to_graph(bad)


class TestExpandCompact:
    def test_expand(self):
        expanded = expand(_doc(), CONTEXT)
        assert isinstance(expanded, list)
        assert expanded[0]["@id"] == "https://ex.org/w1"

    def test_expand_empty(self):
        assert expand({"@id": "https://ex.org/w1"}) == []

    def test_compact(self):
        compacted = compact(_doc(), CONTEXT)
        assert compacted["@context"] == CONTEXT
        assert compacted["name"] == "Widget One"


class TestNQuads:
    def test_sorted_lines(self):
        text = to_nquads(_doc(), CONTEXT)
        lines = text.splitlines()
        assert len(lines) == 2
        assert lines == sorted(lines)
        assert text.endswith("\n")

    def test_round_trip_through_parse(self):
        g = parse_nquads(to_nquads(_doc(), CONTEXT))
        assert (W1, URIRef("https://ex.org#name"), Literal("Widget One")) in g
        assert len(g) == 2

    def test_parse_rejects_garbage(self):
        with pytest.raises(Exception):
            parse_nquads("not nquads at all")


class TestNormalize:
    def test_key_order_irrelevant(self):
        a = {"id": "https://ex.org/w1", "name": "Widget One", "type": "Widget"}
        b = {"type": "Widget", "name": "Widget One", "id": "https://ex.org/w1"}
        assert normalize(a, CONTEXT) == normalize(b, CONTEXT)

    def test_blank_nodes_relabelled(self):
        a = {"name": "Anonymous", "type": "Widget"}
        first = normalize(a, CONTEXT)
        second = normalize(dict(a), CONTEXT)
        assert first == second
        assert "_:" in first
