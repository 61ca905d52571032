"""Tests for the dodaf command-line interface."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import json

import pytest
from rdflib import Graph

from dodaf.cli import ARTIFACT_FILES, analyze, build_parser, main

from case_studies.command_post.architecture import (
    broken_shapes,
    broken_untyped_root,
    build_architecture,
)


def _write(tmp_path, document, name="architecture.json"):
    path = tmp_path / name
    path.write_text(json.dumps(document), encoding="utf-8")
    return str(path)


class TestParser:
    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_unknown_artifact(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["generate", "xml"])

    def test_defaults(self):
        args = build_parser().parse_args(["generate", "all"])
        assert str(args.out_dir) == "dist"
        assert args.verbose == 0


class TestGenerate:
    def test_all(self, tmp_path, capsys):
        assert main(["generate", "all", "--out-dir", str(tmp_path)]) == 0
        for name in ARTIFACT_FILES.values():
            assert (tmp_path / name).exists()

        context = json.loads((tmp_path / "dodaf-context.json").read_text(encoding="utf-8"))
        assert context["type"] == "@type"
        Graph().parse(tmp_path / "dodaf.owl.ttl", format="turtle")
        Graph().parse(tmp_path / "dodaf.shapes.ttl", format="turtle")
        assert "Generating shacl..." in capsys.readouterr().out

    def test_single_artifact(self, tmp_path):
        out = tmp_path / "nested" / "dir"
        assert main(["generate", "owl", "--out-dir", str(out)]) == 0
        assert [p.name for p in out.iterdir()] == ["dodaf.owl.ttl"]


class TestValidate:
    def test_valid_document(self, tmp_path, capsys):
        assert main(["validate", _write(tmp_path, build_architecture())]) == 0
        assert "Architecture is valid" in capsys.readouterr().out

    def test_invalid_document(self, tmp_path, capsys):
        assert main(["validate", _write(tmp_path, broken_untyped_root())]) == 1
        out = capsys.readouterr().out
        assert "Architecture validation failed" in out
        assert "1. Invalid DoDAF architecture: missing or incorrect type field" in out

    def test_output_file(self, tmp_path):
        report = tmp_path / "report.json"
        main(["validate", _write(tmp_path, broken_untyped_root()), "-o", str(report)])
        payload = json.loads(report.read_text(encoding="utf-8"))
        assert payload["valid"] is False
        assert len(payload["errors"]) == 1
        assert "shaclConforms" not in payload

    def test_unreadable_file(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        assert main(["validate", str(path)]) == 1
        assert "Cannot read" in capsys.readouterr().err

    def test_missing_file(self, tmp_path):
        assert main(["validate", str(tmp_path / "nope.json")]) == 1

    def test_shacl(self, tmp_path, capsys):
        report = tmp_path / "report.json"
        code = main(["validate", _write(tmp_path, broken_shapes()), "--shacl", "-o", str(report)])
        assert code == 1
        assert "SHACL validation: FAILED" in capsys.readouterr().out
        assert json.loads(report.read_text(encoding="utf-8"))["shaclConforms"] is False


class TestAnalyze:
    def test_counts(self):
        lines = analyze(build_architecture())
        assert lines == [
            "Architecture Summary:",
            "  Name: Command Post Architecture",
            "  Description: Reference architecture for a tactical command post",
            "  Views: 2",
            "  Products: 2",
            "  Elements: 4",
            "  Relationships: 2",
            "  View types: OV, SV",
        ]

    def test_empty_document(self):
        lines = analyze({})
        assert "  Name: N/A" in lines
        assert "  Views: 0" in lines
        assert not any(line.startswith("  View types") for line in lines)

    def test_single_view_object(self):
        doc = build_architecture()
        doc["views"] = doc["views"][0]
        assert "  Views: 1" in analyze(doc)

    def test_command(self, tmp_path, capsys):
        assert main(["analyze", _write(tmp_path, build_architecture())]) == 0
        assert "  Elements: 4" in capsys.readouterr().out

    def test_command_rejects_non_object(self, tmp_path):
        assert main(["analyze", _write(tmp_path, [1, 2])]) == 1
