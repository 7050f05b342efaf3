"""Tests for pipeline orchestrator and CLI.

These use small hand-written Draft JSON files in tmp_path.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from draft_lexical.cli import main
from draft_lexical.config import Config
from draft_lexical.exceptions import ConversionError, ParseError
from draft_lexical.pipeline import Pipeline


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _simple_draft() -> dict:
    return {
        "blocks": [
            {"key": "a1", "text": "Title", "type": "header-one", "depth": 0},
            {
                "key": "b2",
                "text": "Body text.",
                "type": "unstyled",
                "depth": 0,
                "inlineStyleRanges": [{"offset": 0, "length": 4, "style": "ITALIC"}],
                "entityRanges": [],
            },
            {"key": "c3", "text": "Point", "type": "unordered-list-item", "depth": 0},
        ],
        "entityMap": {},
    }


def _write(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Pipeline tests
# ---------------------------------------------------------------------------

class TestPipelineConvert:
    def test_convert_file(self, tmp_path):
        src = _write(tmp_path / "doc.json", _simple_draft())
        out = tmp_path / "doc.lexical.json"

        result = Pipeline().convert(src, out)

        assert result == out
        data = json.loads(out.read_text())
        root = data["editorState"]["root"]
        assert [child["type"] for child in root["children"]] == ["heading", "paragraph", "list"]
        assert root["children"][1]["children"][0] == {
            "version": 1,
            "type": "text",
            "text": "Body",
            "format": 2,
            "style": "",
            "mode": "normal",
            "detail": 0,
        }

    def test_convert_bare_root(self, tmp_path):
        config = Config.default()
        config.output.wrap_editor_state = False
        src = _write(tmp_path / "doc.json", _simple_draft())
        out = Pipeline(config).convert(src, tmp_path / "out.json")
        assert json.loads(out.read_text())["type"] == "root"

    def test_convert_shortened(self, tmp_path):
        config = Config.default()
        config.output.shorten_keys = True
        config.output.strip_defaults = True
        src = _write(tmp_path / "doc.json", _simple_draft())
        out = Pipeline(config).convert(src, tmp_path / "out.json")

        root = json.loads(out.read_text())["editorState"]["root"]
        assert root["t"] == "root"
        assert root["c"][1]["c"][0] == {"t": "text", "tx": "Body", "f": 2}

    def test_convert_with_report(self, tmp_path):
        src = _write(tmp_path / "doc.json", _simple_draft())
        out = tmp_path / "out.json"
        pipeline = Pipeline()
        pipeline.convert(src, out, save_report=True)

        report_path = tmp_path / "out.report.json"
        assert report_path.exists()
        report = json.loads(report_path.read_text())
        assert report["source_file"] == "doc.json"
        assert report["block_count"] == 3
        assert report["node_counts"]["lists"] == 1
        assert pipeline.last_report.heading_count == 1

    def test_missing_input(self, tmp_path):
        with pytest.raises(ParseError, match="not found"):
            Pipeline().convert(tmp_path / "missing.json", tmp_path / "out.json")

    def test_invalid_json(self, tmp_path):
        src = tmp_path / "bad.json"
        src.write_text("{not json")
        with pytest.raises(ParseError, match="Invalid JSON"):
            Pipeline().convert(src, tmp_path / "out.json")

    def test_malformed_document_writes_nothing(self, tmp_path):
        src = _write(tmp_path / "doc.json", {"blocks": [{"type": "unstyled"}], "entityMap": {}})
        out = tmp_path / "out.json"
        with pytest.raises(ParseError):
            Pipeline().convert(src, out)
        assert not out.exists()


class TestPipelineCompaction:
    def test_shorten_then_expand(self, tmp_path):
        src = _write(tmp_path / "doc.json", _simple_draft())
        pipeline = Pipeline()
        full = pipeline.convert(src, tmp_path / "full.json")
        short = pipeline.shorten(full, tmp_path / "short.json")
        expanded = pipeline.expand(short, tmp_path / "expanded.json")

        assert "editorState" in json.loads(short.read_text())
        assert json.loads(expanded.read_text()) == json.loads(full.read_text())
        assert len(short.read_text()) < len(full.read_text())

    def test_expand_bare_root(self, tmp_path):
        src = _write(
            tmp_path / "short.json",
            {"t": "root", "c": [{"t": "paragraph", "c": [{"t": "text", "tx": "hi"}]}]},
        )
        out = Pipeline().expand(src, tmp_path / "full.json")
        data = json.loads(out.read_text())
        assert data["type"] == "root"
        assert data["children"][0]["children"][0]["mode"] == "normal"

    def test_expand_invalid_content(self, tmp_path):
        src = _write(tmp_path / "short.json", {"t": "root", "c": [{"t": "mystery"}]})
        with pytest.raises(ParseError, match="Invalid Lexical"):
            Pipeline().expand(src, tmp_path / "full.json")


class TestPipelineProposal:
    def test_proposal(self, tmp_path):
        proposal = {
            "id": "p1",
            "draft": {"cover": {"rawtitle": _simple_draft()}, "variables": {"raw": {"x": 1}}},
        }
        src = _write(tmp_path / "proposal.json", proposal)
        out = Pipeline().proposal(src, tmp_path / "proposal-lexical.json")

        data = json.loads(out.read_text())
        assert data["id"] == "p1"
        assert data["draft"]["cover"]["rawtitle"]["type"] == "root"
        assert data["draft"]["variables"] == {"raw": {"x": 1}}

    def test_proposal_sections_list_shortened(self, tmp_path):
        config = Config.default()
        config.output.shorten_keys = True
        config.output.strip_defaults = True
        proposal = {"draft": {"sections": [{"raw": _simple_draft()}]}}
        src = _write(tmp_path / "proposal.json", proposal)
        out = Pipeline(config).proposal(src, tmp_path / "out.json")

        root = json.loads(out.read_text())["draft"]["sections"][0]["raw"]
        assert root["t"] == "root"
        assert root["c"][1]["c"][0] == {"t": "text", "tx": "Body", "f": 2}

    def test_proposal_without_draft(self, tmp_path):
        src = _write(tmp_path / "proposal.json", {"id": "p1"})
        with pytest.raises(ConversionError, match="draft"):
            Pipeline().proposal(src, tmp_path / "out.json")


# ---------------------------------------------------------------------------
# CLI tests
# ---------------------------------------------------------------------------

class TestCLI:
    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Draft.js" in result.output

    def test_convert_help(self):
        runner = CliRunner()
        result = runner.invoke(main, ["convert", "--help"])
        assert result.exit_code == 0
        assert "--shorten" in result.output
        assert "--report" in result.output

    def test_convert_default_output_path(self, tmp_path):
        src = _write(tmp_path / "doc.json", _simple_draft())
        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(src)])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "doc.lexical.json").exists()
        assert "Generated:" in result.output

    def test_convert_with_report(self, tmp_path):
        src = _write(tmp_path / "doc.json", _simple_draft())
        out = tmp_path / "out.json"
        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(src), str(out), "--report"])
        assert result.exit_code == 0, result.output
        assert "Report: 1 paragraphs, 1 lists" in result.output
        assert (tmp_path / "out.report.json").exists()

    def test_convert_shorten_bare_root(self, tmp_path):
        src = _write(tmp_path / "doc.json", _simple_draft())
        out = tmp_path / "out.json"
        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(src), str(out), "--shorten", "--bare-root"])
        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text())["t"] == "root"

    def test_convert_error_exit_code(self, tmp_path):
        src = _write(tmp_path / "doc.json", {"blocks": "nope"})
        runner = CliRunner()
        result = runner.invoke(main, ["convert", str(src), str(tmp_path / "out.json")])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_config_option(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("output:\n  wrap_editor_state: false\n")
        src = _write(tmp_path / "doc.json", _simple_draft())
        out = tmp_path / "out.json"
        runner = CliRunner()
        result = runner.invoke(main, ["--config", str(config_file), "convert", str(src), str(out)])
        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text())["type"] == "root"

    def test_shorten_and_expand_commands(self, tmp_path):
        src = _write(tmp_path / "doc.json", _simple_draft())
        full = tmp_path / "full.json"
        short = tmp_path / "short.json"
        expanded = tmp_path / "expanded.json"
        runner = CliRunner()
        assert runner.invoke(main, ["convert", str(src), str(full)]).exit_code == 0
        assert runner.invoke(main, ["shorten", str(full), str(short)]).exit_code == 0
        assert runner.invoke(main, ["expand", str(short), str(expanded)]).exit_code == 0
        assert json.loads(expanded.read_text()) == json.loads(full.read_text())

    def test_proposal_command(self, tmp_path):
        src = _write(tmp_path / "proposal.json", {"draft": {"raw": _simple_draft()}})
        out = tmp_path / "out.json"
        runner = CliRunner()
        result = runner.invoke(main, ["proposal", str(src), str(out)])
        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text())["draft"]["raw"]["type"] == "root"
