"""Tests for the command-line interface."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from page_reader.cli import app

runner = CliRunner()

PAGE = (
    "<html><head><title>Notes from the Harbour Walk | Coastal Diary</title></head><body>"
    "<article>"
    "<p>The tide was out when we reached the harbour wall just after breakfast.</p>"
    "<p>Fishing boats leaned on their keels in the mud, waiting for the water.</p>"
    "<p>By noon the gulls had found the chip shop and the walk was over.</p>"
    "</article></body></html>"
)


def test_json_output_from_local_file(tmp_path):
    source = tmp_path / "page.html"
    source.write_text(PAGE, encoding="utf-8")
    output = tmp_path / "out" / "page.json"

    result = runner.invoke(app, [str(source), "--format", "json", "--output", str(output)])

    assert result.exit_code == 0, result.output
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["title"] == "Notes from the Harbour Walk"
    assert payload["original_url"] is None
    assert "harbour wall" in payload["text_body"]


def test_unknown_format_is_rejected(tmp_path):
    source = tmp_path / "page.html"
    source.write_text(PAGE, encoding="utf-8")

    result = runner.invoke(app, [str(source), "--format", "pdf"])

    assert result.exit_code != 0


def test_reader_errors_exit_with_code_one():
    result = runner.invoke(app, ["   "])
    assert result.exit_code == 1
