"""Tests for JSON, script and HTML exporters."""
from __future__ import annotations

import json

from adapters.json_exporter import export_output_json, response_to_json
from adapters.report_exporter import export_output_html, render_output_html
from adapters.script_exporter import export_quine_scripts, sanitize_for_filename
from core.domain.models import QuineOutput
from core.domain.strategy import EscapeStrategy
from core.services.quine_pipeline import generate, generate_quine
from core.services.verifier import verify_file, verify_output


def test_json_export_uses_boundary_field_names(tmp_path):
    output = generate("json ☕", EscapeStrategy.UNICODE)

    path = export_output_json(output=output, output_path=tmp_path / "out" / "quine.json")
    payload = json.loads(path.read_text(encoding="utf-8"))

    assert payload["original"] == "json ☕"
    assert payload["escape_strategy"] == "unicode"
    assert payload["stats"]["input_bytes"] == output.stats.input_bytes
    assert QuineOutput.model_validate(payload) == output


def test_response_json_omits_absent_keys():
    failure = json.loads(response_to_json(generate_quine("")))
    success = json.loads(response_to_json(generate_quine("ok")))

    assert failure == {"success": False, "error": "Input is empty", "error_kind": "EmptyInput"}
    assert success["success"] is True
    assert "error" not in success


def test_sanitize_for_filename():
    assert sanitize_for_filename('Hello, "World"!') == "Hello-World"
    assert sanitize_for_filename("ñ☕") == "quine"
    assert len(sanitize_for_filename("a" * 100)) == 40


def test_saved_scripts_are_fixed_points(tmp_path):
    output = generate("saved\nscript")

    one_line_path, multi_line_path = export_quine_scripts(output=output, directory=tmp_path)

    assert one_line_path.name == "saved-script.one_line.py"
    assert one_line_path.read_bytes() == output.one_line.encode("utf-8")
    assert multi_line_path.read_bytes() == output.multi_line.encode("utf-8")
    assert verify_file(multi_line_path, timeout=30).passed


def test_html_report_escapes_input_and_lists_checks(tmp_path):
    output = generate("<b>bold</b>")
    checks = verify_output(output, timeout=30)

    html = render_output_html(output=output, verification=checks)
    path = export_output_html(output=output, output_path=tmp_path / "report.html", verification=checks)

    assert "&lt;b&gt;bold&lt;/b&gt;" in html
    assert "<b>bold</b>" not in html
    assert "Both layouts are fixed points." in html
    assert path.read_text(encoding="utf-8").startswith("<!doctype html>")


def test_html_report_without_verification():
    html = render_output_html(output=generate("plain"))

    assert "Verification" not in html
    assert "Expansion ratio" in html
