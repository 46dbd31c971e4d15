"""Tests for the Typer CLI (generate/escape/unescape/verify/doctor)."""
from __future__ import annotations

import json
import logging
import re

import pytest
from typer.testing import CliRunner

from cli import doctor
from cli.main import app
from core.domain.strategy import EscapeStrategy, TargetModel
from core.logging import set_level
from core.services.quine_pipeline import generate


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_generate_json_success(runner):
    result = runner.invoke(app, ["generate", "hello", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["success"] is True
    assert payload["data"]["stats"]["input_bytes"] == 5
    assert payload["data"]["one_line"] == generate("hello").one_line


def test_generate_json_failure_exit_code(runner):
    result = runner.invoke(app, ["generate", 'a"b', "--escape", "raw", "--json"])

    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["success"] is False
    assert payload["error_kind"] == "UnsafeRawInput"


def test_generate_unknown_strategy_fails(runner):
    result = runner.invoke(app, ["generate", "hello", "-e", "rot13", "--json"])

    assert result.exit_code == 1
    assert json.loads(result.stdout)["error_kind"] == "UnsupportedStrategy"


def test_generate_prints_exact_one_line(runner):
    result = runner.invoke(app, ["generate", "hello", "-q", "-o", "-t", "python-exec"])

    assert result.exit_code == 0
    assert result.stdout == generate("hello", target=TargetModel.PYTHON_EXEC).one_line


def test_generate_reads_stdin(runner):
    result = runner.invoke(app, ["generate", "-q", "-m", "-e", "hex"], input="from stdin\n")

    assert result.exit_code == 0
    assert result.stdout == generate("from stdin\n", EscapeStrategy.HEX).multi_line


def test_generate_reads_file(runner, tmp_path):
    source = tmp_path / "input.txt"
    source.write_bytes("file input ☕".encode("utf-8"))

    result = runner.invoke(app, ["generate", "--file", str(source), "--json"])

    assert json.loads(result.stdout)["data"]["original"] == "file input ☕"


def test_generate_exports_and_saves(runner, tmp_path):
    result = runner.invoke(
        app,
        [
            "generate",
            "export me",
            "-q",
            "--export-json",
            str(tmp_path / "q.json"),
            "--export-html",
            str(tmp_path / "q.html"),
            "--save-dir",
            str(tmp_path / "scripts"),
        ],
    )

    assert result.exit_code == 0, result.output
    assert json.loads((tmp_path / "q.json").read_text(encoding="utf-8"))["original"] == "export me"
    assert (tmp_path / "q.html").exists()
    saved = tmp_path / "scripts" / "export-me.one_line.py"
    assert saved.exists()

    verified = runner.invoke(app, ["verify", str(saved)])
    assert verified.exit_code == 0, verified.output


def test_save_uses_configured_output_dir(runner, monkeypatch, tmp_path):
    monkeypatch.setenv("PSYCHOQUINE_OUTPUT_DIR", str(tmp_path / "configured"))

    result = runner.invoke(app, ["generate", "hi", "-q", "-o", "--save"])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "configured" / "hi.multi_line.py").exists()


def test_generate_verify_flag(runner):
    result = runner.invoke(app, ["generate", "check me", "-q", "--verify"])

    assert result.exit_code == 0, result.output


def test_verify_rejects_non_quine(runner, tmp_path):
    path = tmp_path / "not_a_quine.py"
    path.write_text("print('nope')\n", encoding="utf-8")

    result = runner.invoke(app, ["verify", str(path)])

    assert result.exit_code == 1


def test_escape_and_unescape(runner):
    escaped = runner.invoke(app, ["escape", 'a"b'])
    unescaped = runner.invoke(app, ["unescape", "\\u0041", "-e", "unicode"])
    broken = runner.invoke(app, ["unescape", "\\q"])

    assert escaped.stdout == 'a\\"b\n'
    assert unescaped.stdout == "A"
    assert broken.exit_code == 1


def test_escape_raw_refuses_quotes(runner):
    result = runner.invoke(app, ["escape", 'say "hi"', "-e", "raw"])

    assert result.exit_code == 1


def test_version(runner):
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert "PsychoQuine" in result.stdout


def test_doctor_self_test_passes(runner):
    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 0, result.output


def test_verbose_enables_debug_on_module_loggers(runner):
    try:
        result = runner.invoke(app, ["--verbose", "generate", "-q", "hello"])

        assert result.exit_code == 0, result.output
        assert logging.getLogger("psychoquine.generator").isEnabledFor(logging.DEBUG)
        assert logging.getLogger("psychoquine.verifier").isEnabledFor(logging.DEBUG)
    finally:
        set_level("WARNING")


def test_verify_defaults_to_configured_target(runner, monkeypatch, tmp_path):
    monkeypatch.setenv("PSYCHOQUINE_DEFAULT_TARGET", "python-exec")
    path = tmp_path / "exec_quine.py"
    path.write_bytes(generate("piped", target=TargetModel.PYTHON_EXEC).one_line.encode("utf-8"))

    result = runner.invoke(app, ["verify", str(path)])

    assert result.exit_code == 0, result.output


def test_doctor_self_test_uses_configured_indent(runner, monkeypatch):
    checked = []

    def _record(output, *, timeout):
        checked.append(output)
        return []

    monkeypatch.setenv("PSYCHOQUINE_INDENT", "2")
    monkeypatch.setattr(doctor, "verify_output", _record)

    result = runner.invoke(app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert len(checked) == len(TargetModel) * len(EscapeStrategy)
    for output in checked:
        assert re.search(r"^  \S", output.multi_line, re.MULTILINE)
