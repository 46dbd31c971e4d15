"""Tests for layout assembly and the self-location marker invariant."""
from __future__ import annotations

import pytest

from adapters.constructions import FormattingConstruction, SelfInspectingConstruction
from conftest import samples_for
from core.domain.errors import MarkerNotFoundError
from core.domain.strategy import EscapeStrategy, TargetModel
from core.interfaces.construction import QuineConstruction
from core.services.escape_codec import encode
from core.services.template_engine import (
    Layout,
    assemble,
    build_layouts,
    construction_for,
    data_region,
)


class _StubConstruction:
    """Construction whose engine text is supplied by the test."""

    target = TargetModel.PYTHON_SCRIPT

    def __init__(self, engine: str, marker: str | None) -> None:
        self._engine = engine
        self._marker = marker

    def engine_region(self, layout):
        return self._engine

    def marker(self, layout):
        return self._marker


def test_data_region_per_layout():
    assert data_region("hello", Layout.one_line()) == 'd=r"hello"'
    assert data_region("hello", Layout.multi_line()) == 'd = r"hello"'


def test_construction_for_each_target():
    script = construction_for(TargetModel.PYTHON_SCRIPT)
    exec_ = construction_for("python-exec")

    assert isinstance(script, SelfInspectingConstruction)
    assert isinstance(exec_, FormattingConstruction)
    assert isinstance(script, QuineConstruction)
    assert isinstance(exec_, QuineConstruction)


def test_one_line_self_inspecting_artifact_is_exact():
    one_line, _ = build_layouts("hello", SelfInspectingConstruction())

    assert one_line == (
        'd=r"hello";m="";q=chr(34);s=open(__file__,encoding="utf-8").read();'
        'import sys;sys.stdout.write("d=r"+q+d+q+";"+s[s.index("m="+q+q):])'
    )


def test_one_line_formatting_artifact_is_exact():
    one_line, _ = build_layouts("hello", FormattingConstruction())

    assert one_line == (
        'd=r"hello";e="d=r%c%s%c;e=%c%s%c;import sys;sys.stdout.write(e%%(34,d,34,34,e,34))";'
        "import sys;sys.stdout.write(e%(34,d,34,34,e,34))"
    )


@pytest.mark.parametrize("construction", [SelfInspectingConstruction(), FormattingConstruction()])
def test_layout_shapes(construction):
    one_line, multi_line = build_layouts("x", construction, indent="  ")

    assert "\n" not in one_line
    assert multi_line.endswith("\n")
    assert "\n  " in multi_line
    assert "def reproduce(" in multi_line


@pytest.mark.parametrize("strategy", list(EscapeStrategy))
@pytest.mark.parametrize("target", list(TargetModel))
def test_artifacts_compile(strategy, target):
    construction = construction_for(target)
    for text in samples_for(strategy):
        for artifact in build_layouts(encode(text, strategy), construction):
            compile(artifact, "<quine>", "exec")


@pytest.mark.parametrize("strategy", list(EscapeStrategy))
def test_marker_occurs_once_at_engine_start(strategy):
    construction = SelfInspectingConstruction()
    for layout in (Layout.one_line(), Layout.multi_line()):
        marker = construction.marker(layout)
        for text in samples_for(strategy):
            fragment = encode(text, strategy)
            artifact = assemble(fragment, construction, layout)
            engine_start = len(data_region(fragment, layout)) + len(layout.separator)

            assert marker not in data_region(fragment, layout)
            assert artifact.count(marker) == 1
            assert artifact.index(marker) == engine_start


def test_missing_marker_is_an_internal_error():
    construction = _StubConstruction("print(1)", 'm=""')

    with pytest.raises(MarkerNotFoundError) as excinfo:
        assemble("x", construction, Layout.one_line())

    assert excinfo.value.kind == "MarkerNotFound"
    assert excinfo.value.occurrences == 0


def test_duplicated_marker_is_an_internal_error():
    construction = _StubConstruction('m="";m=""', 'm=""')

    with pytest.raises(MarkerNotFoundError) as excinfo:
        assemble("x", construction, Layout.one_line())

    assert excinfo.value.occurrences == 2


def test_unsafe_fragment_is_refused():
    with pytest.raises(AssertionError):
        assemble('a"b', SelfInspectingConstruction(), Layout.one_line())


def test_multi_line_rejects_non_whitespace_indent():
    with pytest.raises(ValueError):
        Layout.multi_line("->")
    with pytest.raises(ValueError):
        Layout.multi_line("")
