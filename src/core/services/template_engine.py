"""Quine template engine.

Assembles a self-reproducing program from two regions:

    <data region><separator><engine region>

The data region is always `d=r"<fragment>"` (compact) or `d = r"<fragment>"`
(expanded). It is a raw string, so at run time `d` holds the fragment text
itself, and `prefix + chr(34) + d + chr(34)` rebuilds the region byte for
byte. The engine region is fixed text supplied by the construction bound to
the target model.

Constructions that locate themselves in their own source carry a marker. It
contains `""`, a sequence no escape strategy can emit, so it can only appear
in the engine region. `assemble` checks this on every call.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from core.domain.errors import MarkerNotFoundError
from core.domain.strategy import TargetModel
from core.interfaces.construction import QuineConstruction
from core.services.escape_codec import is_delimiter_safe


DATA_NAME = "d"


class LayoutKind(str, Enum):
    ONE_LINE = "one_line"
    MULTI_LINE = "multi_line"


@dataclass(frozen=True)
class Layout:
    """Formatting of an artifact: compact single line or indented lines."""

    kind: LayoutKind
    indent: str = "    "

    @classmethod
    def one_line(cls) -> "Layout":
        return cls(LayoutKind.ONE_LINE)

    @classmethod
    def multi_line(cls, indent: str = "    ") -> "Layout":
        if not indent or indent.strip(" \t"):
            raise ValueError("indent must be a non-empty run of spaces/tabs")
        return cls(LayoutKind.MULTI_LINE, indent)

    @property
    def compact(self) -> bool:
        return self.kind is LayoutKind.ONE_LINE

    @property
    def separator(self) -> str:
        return ";" if self.compact else "\n"

    def assign(self, name: str) -> str:
        """`name=` or `name = ` depending on the layout."""

        return f"{name}=" if self.compact else f"{name} = "

    @property
    def data_prefix(self) -> str:
        """Data region text that precedes the opening quote."""

        return self.assign(DATA_NAME) + "r"


def data_region(fragment: str, layout: Layout) -> str:
    return f'{layout.data_prefix}"{fragment}"'


def construction_for(target: TargetModel) -> QuineConstruction:
    """Construction used for each target model."""

    from adapters.constructions import FormattingConstruction, SelfInspectingConstruction

    if TargetModel.parse(target).self_inspecting:
        return SelfInspectingConstruction()
    return FormattingConstruction()


def _check_marker(text: str, *, marker: str, engine_start: int, layout: Layout) -> None:
    occurrences = text.count(marker)
    if occurrences != 1 or text.find(marker) != engine_start:
        raise MarkerNotFoundError(marker, layout.kind.value, occurrences)


def assemble(fragment: str, construction: QuineConstruction, layout: Layout) -> str:
    """Build one artifact for an already encoded fragment.

    Raises `MarkerNotFoundError` if the self-location marker does not sit
    exactly once at the start of the engine region.
    """

    if not fragment:
        raise ValueError("fragment must not be empty")
    if not is_delimiter_safe(fragment):
        raise AssertionError("fragment would terminate the data literal early")

    data = data_region(fragment, layout)
    engine = construction.engine_region(layout)
    text = data + layout.separator + engine

    marker = construction.marker(layout)
    if marker is not None:
        _check_marker(
            text,
            marker=marker,
            engine_start=len(data) + len(layout.separator),
            layout=layout,
        )
    return text


def build_layouts(
    fragment: str,
    construction: QuineConstruction,
    *,
    indent: str = "    ",
) -> tuple[str, str]:
    """Return `(one_line, multi_line)` for the same data/engine split."""

    one_line = assemble(fragment, construction, Layout.one_line())
    multi_line = assemble(fragment, construction, Layout.multi_line(indent))
    return one_line, multi_line
