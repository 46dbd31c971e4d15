"""Construcción: script con auto-inspección.

Modelo de ejecución:
- El artefacto se guarda en un fichero y se ejecuta como `python fichero.py`,
  así que `__file__` está disponible y el programa puede leer su propio texto.

Cómo se reproduce:
- La región de motor NO está duplicada como literal: el programa busca el
  marcador (`m=""`) en su propio fuente y copia desde ahí hasta el final.
- La región de datos se reconstruye con `chr(34)` como delimitador para no
  escribir una comilla literal que cerraría el string antes de tiempo.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.domain.strategy import TargetModel
from core.interfaces.construction import QuineConstruction

if TYPE_CHECKING:
    from core.services.template_engine import Layout


MARKER_NAME = "m"


class SelfInspectingConstruction(QuineConstruction):
    """Construcción para `TargetModel.PYTHON_SCRIPT`."""

    target = TargetModel.PYTHON_SCRIPT

    def marker(self, layout: "Layout") -> str:
        return layout.assign(MARKER_NAME) + '""'

    def engine_region(self, layout: "Layout") -> str:
        if layout.compact:
            return self._compact_engine(layout)
        return self._expanded_engine(layout)

    def _compact_engine(self, layout: "Layout") -> str:
        statements = [
            self.marker(layout),
            "q=chr(34)",
            's=open(__file__,encoding="utf-8").read()',
            "import sys",
            (
                f'sys.stdout.write("{layout.data_prefix}"+q+d+q+"{layout.separator}"'
                f'+s[s.index("{layout.assign(MARKER_NAME)}"+q+q):])'
            ),
        ]
        return ";".join(statements)

    def _expanded_engine(self, layout: "Layout") -> str:
        i = layout.indent
        lines = [
            self.marker(layout),
            "import sys",
            "",
            "",
            "def reproduce(data):",
            f"{i}q = chr(34)",
            f'{i}with open(__file__, encoding="utf-8") as handle:',
            f"{i}{i}source = handle.read()",
            f'{i}engine = source[source.index("{layout.assign(MARKER_NAME)}" + q + q):]',
            f'{i}return "{layout.data_prefix}" + q + data + q + chr(10) + engine',
            "",
            "",
            "sys.stdout.write(reproduce(d))",
        ]
        return "\n".join(lines) + "\n"
