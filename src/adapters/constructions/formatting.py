"""Construcción clásica: quine por formateo (sin auto-inspección).

Modelo de ejecución:
- El artefacto se entrega al intérprete sin fichero (`python -`, `python -c`,
  `exec`), así que no puede leer su propio fuente.

Cómo se reproduce:
- La región de motor se guarda también como una segunda constante `e`, con
  `%c` en lugar de comillas y saltos de línea y `%%` en lugar de `%`.
- `e % (34, d, 34, ..., 34, e, 34, ...)` reconstruye el programa completo:
  `d` y `e` se insertan con `%s` tal cual, y cada `%c` vuelve a ser `"` o
  salto de línea. No hace falta marcador.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.domain.strategy import TargetModel
from core.interfaces.construction import QuineConstruction

if TYPE_CHECKING:
    from core.services.template_engine import Layout


ENGINE_NAME = "e"
_QUOTE = 34
_NEWLINE = 10


def _as_template(code: str) -> str:
    """Texto de `code` tal y como debe aparecer dentro de la constante `e`."""

    if '"' in code or "\\" in code:
        raise ValueError("engine code cannot hold quotes or backslashes")
    return code.replace("%", "%%").replace("\n", "%c")


class FormattingConstruction(QuineConstruction):
    """Construcción para `TargetModel.PYTHON_EXEC`."""

    target = TargetModel.PYTHON_EXEC

    def marker(self, layout: "Layout") -> None:
        return None

    def engine_region(self, layout: "Layout") -> str:
        if layout.compact:
            data_arg, engine_arg, sep = "d", "e", ","
        else:
            data_arg, engine_arg, sep = "data", "engine", ", "

        code = self._code(layout, "{args}")
        args = [str(_QUOTE), data_arg, str(_QUOTE)]
        if not layout.compact:
            args.append(str(_NEWLINE))
        args += [str(_QUOTE), engine_arg, str(_QUOTE)]
        if not layout.compact:
            args.append(str(_NEWLINE))
        args += [str(_NEWLINE)] * code.count("\n")
        code = self._code(layout, sep.join(args))

        line_end = "%c" if not layout.compact else layout.separator
        template = (
            f"{layout.data_prefix}%c%s%c{line_end}"
            f"{layout.assign(ENGINE_NAME)}%c%s%c{line_end}"
            f"{_as_template(code)}"
        )
        return f'{layout.assign(ENGINE_NAME)}"{template}"{layout.separator}{code}'

    def _code(self, layout: "Layout", args: str) -> str:
        """Sentencias que siguen a la constante `e`."""

        if layout.compact:
            return f"import sys;sys.stdout.write(e%({args}))"
        i = layout.indent
        lines = [
            "import sys",
            "",
            "",
            "def reproduce(data, engine):",
            f"{i}return engine % ({args})",
            "",
            "",
            "sys.stdout.write(reproduce(d, e))",
        ]
        return "\n".join(lines) + "\n"
