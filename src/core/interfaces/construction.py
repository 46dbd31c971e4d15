"""Contratos de construcciones de quines.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que cada modelo de ejecución (script con auto-inspección, exec sin
  fichero) aporte su propia región de motor sin que el template engine
  conozca los detalles.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from core.domain.strategy import TargetModel

if TYPE_CHECKING:
    from core.services.template_engine import Layout


@runtime_checkable
class QuineConstruction(Protocol):
    """Contrato mínimo de una construcción.

    Reglas de diseño:
    - La región del motor es texto fijo por layout: no depende del input.
    - `marker` devuelve None cuando la construcción no se auto-localiza.
    """

    target: TargetModel

    def engine_region(self, layout: "Layout") -> str:
        """Texto que sigue a la región de datos (y a su separador)."""

        ...

    def marker(self, layout: "Layout") -> str | None:
        """Substring con el que el programa encuentra su región de motor."""

        ...
