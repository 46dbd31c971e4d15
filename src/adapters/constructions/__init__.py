"""Construcciones concretas de quines.

Por qué un paquete:
- Agrupa una construcción por modelo de ejecución.
- Cada módulo implementa `core.interfaces.construction.QuineConstruction`.
"""

from adapters.constructions.formatting import FormattingConstruction
from adapters.constructions.self_inspecting import SelfInspectingConstruction

__all__ = [
	"FormattingConstruction",
	"SelfInspectingConstruction",
]
