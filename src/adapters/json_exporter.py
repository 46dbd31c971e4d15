"""Exportación JSON del resultado.

Por qué JSON:
- Es la forma del borde (`success`/`data`/`error`) que consume cualquier
  llamador externo (bridge nativo, HTTP, scripts).
- Permite persistir una generación sin depender del render HTML.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import GenerateResponse, QuineOutput


def _dumps(payload: dict) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def response_to_json(response: GenerateResponse) -> str:
    """Serializa la respuesta del borde (omite `data`/`error` ausentes)."""

    return _dumps(response.to_payload())


def export_output_json(*, output: QuineOutput, output_path: Path) -> Path:
    """Exporta `QuineOutput` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = output.model_dump(mode="json")
    output_path.write_text(_dumps(payload), encoding="utf-8")
    return output_path
