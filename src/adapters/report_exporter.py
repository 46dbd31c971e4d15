"""Exportación de reportes.

Por qué está en adapters:
- HTML es un detalle de infraestructura (Jinja2).
- El Core solo conoce `QuineOutput` y `VerificationResult`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.domain.models import QuineOutput, VerificationResult


_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        keep_trailing_newline=True,
    )


def render_output_html(
    *,
    output: QuineOutput,
    verification: Sequence[VerificationResult] | None = None,
) -> str:
    """Renderiza un HTML autocontenido para el reporte."""

    generated_at = datetime.now(timezone.utc).isoformat(timespec="seconds")
    checks = list(verification or [])

    template = _get_env().get_template("report.html")
    return template.render(
        output=output,
        stats=output.stats,
        strategy_label=output.escape_strategy.label(),
        target_label=output.target.label(),
        generated_at=generated_at,
        verification=checks,
        verified=bool(checks) and all(c.passed for c in checks),
    )


def export_output_html(
    *,
    output: QuineOutput,
    output_path: Path,
    verification: Sequence[VerificationResult] | None = None,
) -> Path:
    """Exporta la generación como HTML.

    Útil para compartir el resultado: incluye input, ambos quines, stats y,
    si se pasó, el resultado de la verificación.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)
    html = render_output_html(output=output, verification=verification)
    output_path.write_text(html, encoding="utf-8")
    return output_path
