"""Exportación de los quines como scripts `.py`.

Los ficheros se escriben en bytes UTF-8 exactos (sin traducción de saltos de
línea): un quine guardado con `\\r\\n` dejaría de ser punto fijo.
"""

from __future__ import annotations

from pathlib import Path

from core.domain.models import QuineOutput


def sanitize_for_filename(value: str, *, max_length: int = 40) -> str:
    """Generate a filesystem-friendly slug from the input text."""

    out: list[str] = []
    for ch in value.strip()[:max_length]:
        if ch.isascii() and (ch.isalnum() or ch in ("-", "_", ".")):
            out.append(ch)
        else:
            out.append("-")
    cleaned = "".join(out).strip("-_.")
    while "--" in cleaned:
        cleaned = cleaned.replace("--", "-")
    return cleaned or "quine"


def export_quine_scripts(
    *,
    output: QuineOutput,
    directory: Path,
    stem: str | None = None,
) -> tuple[Path, Path]:
    """Escribe `<stem>.one_line.py` y `<stem>.multi_line.py`."""

    directory.mkdir(parents=True, exist_ok=True)
    stem = stem or sanitize_for_filename(output.original)

    one_line_path = directory / f"{stem}.one_line.py"
    multi_line_path = directory / f"{stem}.multi_line.py"
    one_line_path.write_bytes(output.one_line.encode("utf-8"))
    multi_line_path.write_bytes(output.multi_line.encode("utf-8"))
    return one_line_path, multi_line_path
