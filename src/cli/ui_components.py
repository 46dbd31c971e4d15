"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `generate`, `verify` y `doctor`.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import QuineStats, VerificationResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Se desactiva con `--quiet` o `--json` (modos no interactivos/pipelines).
    """

    title = Text("PSYCHOQUINE", style="bold green")
    subtitle = Text("Universal Quine Generator • Escape • Self-reference", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="green", padding=(1, 4)))


def print_heading(console: Console, label: str) -> None:
    console.print(Text(f"═══ {label} ═══", style="bold green"))


def build_stats_table(stats: QuineStats) -> Table:
    """Tabla de estadísticas; el ratio se redondea solo aquí."""

    table = Table(title="Statistics", show_header=False)
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", style="white", justify="right")
    table.add_row("Input size", f"{stats.input_bytes} bytes")
    table.add_row("One-line size", f"{stats.one_line_bytes} bytes")
    table.add_row("Multi-line size", f"{stats.multi_line_bytes} bytes")
    table.add_row("Expansion ratio", f"{stats.expansion_ratio:.2f}x")
    return table


def build_verification_table(results: Iterable[VerificationResult]) -> Table:
    table = Table(title="Fixed-point verification")
    table.add_column("Layout", style="cyan", no_wrap=True)
    table.add_column("Target", style="white")
    table.add_column("Result", no_wrap=True)
    table.add_column("Details", style="dim")
    for result in results:
        status = Text("PASS", style="bold green") if result.passed else Text("FAIL", style="bold red")
        table.add_row(result.layout, result.target.value, status, result.detail)
    return table


def build_error_panel(message: str, kind: str | None = None) -> Panel:
    title = Text(kind or "Error", style="bold red")
    return Panel(Text(message), title=title, border_style="red")
