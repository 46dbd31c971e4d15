"""Doctor command for environment diagnostics."""

from __future__ import annotations

import sys

import typer
from rich.console import Console
from rich.table import Table

from adapters.report_exporter import render_output_html
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.errors import GenerationError
from core.domain.models import QuineRequest
from core.domain.strategy import EscapeStrategy, TargetModel
from core.services.quine_pipeline import QuineGenerator, generate
from core.services.verifier import verify_output

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

_SAMPLE = 'Hello, "quine"!\n\tcafé ☕ 100%'
_RAW_SAMPLE = "Hello, quine! café ☕ 100%"


def _self_test(
    generator: QuineGenerator, strategy: EscapeStrategy, target: TargetModel, timeout: float
) -> tuple[bool, str]:
    sample = _RAW_SAMPLE if strategy is EscapeStrategy.RAW else _SAMPLE
    try:
        output = generator.generate(QuineRequest(input=sample, strategy=strategy, target=target))
    except GenerationError as exc:
        return False, f"{exc.kind}: {exc.message}"
    results = verify_output(output, timeout=timeout)
    failed = [r for r in results if not r.passed]
    if failed:
        return False, "; ".join(f"{r.layout}: {r.detail}" for r in failed)
    return True, f"{output.stats.one_line_bytes}/{output.stats.multi_line_bytes} bytes"


def _check_report() -> tuple[bool, str]:
    """Render a minimal report to detect Jinja2/template issues."""

    try:
        html = render_output_html(output=generate("doctor"))
    except Exception as exc:
        return False, str(exc)
    return True, f"{len(html)} chars"


@app.command()
def run() -> None:
    """Run baseline diagnostics: interpreter, config and a fixed-point self-test."""

    settings = AppSettings()

    table = Table(title="PsychoQuine Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    version = ".".join(str(part) for part in sys.version_info[:3])
    table.add_row("Interpreter", "OK", f"{sys.executable} ({version})")

    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))
    table.add_row("Default strategy", "OK", settings.default_strategy.value)
    table.add_row("Default target", "OK", settings.default_target.value)
    table.add_row("Indent", "OK", repr(settings.indent))

    generator = QuineGenerator.from_settings(settings)
    all_ok = True
    for target in TargetModel:
        for strategy in EscapeStrategy:
            ok, detail = _self_test(generator, strategy, target, settings.verify_timeout_seconds)
            all_ok = all_ok and ok
            table.add_row(f"Self-test {target.value}/{strategy.value}", "OK" if ok else "FAIL", detail)

    ok_report, detail_report = _check_report()
    table.add_row("HTML report", "OK" if ok_report else "FAIL", detail_report)

    _console.print(table)

    if not all_ok:
        _console.print(
            "\n[yellow]Note:[/yellow] a failing self-test means the interpreter could not run the "
            "artifacts or printed something else; re-run with `--verbose` for details."
        )
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup of defaults (stored in the user config .env)."""

    settings = AppSettings()

    strategy = typer.prompt(
        "Default escape strategy (standard/unicode/hex/raw)",
        default=settings.default_strategy.value,
        show_default=True,
    ).strip()
    target = typer.prompt(
        "Default target (python-script/python-exec)",
        default=settings.default_target.value,
        show_default=True,
    ).strip()
    indent_width = typer.prompt("Indent width (spaces)", default=len(settings.indent), type=int)

    try:
        strategy_value = EscapeStrategy.parse(strategy).value
        target_value = TargetModel.parse(target).value
    except GenerationError as exc:
        raise typer.BadParameter(exc.message) from exc
    if not 1 <= indent_width <= 16:
        raise typer.BadParameter("indent width must be between 1 and 16")

    env_path = write_user_env_vars(
        {
            "PSYCHOQUINE_DEFAULT_STRATEGY": strategy_value,
            "PSYCHOQUINE_DEFAULT_TARGET": target_value,
            "PSYCHOQUINE_INDENT": str(indent_width),
        }
    )

    _console.print(f"[green]Saved defaults to:[/green] {env_path}")
