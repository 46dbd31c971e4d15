"""CLI principal (Typer).

Por qué una CLI delgada:
- Toda la lógica vive en `core.services`; aquí solo se lee el input, se llama
  al borde `generate_quine` y se presenta la respuesta.
- Los quines salen por stdout sin decorar (para poder redirigirlos); banner,
  títulos, stats y verificación salen por stderr.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from adapters.json_exporter import export_output_json, response_to_json
from adapters.report_exporter import export_output_html
from adapters.script_exporter import export_quine_scripts
from cli.doctor import app as doctor_app
from cli.ui_components import (
    build_error_panel,
    build_stats_table,
    build_verification_table,
    print_banner,
    print_heading,
)
from core.config import AppSettings
from core.domain.errors import GenerationError
from core.domain.models import GenerateOptions
from core.domain.strategy import EscapeStrategy, TargetModel
from core.logging import set_level
from core.services import escape_codec
from core.services.quine_pipeline import generate_quine
from core.services.verifier import verify_file, verify_output

__version__ = "0.1.0"

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="PsychoQuine: turn any text into programs that print themselves.",
)
app.add_typer(doctor_app, name="doctor")

_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"PsychoQuine {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version information and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    if verbose:
        set_level("DEBUG")


def _read_input(text: Optional[str], file: Optional[Path]) -> str:
    if text is not None and file is not None:
        raise typer.BadParameter("pass either TEXT or --file, not both")
    if text is not None:
        return text
    if file is not None:
        try:
            return file.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise typer.BadParameter(f"cannot read {file}: {exc}") from exc
    if sys.stdin.isatty():
        raise typer.BadParameter("no input: pass TEXT, --file or pipe text on stdin")
    return sys.stdin.read()


def _emit(text: str, *, separate: bool) -> None:
    # Exact bytes when redirected; a newline only to keep terminals tidy.
    newline = not text.endswith("\n") and (separate or sys.stdout.isatty())
    typer.echo(text, nl=newline)


@app.command()
def generate(
    text: Optional[str] = typer.Argument(None, help="Input text (default: stdin)."),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read the input from a UTF-8 file."),
    escape: Optional[str] = typer.Option(
        None, "--escape", "-e", help="Escape strategy: standard, unicode, hex, raw."
    ),
    target: Optional[str] = typer.Option(
        None, "--target", "-t", help="Target model: python-script, python-exec."
    ),
    one_line: bool = typer.Option(False, "--one-line", "-o", help="Output only the one-line quine."),
    multi_line: bool = typer.Option(False, "--multi-line", "-m", help="Output only the multi-line quine."),
    show_stats: bool = typer.Option(False, "--stats", "-s", help="Show generation statistics."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress banner and decorations."),
    verify: bool = typer.Option(False, "--verify", help="Run both quines and check the fixed point."),
    as_json: bool = typer.Option(False, "--json", help="Print the boundary JSON response instead."),
    export_json: Optional[Path] = typer.Option(None, "--export-json", help="Write the result as JSON."),
    export_html: Optional[Path] = typer.Option(None, "--export-html", help="Write an HTML report."),
    save_dir: Optional[Path] = typer.Option(None, "--save-dir", help="Save both quines as .py files."),
    save: bool = typer.Option(False, "--save", help="Save both quines under the configured output_dir."),
) -> None:
    """Generate a one-line and a multi-line quine embedding TEXT."""

    settings = AppSettings()
    source = _read_input(text, file)
    response = generate_quine(
        source,
        GenerateOptions(escape_strategy=escape, target=target),
        settings=settings,
    )

    if as_json:
        typer.echo(response_to_json(response), nl=False)
        if not response.success:
            raise typer.Exit(code=1)
    if not response.success or response.data is None:
        _console.print(build_error_panel(response.error or "generation failed", response.error_kind))
        raise typer.Exit(code=1)

    output = response.data
    decorate = not quiet and not as_json
    if not as_json:
        if decorate:
            print_banner(_console)
        both = one_line == multi_line
        if one_line or both:
            if decorate:
                print_heading(_console, "ONE-LINE QUINE")
            _emit(output.one_line, separate=both)
        if multi_line or both:
            if decorate:
                print_heading(_console, "MULTI-LINE QUINE")
            _emit(output.multi_line, separate=False)

    if show_stats:
        _console.print(build_stats_table(output.stats))

    results = None
    if verify:
        results = verify_output(output, timeout=settings.verify_timeout_seconds)
        _console.print(build_verification_table(results))

    if export_json is not None:
        path = export_output_json(output=output, output_path=export_json)
        _console.print(f"[green]JSON saved to:[/green] {path}")
    if export_html is not None:
        path = export_output_html(output=output, output_path=export_html, verification=results)
        _console.print(f"[green]HTML report saved to:[/green] {path}")
    if save_dir is None and save:
        save_dir = settings.output_dir
    if save_dir is not None:
        paths = export_quine_scripts(output=output, directory=save_dir)
        for path in paths:
            _console.print(f"[green]Saved:[/green] {path}")

    if results is not None and not all(r.passed for r in results):
        raise typer.Exit(code=1)


def _parse_strategy(value: str) -> EscapeStrategy:
    try:
        return EscapeStrategy.parse(value)
    except GenerationError as exc:
        raise typer.BadParameter(exc.message) from exc


@app.command(name="escape")
def escape_command(
    text: str = typer.Argument(..., help="Text to encode."),
    strategy: str = typer.Option("standard", "--escape", "-e", help="Escape strategy."),
) -> None:
    """Print the data-region fragment for TEXT."""

    try:
        fragment = escape_codec.encode(text, _parse_strategy(strategy))
    except GenerationError as exc:
        _console.print(build_error_panel(exc.message, exc.kind))
        raise typer.Exit(code=1)
    typer.echo(fragment)


@app.command(name="unescape")
def unescape_command(
    fragment: str = typer.Argument(..., help="Fragment produced by `escape`."),
    strategy: str = typer.Option("standard", "--escape", "-e", help="Escape strategy."),
) -> None:
    """Decode a fragment back to the original text."""

    try:
        decoded = escape_codec.decode(fragment, _parse_strategy(strategy))
    except escape_codec.EscapeDecodeError as exc:
        _console.print(build_error_panel(str(exc), "EscapeDecodeError"))
        raise typer.Exit(code=1)
    typer.echo(decoded, nl=False)


@app.command(name="verify")
def verify_command(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Saved quine to check."),
    target: Optional[str] = typer.Option(
        None, "--target", "-t", help="Target model (default: configured default_target)."
    ),
) -> None:
    """Run a saved artifact and check that it prints itself."""

    settings = AppSettings()
    try:
        target_model = TargetModel.parse(target) if target is not None else settings.default_target
    except GenerationError as exc:
        raise typer.BadParameter(exc.message) from exc

    result = verify_file(path, target=target_model, timeout=settings.verify_timeout_seconds)
    _console.print(build_verification_table([result]))
    if not result.passed:
        raise typer.Exit(code=1)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
