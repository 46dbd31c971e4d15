"""Self-reference verification.

Runs an artifact under its target model and compares what it prints with its
own text. The fixed point holds by construction; this module is what the
tests, `doctor` and `generate --verify` use to prove it on real inputs.
"""

from __future__ import annotations

from pathlib import Path

from adapters.python_runner import RunResult, run_program, run_script_file
from core.config import AppSettings
from core.domain.models import QuineOutput, VerificationResult
from core.domain.strategy import TargetModel
from core.logging import get_logger


_log = get_logger("psychoquine.verifier")


def _to_result(run: RunResult, *, expected: str, layout: str, target: TargetModel) -> VerificationResult:
    passed = run.returncode == 0 and run.stdout == expected
    if not passed:
        _log.info("fixed point check failed for %s/%s (exit=%s)", target.value, layout, run.returncode)
    return VerificationResult(
        layout=layout,
        target=target,
        passed=passed,
        expected=expected,
        actual=run.stdout,
        returncode=run.returncode,
        stderr=run.error or run.stderr,
    )


def verify_program(
    text: str,
    *,
    target: TargetModel = TargetModel.PYTHON_SCRIPT,
    layout: str = "program",
    timeout: float | None = None,
) -> VerificationResult:
    """Run `text` and report whether its output equals `text`."""

    timeout = timeout if timeout is not None else AppSettings().verify_timeout_seconds
    target = TargetModel.parse(target)
    run = run_program(text, target=target, timeout=timeout)
    return _to_result(run, expected=text, layout=layout, target=target)


def verify_output(output: QuineOutput, *, timeout: float | None = None) -> list[VerificationResult]:
    """Check both layouts of a generation."""

    return [
        verify_program(output.one_line, target=output.target, layout="one_line", timeout=timeout),
        verify_program(output.multi_line, target=output.target, layout="multi_line", timeout=timeout),
    ]


def verify_file(
    path: Path,
    *,
    target: TargetModel = TargetModel.PYTHON_SCRIPT,
    timeout: float | None = None,
) -> VerificationResult:
    """Check an artifact already saved on disk (byte-exact UTF-8 text)."""

    timeout = timeout if timeout is not None else AppSettings().verify_timeout_seconds
    target = TargetModel.parse(target)
    text = Path(path).read_bytes().decode("utf-8")
    if target.self_inspecting:
        run = run_script_file(Path(path), timeout=timeout)
    else:
        run = run_program(text, target=target, timeout=timeout)
    return _to_result(run, expected=text, layout="file", target=target)
