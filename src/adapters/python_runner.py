"""Wrapper de subprocess para ejecutar artefactos.

Por qué un wrapper:
- Estandariza intérprete, entorno (UTF-8 en stdout) y timeouts para que el
  verificador y el doctor se comporten igual.
- Facilita testeo: se puede sustituir por un stub.
"""

from __future__ import annotations

import os
import subprocess
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path

from core.domain.strategy import TargetModel


@dataclass(frozen=True)
class RunResult:
    stdout: str
    stderr: str
    returncode: int | None
    error: str | None = None


def _build_env() -> dict[str, str]:
    env = dict(os.environ)
    env["PYTHONIOENCODING"] = "utf-8"
    env["PYTHONUTF8"] = "1"
    env.pop("PYTHONSTARTUP", None)
    return env


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", "replace")


def _run(args: list[str], *, stdin: bytes | None, timeout: float, cwd: str | None = None) -> RunResult:
    try:
        completed = subprocess.run(
            args,
            input=stdin,
            capture_output=True,
            timeout=timeout,
            env=_build_env(),
            cwd=cwd,
        )
    except subprocess.TimeoutExpired:
        return RunResult(stdout="", stderr="", returncode=None, error=f"timed out after {timeout:g}s")
    except OSError as exc:
        return RunResult(stdout="", stderr="", returncode=None, error=str(exc))
    return RunResult(
        stdout=_decode(completed.stdout),
        stderr=_decode(completed.stderr),
        returncode=completed.returncode,
    )


def run_script_file(path: Path, *, timeout: float, interpreter: str | None = None) -> RunResult:
    """Ejecuta un fichero existente como script (`python path`)."""

    path = Path(path).resolve()
    return _run(
        [interpreter or sys.executable, str(path)],
        stdin=b"",
        timeout=timeout,
        cwd=str(path.parent),
    )


def run_program(
    source: str,
    *,
    target: TargetModel,
    timeout: float,
    interpreter: str | None = None,
) -> RunResult:
    """Ejecuta `source` bajo el modelo `target`.

    - python-script: se escribe en un fichero temporal y se ejecuta.
    - python-exec: se pasa por stdin (`python -`), sin `__file__`.
    """

    executable = interpreter or sys.executable
    payload = source.encode("utf-8")

    if TargetModel.parse(target).self_inspecting:
        with tempfile.TemporaryDirectory(prefix="psychoquine-") as tmp:
            script = Path(tmp) / "quine.py"
            script.write_bytes(payload)
            return run_script_file(script, timeout=timeout, interpreter=executable)

    return _run([executable, "-"], stdin=payload, timeout=timeout)
