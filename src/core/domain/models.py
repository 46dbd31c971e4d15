"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta y documentación autocontenida (Field) sin acoplar el
  Core a la CLI ni a exportadores.
- `model_dump(mode="json")` produce exactamente la forma que espera cualquier
  llamador del borde (`original`, `one_line`, `multi_line`, `stats.*`).

Nota:
- Todos los modelos son inmutables (`frozen=True`): cada request produce un
  `QuineOutput` nuevo y nada se comparte entre llamadas.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

from core.domain.strategy import EscapeStrategy, TargetModel


class QuineRequest(BaseModel):
    """Petición de generación: texto arbitrario + estrategia de escape."""

    model_config = ConfigDict(frozen=True)

    input: str = Field(
        ...,
        description="Texto a embeber. El string vacío se rechaza en el orquestador.",
    )
    strategy: EscapeStrategy = Field(
        default=EscapeStrategy.STANDARD,
        description="Cómo se representa el input dentro del literal de datos.",
    )
    target: TargetModel = Field(
        default=TargetModel.PYTHON_SCRIPT,
        description="Modelo de ejecución de los artefactos (fija la construcción).",
    )


class QuineStats(BaseModel):
    """Métricas en bytes (UTF-8) de una generación.

    `expansion_ratio` se guarda sin redondear; el redondeo es cosa de la
    presentación.
    """

    model_config = ConfigDict(frozen=True)

    input_bytes: int = Field(..., ge=0, description="Tamaño del input en bytes.")
    one_line_bytes: int = Field(..., ge=0, description="Tamaño del quine de una línea.")
    multi_line_bytes: int = Field(..., ge=0, description="Tamaño del quine multilínea.")
    expansion_ratio: float = Field(
        ...,
        gt=0,
        description="one_line_bytes / input_bytes.",
    )


class QuineOutput(BaseModel):
    """Resultado completo de una generación.

    Invariante: `one_line` y `multi_line` son puntos fijos bajo `target`
    (ejecutarlos imprime exactamente su propio texto).
    """

    model_config = ConfigDict(frozen=True)

    original: str = Field(..., min_length=1, description="Copia intacta del input.")
    one_line: str = Field(..., min_length=1, description="Quine compacto (una línea).")
    multi_line: str = Field(..., min_length=1, description="Quine formateado (multilínea).")
    escape_strategy: EscapeStrategy = Field(..., description="Estrategia utilizada.")
    target: TargetModel = Field(
        default=TargetModel.PYTHON_SCRIPT,
        description="Modelo de ejecución para el que se construyeron los artefactos.",
    )
    stats: QuineStats


class GenerateOptions(BaseModel):
    """Opciones tal y como llegan del borde (strings sin validar)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    escape_strategy: str | None = Field(
        default=None,
        description="standard | unicode | hex | raw (None -> default de config).",
    )
    target: str | None = Field(
        default=None,
        description="python-script | python-exec (None -> default de config).",
    )
    indent: str | None = Field(
        default=None,
        description="Unidad de indentación del layout multilínea.",
    )


class GenerateResponse(BaseModel):
    """Respuesta del borde: `data` si hay éxito, `error` si no."""

    model_config = ConfigDict(frozen=True)

    success: bool
    data: QuineOutput | None = None
    error: str | None = None
    error_kind: str | None = None

    @model_validator(mode="after")
    def _check_exclusive(self) -> "GenerateResponse":
        if self.success and (self.data is None or self.error is not None):
            raise ValueError("a successful response carries data and no error")
        if not self.success and (self.data is not None or not self.error):
            raise ValueError("a failed response carries an error and no data")
        return self

    def to_payload(self) -> dict:
        """Forma serializable del borde (omite las claves ausentes)."""

        return self.model_dump(mode="json", exclude_none=True)


class VerificationResult(BaseModel):
    """Resultado de ejecutar un artefacto y comparar su salida consigo mismo."""

    model_config = ConfigDict(frozen=True)

    layout: str = Field(..., description="one_line | multi_line | file")
    target: TargetModel
    passed: bool
    expected: str
    actual: str = ""
    returncode: int | None = None
    stderr: str = ""

    @property
    def detail(self) -> str:
        if self.passed:
            return "fixed point"
        if self.returncode is None:
            return self.stderr or "not executed"
        if self.returncode != 0:
            last = self.stderr.strip().splitlines()[-1:] or [""]
            return f"exit {self.returncode}: {last[0]}"
        return f"output differs ({len(self.actual)} vs {len(self.expected)} chars)"
