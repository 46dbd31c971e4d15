"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que servicios y adaptadores (verificador, exportadores) lean la
  misma config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.strategy import EscapeStrategy, TargetModel


DEFAULT_MAX_INPUT_BYTES = 10 * 1024 * 1024


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "psychoquine"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "psychoquine"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "psychoquine"
    return Path.home() / ".config" / "psychoquine"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str]) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        try:
            existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))
        except OSError:
            existing = {}

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# PsychoQuine user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el motor.
    - Un único contrato de configuración para CLI/servicios/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="PSYCHOQUINE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    default_strategy: EscapeStrategy = Field(
        default=EscapeStrategy.STANDARD,
        description="Estrategia de escape cuando el request no indica ninguna.",
    )
    default_target: TargetModel = Field(
        default=TargetModel.PYTHON_SCRIPT,
        description="Modelo de ejecución cuando el request no indica ninguno.",
    )
    indent: str = Field(
        default="    ",
        min_length=1,
        max_length=16,
        description="Unidad de indentación del layout multilínea (espacios/tabs).",
    )
    max_input_bytes: int = Field(
        default=DEFAULT_MAX_INPUT_BYTES,
        gt=0,
        description="Tamaño máximo del input (bytes UTF-8).",
    )
    verify_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por ejecución del verificador (segundos).",
    )
    output_dir: Path = Field(
        default=Path("quines"),
        description="Directorio por defecto para scripts/reportes exportados.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )

    @field_validator("indent", mode="before")
    @classmethod
    def _indent_is_whitespace(cls, value: object) -> str:
        # Un número es un ancho en espacios (`PSYCHOQUINE_INDENT=2`).
        if isinstance(value, int) or (isinstance(value, str) and value.strip().isdigit()):
            value = " " * int(value)
        value = str(value)
        if not value or value.strip(" \t"):
            raise ValueError("indent must contain only spaces and tabs")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.strip().upper() or "WARNING"
