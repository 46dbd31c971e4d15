"""Errores de generación.

Por qué una jerarquía propia:
- El orquestador es el único que decide qué error ve el usuario; los
  componentes internos solo levantan un `GenerationError` tipado.
- Cada subclase expone un `kind` estable para el borde (JSON/bridge), de modo
  que el llamador puede distinguir errores sin parsear mensajes.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base de todos los errores que el motor reporta al llamador."""

    kind = "GenerationError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EmptyInputError(GenerationError):
    kind = "EmptyInput"

    def __init__(self) -> None:
        super().__init__("Input is empty")


class UnsupportedStrategyError(GenerationError):
    kind = "UnsupportedStrategy"

    def __init__(self, value: str) -> None:
        super().__init__(
            f"Unknown escape strategy: {value!r} (expected standard, unicode, hex or raw)"
        )
        self.value = value


class UnsupportedTargetError(GenerationError):
    kind = "UnsupportedTarget"

    def __init__(self, value: str) -> None:
        super().__init__(
            f"Unknown target model: {value!r} (expected python-script or python-exec)"
        )
        self.value = value


class UnsafeRawInputError(GenerationError):
    """Raw seleccionado y el input contiene un delimitador del template."""

    kind = "UnsafeRawInput"

    def __init__(self, character: str, position: int) -> None:
        super().__init__(
            f"Raw strategy cannot embed {character!r} (position {position}); "
            "use standard, unicode or hex instead"
        )
        self.character = character
        self.position = position


class MarkerNotFoundError(GenerationError):
    """Invariante interna rota: el marcador no delimita la región del motor.

    Nunca debería ocurrir; si aparece es un bug de construcción, no un
    problema del input.
    """

    kind = "MarkerNotFound"

    def __init__(self, marker: str, layout: str, occurrences: int) -> None:
        super().__init__(
            f"Self-location marker {marker!r} found {occurrences} time(s) in the "
            f"{layout} artifact; expected exactly once at the engine region start"
        )
        self.marker = marker
        self.layout = layout
        self.occurrences = occurrences


class InputTooLargeError(GenerationError):
    kind = "InputTooLarge"

    def __init__(self, max_bytes: int, actual: int) -> None:
        super().__init__(f"Input exceeds maximum size of {max_bytes} bytes (got {actual})")
        self.max_bytes = max_bytes
        self.actual = actual


class InvalidUtf8Error(GenerationError):
    kind = "InvalidUtf8"

    def __init__(self, position: int) -> None:
        super().__init__(
            f"Input contains a code point that cannot be encoded as UTF-8 (position {position})"
        )
        self.position = position
