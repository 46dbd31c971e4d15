"""Quine generation orchestration.

This module is the public entry point of the engine. It validates the input,
encodes it, assembles both layouts and computes the statistics, in that
order, stopping at the first error. Two levels are exposed:

- `QuineGenerator.generate` raises a `GenerationError` subclass, for Python
  callers that prefer exceptions.
- `generate_quine` is the request/response boundary used by the CLI and any
  bridge: it never raises and always returns a `GenerateResponse`.

No state survives a call: every request builds its own fragment, artifacts
and stats, so concurrent callers need no locking.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import ValidationError

from core.config import AppSettings
from core.domain.errors import (
    EmptyInputError,
    GenerationError,
    InputTooLargeError,
    InvalidUtf8Error,
)
from core.domain.models import GenerateOptions, GenerateResponse, QuineOutput, QuineRequest
from core.domain.strategy import EscapeStrategy, TargetModel
from core.logging import get_logger
from core.services.escape_codec import encode
from core.services.stats import compute_stats
from core.services.template_engine import build_layouts, construction_for, Layout


_log = get_logger("psychoquine.generator")


def _validate_input(text: str, *, max_bytes: int) -> None:
    if text == "":
        raise EmptyInputError()
    try:
        size = len(text.encode("utf-8"))
    except UnicodeEncodeError as exc:
        raise InvalidUtf8Error(exc.start) from exc
    if size > max_bytes:
        raise InputTooLargeError(max_bytes, size)


@dataclass(frozen=True)
class QuineGenerator:
    """Engine configured once (indent, size limit) and reused across calls."""

    indent: str = "    "
    max_input_bytes: int = 10 * 1024 * 1024

    def __post_init__(self) -> None:
        # Fails fast on a bad indent instead of on the first request.
        Layout.multi_line(self.indent)

    @classmethod
    def from_settings(cls, settings: AppSettings | None = None) -> "QuineGenerator":
        settings = settings or AppSettings()
        return cls(indent=settings.indent, max_input_bytes=settings.max_input_bytes)

    def generate(self, request: QuineRequest) -> QuineOutput:
        _log.debug(
            "generate strategy=%s target=%s chars=%d",
            request.strategy.value,
            request.target.value,
            len(request.input),
        )
        _validate_input(request.input, max_bytes=self.max_input_bytes)

        fragment = encode(request.input, request.strategy)
        construction = construction_for(request.target)
        one_line, multi_line = build_layouts(fragment, construction, indent=self.indent)
        stats = compute_stats(original=request.input, one_line=one_line, multi_line=multi_line)

        return QuineOutput(
            original=request.input,
            one_line=one_line,
            multi_line=multi_line,
            escape_strategy=request.strategy,
            target=request.target,
            stats=stats,
        )

    def generate_one_line(self, request: QuineRequest) -> str:
        return self.generate(request).one_line

    def generate_multi_line(self, request: QuineRequest) -> str:
        return self.generate(request).multi_line


def generate(
    text: str,
    strategy: EscapeStrategy | str = EscapeStrategy.STANDARD,
    target: TargetModel | str = TargetModel.PYTHON_SCRIPT,
) -> QuineOutput:
    """Convenience wrapper with default engine options."""

    request = QuineRequest(
        input=text,
        strategy=EscapeStrategy.parse(strategy),
        target=TargetModel.parse(target),
    )
    return QuineGenerator().generate(request)


def _failure(exc: GenerationError) -> GenerateResponse:
    return GenerateResponse(success=False, error=exc.message, error_kind=exc.kind)


def generate_quine(
    input: str,
    options: GenerateOptions | dict | None = None,
    *,
    settings: AppSettings | None = None,
) -> GenerateResponse:
    """Request/response boundary: `{input, options}` -> `GenerateResponse`."""

    settings = settings or AppSettings()

    try:
        if isinstance(options, dict):
            options = GenerateOptions.model_validate(options)
        options = options or GenerateOptions()
        strategy = (
            EscapeStrategy.parse(options.escape_strategy)
            if options.escape_strategy is not None
            else settings.default_strategy
        )
        target = (
            TargetModel.parse(options.target)
            if options.target is not None
            else settings.default_target
        )
        generator = QuineGenerator(
            indent=options.indent if options.indent is not None else settings.indent,
            max_input_bytes=settings.max_input_bytes,
        )
        output = generator.generate(QuineRequest(input=input, strategy=strategy, target=target))
    except GenerationError as exc:
        _log.info("generation failed: %s (%s)", exc.kind, exc.message)
        return _failure(exc)
    except ValidationError as exc:
        _log.info("generation rejected options payload: %d error(s)", exc.error_count())
        return GenerateResponse(success=False, error=str(exc), error_kind="InvalidOptions")
    except ValueError as exc:
        # Invalid indent coming from the options payload.
        _log.info("generation rejected options: %s", exc)
        return GenerateResponse(success=False, error=str(exc), error_kind="InvalidOptions")
    except Exception as exc:  # pragma: no cover - engine bug, reported as a value
        _log.exception("internal error during generation")
        return GenerateResponse(success=False, error=str(exc) or repr(exc), error_kind="InternalError")

    return GenerateResponse(success=True, data=output)
