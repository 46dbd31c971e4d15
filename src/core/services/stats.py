"""Byte-length statistics for a generation."""

from __future__ import annotations

from core.domain.errors import EmptyInputError
from core.domain.models import QuineStats


def byte_length(text: str) -> int:
    return len(text.encode("utf-8"))


def compute_stats(*, original: str, one_line: str, multi_line: str) -> QuineStats:
    input_bytes = byte_length(original)
    if input_bytes == 0:
        # The ratio is undefined; the orchestrator rejects empty input first.
        raise EmptyInputError()

    one_line_bytes = byte_length(one_line)
    return QuineStats(
        input_bytes=input_bytes,
        one_line_bytes=one_line_bytes,
        multi_line_bytes=byte_length(multi_line),
        expansion_ratio=one_line_bytes / input_bytes,
    )
