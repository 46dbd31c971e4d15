"""Tests for the psychoquine logger hierarchy."""
from __future__ import annotations

import logging

import pytest

from core.config import AppSettings
from core.logging import get_logger, set_level
from core.services.quine_pipeline import generate_quine

_SECRET = "s3cret-payload-do-not-log"


@pytest.fixture
def captured(caplog):
    primary = get_logger()
    primary.addHandler(caplog.handler)
    set_level("DEBUG")
    yield caplog
    set_level("WARNING")
    primary.removeHandler(caplog.handler)


def test_module_loggers_follow_the_primary_level():
    child = get_logger("psychoquine.generator")

    set_level("DEBUG")
    try:
        assert child.isEnabledFor(logging.DEBUG)
        assert not child.handlers
        assert child.propagate
    finally:
        set_level("WARNING")

    assert not child.isEnabledFor(logging.INFO)


def test_short_names_are_placed_under_the_primary_logger():
    assert get_logger("verifier").name == "psychoquine.verifier"


def test_input_text_is_never_logged(captured):
    settings = AppSettings(_env_file=None, max_input_bytes=64)

    generate_quine(_SECRET, settings=settings)
    generate_quine(f'{_SECRET} "quoted"', {"escape_strategy": "raw"}, settings=settings)
    generate_quine(_SECRET * 4, settings=settings)

    messages = [record.getMessage() for record in captured.records]
    assert any(message.startswith("generate strategy=") for message in messages)
    assert any("UnsafeRawInput" in message for message in messages)
    assert any("InputTooLarge" in message for message in messages)
    assert all(_SECRET not in message for message in messages)
