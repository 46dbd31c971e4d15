"""Shared fixtures: isolated settings and the sample inputs used across layers."""
from __future__ import annotations

import os

import pytest

from core.config import AppSettings
from core.domain.strategy import EscapeStrategy


# Inputs that exercise every escape rule at least once.
SAMPLES = [
    "hello",
    'He said "hi"\nand left\\',
    "tab\tcarriage\rnul\x00del\x7fbell\x07",
    "emoji 😀 café ☕ ñ",
    "% formats %s %% %c",
    'm="" looks like the marker',
    "   ",
    "\\",
    '"',
]

# Subset that raw can embed (no quote, backslash or control other than tab).
RAW_SAFE_SAMPLES = [
    "hello",
    "tab\tseparated\tvalues",
    "emoji 😀 café ☕ ñ",
    "% formats %s %% %c",
    "single 'quotes' and #hashes",
]


def samples_for(strategy: EscapeStrategy) -> list[str]:
    return RAW_SAFE_SAMPLES if strategy is EscapeStrategy.RAW else SAMPLES


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("PSYCHOQUINE_"):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)
