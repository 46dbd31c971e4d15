"""Escape strategies and target models.

Both enums live in the domain layer so the CLI, the services and the
exporters share a single source of truth for the accepted values, the same
way `Language` does for user-facing output.
"""

from __future__ import annotations

from enum import Enum

from core.domain.errors import UnsupportedStrategyError, UnsupportedTargetError


class EscapeStrategy(str, Enum):
    """How the input is rendered inside the data region string literal."""

    STANDARD = "standard"
    UNICODE = "unicode"
    HEX = "hex"
    RAW = "raw"

    @classmethod
    def default(cls) -> "EscapeStrategy":
        return cls.STANDARD

    @classmethod
    def parse(cls, value: "str | EscapeStrategy") -> "EscapeStrategy":
        """Parse a user/bridge supplied name (case-insensitive)."""

        if isinstance(value, EscapeStrategy):
            return value
        key = str(value).strip().lower()
        if key == "hexadecimal":
            key = "hex"
        for member in cls:
            if member.value == key:
                return member
        raise UnsupportedStrategyError(str(value))

    def label(self) -> str:
        return self.name.capitalize()


class TargetModel(str, Enum):
    """Execution model the generated artifacts are meant to run under."""

    PYTHON_SCRIPT = "python-script"
    PYTHON_EXEC = "python-exec"

    @classmethod
    def default(cls) -> "TargetModel":
        return cls.PYTHON_SCRIPT

    @classmethod
    def parse(cls, value: "str | TargetModel") -> "TargetModel":
        if isinstance(value, TargetModel):
            return value
        key = str(value).strip().lower().replace("_", "-")
        for member in cls:
            if member.value == key:
                return member
        raise UnsupportedTargetError(str(value))

    @property
    def self_inspecting(self) -> bool:
        """True when a program can read its own source text at run time."""

        return self is TargetModel.PYTHON_SCRIPT

    def label(self) -> str:
        if self is TargetModel.PYTHON_SCRIPT:
            return "Python script (self-inspection)"
        return "Python exec (formatting)"
