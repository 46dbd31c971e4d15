"""Logging helpers.

A lightweight singleton logger: one stream handler on stderr, attached only to
the `psychoquine` logger. Module loggers (`psychoquine.generator`, ...) carry
no level or handler of their own and propagate to it, so `set_level` reaches
every one of them. Generated artifacts go to stdout, so log lines never end up
inside a quine that is being piped somewhere.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from core.config import AppSettings

_LOCK = threading.Lock()
_PRIMARY: Optional[logging.Logger] = None
_ROOT_NAME = "psychoquine"


def _primary(settings: AppSettings | None = None) -> logging.Logger:
    global _PRIMARY
    if _PRIMARY is not None:
        return _PRIMARY
    with _LOCK:
        if _PRIMARY is not None:
            return _PRIMARY
        logger = logging.getLogger(_ROOT_NAME)
        level_name = (settings or AppSettings()).log_level
        logger.setLevel(getattr(logging, level_name, logging.WARNING))
        if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
            handler = logging.StreamHandler()
            handler.setFormatter(
                logging.Formatter("[psychoquine] %(asctime)s %(levelname)s %(name)s %(message)s")
            )
            logger.addHandler(handler)
        logger.propagate = False
        _PRIMARY = logger
        return logger


def get_logger(name: str = _ROOT_NAME, settings: AppSettings | None = None) -> logging.Logger:
    primary = _primary(settings)
    if name == _ROOT_NAME:
        return primary
    if not name.startswith(_ROOT_NAME + "."):
        name = f"{_ROOT_NAME}.{name}"
    # Children inherit level and handler from the primary logger.
    return logging.getLogger(name)


def set_level(level_name: str) -> None:
    """Ajusta el nivel del logger principal (p.ej. `--verbose` en la CLI)."""

    level = getattr(logging, level_name.strip().upper(), logging.WARNING)
    _primary().setLevel(level)


__all__ = ["get_logger", "set_level"]
