# SPDX-FileCopyrightText: Copyright (C) ARDUINO SRL (http://www.arduino.cc)
#
# SPDX-License-Identifier: MPL-2.0

from __future__ import annotations

import logging
import os
import sys
import threading

__all__ = ["Logger"]

ROOT_LOGGER_NAME = "speech_demos"
DEFAULT_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_setup_lock = threading.Lock()
_configured = False


def _level_from_env() -> int:
    level = os.getenv("LOG_LEVEL", DEFAULT_LEVEL).strip().upper()
    resolved = logging.getLevelName(level)
    if isinstance(resolved, int):
        return resolved
    return logging.INFO


def _configure_root() -> None:
    global _configured
    with _setup_lock:
        if _configured:
            return
        root = logging.getLogger(ROOT_LOGGER_NAME)
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(_level_from_env())
        _configured = True


class Logger(logging.LoggerAdapter):
    """Named logger sharing the package console handler.

    The first instance attaches a stderr handler to the package root logger,
    with the level taken from the LOG_LEVEL environment variable.
    Records still propagate to the root logger.

    Args:
        name (str): Logger name, usually the module ``__name__``.
        level (int | str | None): Optional level override for this logger only.
    """

    def __init__(self, name: str, level: int | str | None = None):
        _configure_root()
        base = logging.getLogger(name)
        if level is not None:
            base.setLevel(level)
        super().__init__(base, {})