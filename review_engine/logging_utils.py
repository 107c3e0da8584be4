"""
Logging helpers.

Structured JSON logs on stdout by default; set LOG_FORMAT=text for plain
lines. LOG_LEVEL controls verbosity (default WARNING, so the engine is
quiet unless asked).

Only the package root logger ("review_engine") owns a handler. Module
loggers are its children and carry none, so each record is written once.
"""

from __future__ import annotations

import logging
import os
import sys

from pythonjsonlogger.json import JsonFormatter


DEFAULT_LOGGER_NAME = "review_engine"


def _configure_root_logger() -> logging.Logger:
    root = logging.getLogger(DEFAULT_LOGGER_NAME)
    if root.handlers:
        return root

    log_level = os.getenv("LOG_LEVEL", "WARNING")
    log_format = os.getenv("LOG_FORMAT", "json")

    root.setLevel(log_level.upper())

    handler = logging.StreamHandler(sys.stdout)
    if log_format == "json":
        fmt = JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    else:
        fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    handler.setFormatter(fmt)
    root.addHandler(handler)

    # The host application's root handlers would print the same record again
    root.propagate = False

    return root


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """
    Get a package logger.

    Names outside the package are nested under it so they share the
    single handler.
    """
    root = _configure_root_logger()
    if name == DEFAULT_LOGGER_NAME:
        return root
    if not name.startswith(DEFAULT_LOGGER_NAME + "."):
        name = f"{DEFAULT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
