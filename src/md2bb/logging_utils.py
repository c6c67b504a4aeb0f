#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Logging setup for the md2bb command line.

md2bb writes two kinds of lines to stderr:

- Diagnostics: the translation warnings sent through
  :class:`~md2bb.diagnostics.LoggingDiagnosticSink` to the
  ``md2bb.diagnostics`` logger. They are always shown, as
  ``[[WARN]] <message>``, whatever the log level or trace mode.
- Log records from every other logger, filtered by ``--log-level`` and
  formatted plainly or, with ``--trace``, with timestamps and logger names.

A log file, when given, receives both.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from md2bb.constants import DEFAULT_LOG_LEVEL

DIAGNOSTICS_LOGGER = "md2bb.diagnostics"

DIAGNOSTIC_FORMAT = "[[WARN]] %(message)s"
PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: int | str | None) -> int:
    """Turn a level name or number into a numeric level.

    Unknown names fall back to ``DEFAULT_LOG_LEVEL``.
    """
    if isinstance(log_level, int):
        return log_level
    default = getattr(logging, DEFAULT_LOG_LEVEL)
    if log_level is None:
        return default
    level = getattr(logging, str(log_level).upper(), None)
    return level if isinstance(level, int) else default


def _stderr_handler(formatter: logging.Formatter, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_logging(
    log_level: int | str | None = None,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install the stderr handlers and the optional file handler.

    Calling it again replaces the handlers installed by the previous call.

    Parameters
    ----------
    log_level : int | str | None
        Level for ordinary log records (e.g. ``"DEBUG"``). Diagnostics are
        not affected by it.
    log_file : str, optional
        File that receives a copy of log records and diagnostics
    trace_mode : bool, default False
        Add timestamps and logger names to ordinary log records

    Returns
    -------
    logging.Logger
        The configured root logger

    """
    level = resolve_log_level(log_level)
    log_formatter = (
        logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT) if trace_mode else logging.Formatter(PLAIN_FORMAT)
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(_stderr_handler(log_formatter, level))

    diagnostics_logger = logging.getLogger(DIAGNOSTICS_LOGGER)
    diagnostics_logger.setLevel(logging.WARNING)
    diagnostics_logger.handlers.clear()
    diagnostics_logger.propagate = False
    diagnostics_logger.addHandler(_stderr_handler(logging.Formatter(DIAGNOSTIC_FORMAT), logging.WARNING))

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            # Log files always use the trace format
            file_handler.setFormatter(logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT))
            file_handler.setLevel(min(level, logging.WARNING))
            root_logger.addHandler(file_handler)
            diagnostics_logger.addHandler(file_handler)
            root_logger.info("Logging to file: %s", log_file)

    return root_logger
