# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Structured JSON logger for sbpack.

Every log entry is a single JSON line: timestamped, leveled, and tagged with
the source module.

How this works:
  - We use Python's standard `logging` module under the hood, but replace the
    default formatter with JsonFormatter, which serializes every log record
    into a single JSON line.
  - Log lines go to stderr. Stdout belongs to the command result (the archive
    path), and scripts read it with `$(package-release)`.
  - The factory function `get_logger` is the only way to create loggers.

The JSON structure looks like:
  {"ts": "2026-...", "level": "INFO", "module": "sbpack.release.staging", "msg": "staged artifact", ...}
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

# LogRecord attributes that never belong in the JSON payload.
_STANDARD_ATTRS: frozenset[str] = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "relativeCreated",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "pathname",
        "filename",
        "module",
        "levelno",
        "levelname",
        "processName",
        "process",
        "threadName",
        "thread",
        "message",
        "msecs",
        "taskName",
    }
)


class JsonFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON objects.

    Each log entry contains four mandatory fields:
      ts     — ISO 8601 UTC timestamp
      level  — log level name
      module — the logger name (usually the Python module path)
      msg    — the formatted message string

    Fields passed through `extra` are merged into the object. When the call
    carries exc_info, the formatted traceback lands under "exc".
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                entry[key] = value

        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _resolve_log_level(level_name: str) -> int:
    """Turn a level name string into the corresponding logging constant."""
    upper = level_name.upper()
    if upper not in _VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level '{level_name}'. Must be one of: {', '.join(sorted(_VALID_LOG_LEVELS))}"
        )
    return getattr(logging, upper)


def _attach_file_handler(logger: logging.Logger, log_file: Path, level: int) -> None:
    """Add a JSON file handler for `log_file` unless the logger already has one."""
    target = os.path.abspath(str(log_file))
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            handler.setLevel(level)
            return

    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(target, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(JsonFormatter())
    logger.addHandler(file_handler)


def get_logger(
    name: str,
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Create a structured JSON logger.

    Every module calls this once at the top and uses the returned instance.
    Calling it again for an existing name updates the level and adds the
    file handler if `log_file` is new.

    Args:
        name: Logger name, typically __name__ of the calling module.
        log_level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL.
        log_file: Optional path to a log file. If provided, logs go to both
                  stderr and the file.

    Returns:
        A configured logging.Logger that outputs structured JSON.
    """
    logger = logging.getLogger(name)
    level = _resolve_log_level(log_level)
    logger.setLevel(level)

    # Avoid stacking handlers if get_logger is called multiple times for the
    # same name (happens in tests).
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
    else:
        stderr_handler = logging.StreamHandler(stream=sys.stderr)
        stderr_handler.setLevel(level)
        stderr_handler.setFormatter(JsonFormatter())
        logger.addHandler(stderr_handler)
        logger.propagate = False

    if log_file is not None:
        _attach_file_handler(logger, log_file, level)

    return logger


def set_package_log_level(log_level: str, log_file: Optional[Path] = None) -> None:
    """
    Apply a log level, and optionally a log file, to every sbpack logger
    created so far.

    Module-level loggers are created at import time with the default level
    and a stderr handler only. The CLI calls this once the user's
    --log-level and the config's log_file are known.
    """
    level = _resolve_log_level(log_level)
    for name in list(logging.Logger.manager.loggerDict):
        if name == "sbpack" or name.startswith("sbpack."):
            logger = logging.getLogger(name)
            logger.setLevel(level)
            for handler in logger.handlers:
                handler.setLevel(level)
            if log_file is not None and logger.handlers:
                _attach_file_handler(logger, log_file, level)
