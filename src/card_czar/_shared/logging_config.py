# Area: Shared
# PRD: docs/prd-engine.md
"""
card_czar._shared.logging_config — Package logging
==================================================

All card_czar modules log under the ``card_czar`` logger tree
(``card_czar.engine``, ``card_czar.agent``, ``card_czar.cards.*``).
``setup_logging`` attaches two handlers to that tree:

  - terminal: colored level names, one line per record
  - file:     one JSON object per line, for replaying a game afterwards

While event mode is on, the terminal handler is muted and the CLI shows
only EventPrinter lines. The JSON file keeps everything either way.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

PACKAGE_LOGGER = "card_czar"
TERMINAL_FORMAT = "%(asctime)s │ %(levelname)s │ %(name)s │ %(message)s"
TERMINAL_DATEFMT = "%H:%M:%S"

_event_mode_enabled = False


class EventModeFilter(logging.Filter):
    """Drops terminal records while the CLI is printing game events."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not _event_mode_enabled


class TerminalFormatter(logging.Formatter):
    """Formatter that colors the level name."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # The file handler formats the same record; color a copy
        colored = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


class JSONFormatter(logging.Formatter):
    """One JSON object per record: time, level, logger, message, traceback."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _terminal_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(TerminalFormatter(fmt=TERMINAL_FORMAT, datefmt=TERMINAL_DATEFMT))
    handler.addFilter(EventModeFilter())
    return handler


def _json_file_handler(log_file_path: str, level: int) -> logging.Handler:
    """Raises OSError if the file cannot be opened."""
    path = Path(log_file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(
    log_file_path: str = "card_czar.log",
    level: int = logging.INFO,
) -> None:
    """
    Attach the terminal and JSON file handlers to the package logger.

    Safe to call again: earlier handlers are replaced, not stacked. If the
    log file cannot be opened, terminal logging still works and a warning
    says why.

    Args:
        log_file_path: JSON-lines log file (parent dirs are created)
        level: Level for the logger and both handlers
    """
    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    pkg_logger.setLevel(level)
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()

    pkg_logger.addHandler(_terminal_handler(level))
    try:
        pkg_logger.addHandler(_json_file_handler(log_file_path, level))
    except OSError as e:
        pkg_logger.warning(f"Logging to terminal only, cannot open {log_file_path}: {e}")

    # Host applications keep their own root configuration
    pkg_logger.propagate = False


def enable_event_mode() -> None:
    """Mute terminal logging while game events are printed."""
    global _event_mode_enabled
    _event_mode_enabled = True


def disable_event_mode() -> None:
    global _event_mode_enabled
    _event_mode_enabled = False


def is_event_mode_enabled() -> bool:
    return _event_mode_enabled
