# Area: Shared
# PRD: docs/prd-engine.md
"""
Shared utilities used by the engine and the CLI.

This package contains:
- Logging configuration (colored terminal + JSON file)
- Event printer for the terminal game view
"""

from .logging_config import (
    setup_logging,
    enable_event_mode,
    disable_event_mode,
    is_event_mode_enabled,
    TerminalFormatter,
    JSONFormatter,
)

__all__ = [
    "setup_logging",
    "enable_event_mode",
    "disable_event_mode",
    "is_event_mode_enabled",
    "TerminalFormatter",
    "JSONFormatter",
]
