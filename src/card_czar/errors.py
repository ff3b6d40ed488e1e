# Area: Shared
# PRD: docs/prd-engine.md
"""
card_czar.errors — Custom exception classes
===========================================

Defines the exception hierarchy for the round engine.

Four kinds are distinguished by callers:

- InvalidStateError       operation not legal in the game's current status
- InvalidSelectionError   wrong seat, wrong count, unknown card id or index
- AgentUnavailableError   reasoning backend timeout/error (never raised
                          out of the engine, only attached as a warning)
- ConfigurationError      pack or seating cannot seed a round
"""

from __future__ import annotations
from typing import Any, Dict, Optional
import json


class CardCzarError(Exception):
    """Base exception for all card_czar errors."""

    code = "CARD_CZAR_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(f"[{self.code}] {message}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class InvalidStateError(CardCzarError):
    """Raised when an operation is not legal in the game's current status."""

    code = "INVALID_STATE"

    def __init__(self, operation: str, status: str, message: Optional[str] = None):
        self.operation = operation
        self.status = status
        super().__init__(
            message or f"Cannot {operation} while game is {status}",
            details={"operation": operation, "status": status},
        )


class InvalidSelectionError(CardCzarError):
    """Raised for a wrong seat, wrong card count, unknown card id or index."""

    code = "INVALID_SELECTION"

    def __init__(self, message: str, player_id: Optional[str] = None, **details: Any):
        self.player_id = player_id
        if player_id is not None:
            details["player_id"] = player_id
        super().__init__(message, details=details)


class ConfigurationError(CardCzarError):
    """Raised when the pack or seating cannot seed a round."""

    code = "CONFIGURATION"


class AgentUnavailableError(CardCzarError):
    """
    Describes a failed reasoning backend call.

    The agent client never raises this; it is attached to the decision
    as a recoverable warning and the decision falls back to index 0.
    """

    code = "AGENT_UNAVAILABLE"

    def __init__(
        self,
        operation: str,
        backend: str,
        reason: str,
        raw_text: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ):
        self.operation = operation
        self.backend = backend
        self.reason = reason
        self.raw_text = raw_text
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Agent call '{operation}' on {backend} backend failed: {reason}",
            details={
                "operation": operation,
                "backend": backend,
                "reason": reason,
                "raw_text": raw_text,
                "timeout_seconds": timeout_seconds,
            },
        )

    def format_error_log(self) -> str:
        return _format_error_block(
            error_type=self.code,
            operation=self.operation,
            backend=self.backend,
            timeout_seconds=self.timeout_seconds,
            reason=self.reason,
            raw_text=self.raw_text,
        )


def _format_error_block(
    error_type: str,
    operation: str,
    backend: str,
    timeout_seconds: Optional[float],
    reason: str,
    raw_text: Optional[str],
) -> str:
    """Format a structured error block for the log file."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " AGENT CALL FAILED — FALLING BACK TO INDEX 0",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
        f" Operation:    {operation}",
        f" Backend:      {backend}",
    ]

    if timeout_seconds is not None:
        lines.append(f" Timeout:      {timeout_seconds} seconds")

    lines.append(f" Reason:       {reason}")

    if raw_text is not None:
        lines.append("")
        lines.append(" ── RAW REPLY " + "─" * 50)
        lines.append(_indent_json(raw_text))

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def _indent_json(data: Any, indent: int = 2) -> str:
    """Format a value as indented JSON for error logs."""
    formatted = json.dumps(data, indent=indent, default=str)
    return "\n".join(" " + line for line in formatted.split("\n"))
