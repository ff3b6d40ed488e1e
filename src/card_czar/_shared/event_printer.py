# Area: Shared
# PRD: docs/prd-engine.md
"""
card_czar._shared.event_printer — Game event terminal output
============================================================

Renders game events as colored one-line records, one per event, with the
game id, round and a short description. Subscribe ``EventPrinter.print_event``
to a session's event log.
"""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Any, Callable, Dict, Optional, TextIO

from .._engine.enums import EventType
from .._engine.events import GameEvent

# ══════════════════════════════════════════════════════════════
# ANSI COLOR CODES
# ══════════════════════════════════════════════════════════════

GREEN = "\033[32m"         # Round flow
ORANGE = "\033[38;5;208m"  # Agent warnings
CYAN = "\033[36m"          # Lobby
MAGENTA = "\033[35m"       # Winners
RED = "\033[31m"           # Errors
RESET = "\033[0m"

EVENT_COLORS = {
    EventType.PLAYER_JOINED: CYAN,
    EventType.ROUND_STARTED: GREEN,
    EventType.SUBMISSION_RECEIVED: GREEN,
    EventType.JUDGING_STARTED: GREEN,
    EventType.WINNER_SELECTED: MAGENTA,
    EventType.GAME_OVER: MAGENTA,
}

EVENT_DISPLAY_NAMES = {
    EventType.PLAYER_JOINED: "JOINED",
    EventType.ROUND_STARTED: "ROUND-START",
    EventType.SUBMISSION_RECEIVED: "SUBMITTED",
    EventType.JUDGING_STARTED: "JUDGING",
    EventType.WINNER_SELECTED: "ROUND-WINNER",
    EventType.GAME_OVER: "GAME-OVER",
}


def _cards_text(cards) -> str:
    return " + ".join(card["text"] for card in cards)


def _describe_joined(p: Dict[str, Any]) -> str:
    kind = f"bot/{p['persona_id']}" if p["is_bot"] else "human"
    return f"{p['name']} ({p['player_id']}, {kind}) took seat {p['seat']}"


def _describe_round(p: Dict[str, Any]) -> str:
    return f"czar={p['czar_id']} | \"{p['prompt_card']['text']}\" (pick {p['prompt_card']['pick']})"


def _describe_submission(p: Dict[str, Any]) -> str:
    return f"{p['player_id']} ({p['submitted_count']}/{p['required_count']})"


def _describe_judging(p: Dict[str, Any]) -> str:
    options = " | ".join(f"{e['index']}: {_cards_text(e['cards'])}" for e in p["table"])
    return f"czar={p['czar_id']} | {options}"


def _describe_winner(p: Dict[str, Any]) -> str:
    return (
        f"{p['winner_name']} wins with \"{_cards_text(p['winning_cards'])}\" "
        f"(score {p['round_score']})"
    )


def _describe_game_over(p: Dict[str, Any]) -> str:
    scores = ", ".join(f"{pid}={score}" for pid, score in p["final_scores"].items())
    return f"{p['winner_name']} wins after {p['rounds_played']} rounds | {scores}"


DESCRIBERS: Dict[EventType, Callable[[Dict[str, Any]], str]] = {
    EventType.PLAYER_JOINED: _describe_joined,
    EventType.ROUND_STARTED: _describe_round,
    EventType.SUBMISSION_RECEIVED: _describe_submission,
    EventType.JUDGING_STARTED: _describe_judging,
    EventType.WINNER_SELECTED: _describe_winner,
    EventType.GAME_OVER: _describe_game_over,
}


class EventPrinter:
    """Prints game events and agent warnings to a terminal stream."""

    def __init__(self, stream: Optional[TextIO] = None, color: bool = True):
        self.stream = stream or sys.stdout
        self.color = color

    def _now(self) -> str:
        return datetime.now().strftime("%H:%M:%S")

    def _paint(self, color: str, text: str) -> str:
        return f"{color}{text}{RESET}" if self.color else text

    def format_event(self, event: GameEvent) -> str:
        display = EVENT_DISPLAY_NAMES.get(event.type, event.type.value)
        describe = DESCRIBERS.get(event.type)
        detail = describe(event.payload) if describe else ""
        line = (
            f"{self._now()} | GAME-ID: {event.game_id:8} | ROUND: {event.round:3} | "
            f"#{event.seq:<4} {display:13} | {detail}"
        )
        return self._paint(EVENT_COLORS.get(event.type, GREEN), line)

    def print_event(self, event: GameEvent) -> None:
        print(self.format_event(event), file=self.stream)

    def print_agent_warning(self, player_id: str, warning: Exception) -> None:
        line = f"{self._now()} | AGENT-FALLBACK | seat {player_id} | {warning}"
        print(self._paint(ORANGE, line), file=self.stream)

    def print_error(self, description: str) -> None:
        line = f"[ERROR] {self._now()} | {description}"
        print(self._paint(RED, line), file=sys.stderr)
