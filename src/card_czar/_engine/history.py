# Area: Engine
# PRD: docs/prd-engine.md
"""
card_czar._engine.history — Round history projection
=====================================================

Per-seat round history is not stored; it is projected from the
``winner_selected`` events of a game's log. The projection is pure and
tolerates events delivered out of order or more than once: entries are
keyed on (seat, round) and the first one seen wins.

Accepts GameEvent objects or their ``to_dict()`` form, so a persisted
log can be projected the same way as a live one.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

from .enums import EventType
from .events import GameEvent
from ..types import HistorySummary, RoundHistory, RoundHistoryEntry

EventLike = Union[GameEvent, Mapping[str, Any]]


def project_round_history(events: Iterable[EventLike]) -> RoundHistory:
    """
    Project per-seat round history from game events.

    Returns:
        ``{player_id: [RoundHistoryEntry, ...]}``, newest round first
    """
    seen: Dict[Tuple[str, int], RoundHistoryEntry] = {}

    for event in events:
        event_type, payload = _unpack(event)
        if event_type != EventType.WINNER_SELECTED.value:
            continue

        round_number = payload["round"]
        winner_id = payload["winner_id"]
        for entry in payload.get("table", []):
            player_id = entry["player_id"]
            key = (player_id, round_number)
            if key in seen:
                continue
            seen[key] = {
                "round": round_number,
                "prompt_card": payload["prompt_card"],
                "played_cards": list(entry["cards"]),
                "is_winner": player_id == winner_id,
                "czar_id": payload.get("czar_id"),
            }

    history: RoundHistory = {}
    for (player_id, _), entry in seen.items():
        history.setdefault(player_id, []).append(entry)
    for entries in history.values():
        entries.sort(key=lambda e: e["round"], reverse=True)
    return history


def summarize_history(entries: List[RoundHistoryEntry]) -> HistorySummary:
    """Wins out of rounds played for one seat."""
    return {
        "rounds_played": len(entries),
        "wins": sum(1 for entry in entries if entry["is_winner"]),
    }


def _unpack(event: EventLike) -> Tuple[str, Mapping[str, Any]]:
    if isinstance(event, GameEvent):
        return event.type.value, event.payload
    event_type = event["type"]
    if isinstance(event_type, EventType):
        event_type = event_type.value
    return event_type, event.get("payload", {})
