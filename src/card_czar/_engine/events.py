# Area: Engine
# PRD: docs/prd-engine.md
"""
card_czar._engine.events — Per-game event log
=============================================

Every committed transition appends one or more events. The log is
append-only; each event carries a per-game sequence number starting at 1.
Subscribers are called synchronously after the append, in subscription
order. A failing subscriber is logged and does not affect the game.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Tuple

from .enums import EventType

logger = logging.getLogger("card_czar.engine.events")

Subscriber = Callable[["GameEvent"], None]


@dataclass(frozen=True)
class GameEvent:
    """One entry of a game's event log."""
    seq: int
    type: EventType
    game_id: str
    round: int
    payload: Dict[str, Any] = field(default_factory=dict)
    timestamp: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seq": self.seq,
            "type": self.type.value,
            "game_id": self.game_id,
            "round": self.round,
            "payload": self.payload,
            "timestamp": self.timestamp,
        }


class EventLog:
    """Append-only event log for one game."""

    def __init__(self, game_id: str):
        self.game_id = game_id
        self._events: List[GameEvent] = []
        self._subscribers: List[Subscriber] = []

    def __len__(self) -> int:
        return len(self._events)

    @property
    def events(self) -> Tuple[GameEvent, ...]:
        return tuple(self._events)

    def since(self, seq: int) -> List[GameEvent]:
        """Events with a sequence number greater than ``seq``."""
        return [event for event in self._events if event.seq > seq]

    def append(self, event_type: EventType, round_number: int,
               payload: Dict[str, Any]) -> GameEvent:
        event = GameEvent(
            seq=len(self._events) + 1,
            type=event_type,
            game_id=self.game_id,
            round=round_number,
            payload=payload,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        self._events.append(event)
        logger.debug(f"[{self.game_id}] Event #{event.seq}: {event_type.value}")

        for subscriber in list(self._subscribers):
            try:
                subscriber(event)
            except Exception:
                logger.error(
                    f"[{self.game_id}] Event subscriber failed on {event_type.value}",
                    exc_info=True,
                )
        return event

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """
        Register a subscriber.

        Returns:
            A function that removes the subscriber again
        """
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe
