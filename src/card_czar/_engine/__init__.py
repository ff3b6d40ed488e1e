# Area: Engine
# PRD: docs/prd-engine.md
"""
Engine — Round/session state machine, events and projections.

This package contains:
- Game state and the table-driven status machine
- GameSession (single-writer session with bot scheduling)
- Per-game event log and payload builders
- Snapshots and round history projection
"""

from .enums import EventType, GameStatus, GameTrigger
from .events import EventLog, GameEvent
from .factory import create_game_session
from .history import project_round_history, summarize_history
from .session import MIN_PLAYERS, GameSession
from .snapshot import build_game_snapshot
from .state import Game, Player, TableEntry
from .state_machine import TRANSITIONS, GameStateMachine

__all__ = [
    "EventLog",
    "EventType",
    "Game",
    "GameEvent",
    "GameSession",
    "GameStateMachine",
    "GameStatus",
    "GameTrigger",
    "MIN_PLAYERS",
    "Player",
    "TRANSITIONS",
    "TableEntry",
    "build_game_snapshot",
    "create_game_session",
    "project_round_history",
    "summarize_history",
]
