# Area: Engine
# PRD: docs/prd-engine.md
"""
card_czar._engine.enums — Game status and event enums
=====================================================

Defines the statuses of the round state machine and the events that
drive it, plus the event types published on a game's event log.
"""

from enum import Enum


class GameStatus(Enum):
    """
    Status of a game.

    State transitions:
    LOBBY -> PLAYING_CARDS (on START)
    PLAYING_CARDS -> JUDGING (on ALL_SUBMITTED)
    JUDGING -> ROUND_ENDED (on WINNER_CHOSEN)
    ROUND_ENDED -> PLAYING_CARDS (on NEXT_ROUND)
    ROUND_ENDED -> GAME_OVER (on TARGET_REACHED)
    GAME_OVER is terminal.
    """
    LOBBY = "LOBBY"
    PLAYING_CARDS = "PLAYING_CARDS"
    JUDGING = "JUDGING"
    ROUND_ENDED = "ROUND_ENDED"
    GAME_OVER = "GAME_OVER"


class GameTrigger(Enum):
    """
    Triggers of status transitions.

    - START: owner starts the game from the lobby
    - ALL_SUBMITTED: last non-czar seat submitted
    - WINNER_CHOSEN: czar picked a submission
    - NEXT_ROUND: owner deals the next round
    - TARGET_REACHED: round winner reached points_to_win
    """
    START = "START"
    ALL_SUBMITTED = "ALL_SUBMITTED"
    WINNER_CHOSEN = "WINNER_CHOSEN"
    NEXT_ROUND = "NEXT_ROUND"
    TARGET_REACHED = "TARGET_REACHED"


class EventType(Enum):
    """Event types published on a game's event log."""
    PLAYER_JOINED = "player_joined"
    ROUND_STARTED = "round_started"
    SUBMISSION_RECEIVED = "submission_received"
    JUDGING_STARTED = "judging_started"
    WINNER_SELECTED = "winner_selected"
    GAME_OVER = "game_over"
