"""
card_czar.types — TypedDict schemas for snapshots and history
=============================================================

This module documents the exact structure of the dictionaries the
engine hands to its collaborators: the game snapshot (persistence hook,
UI), the event payloads and the round history projection.

All types are exported from the main package:

    from card_czar import GameSnapshot, RoundHistoryEntry, ...

Use __annotations__ to inspect fields:

    >>> CardInfo.__annotations__
    {'id': <class 'str'>, 'text': <class 'str'>, 'pack': <class 'int'>}
"""

from typing import Dict, List, Optional, TypedDict


# ============================================
# Cards
# ============================================

class CardInfo(TypedDict):
    """An answer card as it appears in snapshots and events."""
    id: str                 # e.g., "a042"
    text: str
    pack: int


class PromptCardInfo(TypedDict):
    """A prompt card as it appears in snapshots and events."""
    id: str                 # e.g., "p001"
    text: str               # e.g., "Why did ___ cross the road?"
    pick: int
    pack: int


# ============================================
# snapshot(viewer_id)
# ============================================

class PlayerSnapshot(TypedDict):
    """One seat in a snapshot.

    Fields
    ------
    hand : Optional[List[CardInfo]]
        Full hand for the viewer's own seat, None for every other seat.
    hand_count : int
        Number of cards held, visible to everyone.
    """
    id: str
    name: str
    is_bot: bool
    persona_id: Optional[str]
    score: int
    hand_count: int
    hand: Optional[List[CardInfo]]
    has_submitted: bool
    is_czar: bool


class TableEntrySnapshot(TypedDict):
    """One submission on the table.

    Fields
    ------
    player_id : Optional[str]
        Seat that played the cards. None while the round is unresolved,
        so the judge cannot tell who played what.
    """
    index: int
    player_id: Optional[str]
    cards: List[CardInfo]


class GameSnapshot(TypedDict):
    """Full observable state of one game for one viewer."""
    game_id: str
    status: str             # GameStatus value, e.g., "JUDGING"
    round: int
    czar_id: Optional[str]
    prompt_card: Optional[PromptCardInfo]
    players: List[PlayerSnapshot]
    table: List[TableEntrySnapshot]
    submitted_count: int
    winner_id: Optional[str]
    points_to_win: int
    max_players: int


# ============================================
# winner_selected payload
# ============================================

class WinnerDisplay(TypedDict):
    """Data a client needs to announce a round winner."""
    winner_id: str
    winner_name: str
    round_score: int        # winner's score after the award
    prompt_card: PromptCardInfo
    winning_cards: List[CardInfo]
    round: int


# ============================================
# project_round_history(events)
# ============================================

class RoundHistoryEntry(TypedDict):
    """One seat's play in one resolved round."""
    round: int
    prompt_card: PromptCardInfo
    played_cards: List[CardInfo]
    is_winner: bool
    czar_id: Optional[str]


class HistorySummary(TypedDict):
    """Aggregate of one seat's history."""
    rounds_played: int
    wins: int


RoundHistory = Dict[str, List[RoundHistoryEntry]]
