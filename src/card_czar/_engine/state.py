# Area: Engine
# PRD: docs/prd-engine.md
"""
card_czar._engine.state — Game state
====================================

Tracks one game across its rounds: the seats in stable order, whose turn
it is to judge, the current prompt card and the table of submissions.
The session owns the only reference that mutates it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .enums import GameStatus, GameTrigger
from .state_machine import GameStateMachine
from .._agent.personas import Persona
from .._cards.cards import AnswerCard, PromptCard
from ..config import GameSettings

logger = logging.getLogger("card_czar.engine.state")


@dataclass
class Player:
    """One seat at the table."""
    id: str
    name: str
    is_bot: bool = False
    persona: Optional[Persona] = None
    score: int = 0
    hand: List[AnswerCard] = field(default_factory=list)


@dataclass(frozen=True)
class TableEntry:
    """One seat's submission for the current round."""
    player_id: str
    cards: Tuple[AnswerCard, ...]

    @property
    def card_ids(self) -> List[str]:
        return [card.id for card in self.cards]


@dataclass
class Game:
    """
    Full state of one game.

    ``round`` is 0 in the lobby and 1 for the first dealt round.
    ``winner_id`` holds the round winner in ROUND_ENDED and the game
    winner in GAME_OVER; it is None otherwise.
    """
    id: str
    settings: GameSettings = field(default_factory=GameSettings)
    players: List[Player] = field(default_factory=list)
    round: int = 0
    czar_id: Optional[str] = None
    current_prompt_card: Optional[PromptCard] = None
    table: List[TableEntry] = field(default_factory=list)
    winner_id: Optional[str] = None
    machine: GameStateMachine = field(init=False, repr=False)

    def __post_init__(self):
        self.machine = GameStateMachine(self.id)

    @property
    def status(self) -> GameStatus:
        return self.machine.current_status

    # ── Lookup helpers ───────────────────────────────────────

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def get_czar(self) -> Optional[Player]:
        return self.get_player(self.czar_id) if self.czar_id else None

    def non_czar_players(self) -> List[Player]:
        return [p for p in self.players if p.id != self.czar_id]

    def has_submitted(self, player_id: str) -> bool:
        return any(entry.player_id == player_id for entry in self.table)

    def pending_players(self) -> List[Player]:
        """Non-czar seats that have not submitted this round, in seat order."""
        return [p for p in self.non_czar_players() if not self.has_submitted(p.id)]

    def all_submitted(self) -> bool:
        return not self.pending_players()

    def required_pick(self) -> int:
        if self.current_prompt_card is None:
            return 1
        return self.current_prompt_card.pick

    def scores(self) -> Dict[str, int]:
        return {p.id: p.score for p in self.players}

    # ── Round helpers ────────────────────────────────────────

    def next_czar_id(self) -> str:
        """Seat after the current czar in stable order; first seat if none."""
        if self.czar_id is None:
            return self.players[0].id
        ids = [p.id for p in self.players]
        position = ids.index(self.czar_id)
        return ids[(position + 1) % len(ids)]

    def advance(self, trigger: GameTrigger) -> GameStatus:
        return self.machine.transition(trigger)

    def reset_for_new_round(self) -> None:
        """Clear per-round state. Hands and scores are kept."""
        logger.debug(f"[{self.id}] Resetting table for round {self.round}")
        self.table = []
        self.winner_id = None
        self.current_prompt_card = None
