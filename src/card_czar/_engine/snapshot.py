# Area: Engine
# PRD: docs/prd-engine.md
"""
card_czar._engine.snapshot — Game snapshot builder
==================================================

Builds serializable snapshots of a game for one viewer. Every seat's
hand count is public; the hand itself is shown only to its owner. Table
entries show card contents always, and the seat that played them only
once the round is resolved.

A ``full`` snapshot drops both restrictions: every hand and every
submitting seat is included. Persistence hooks receive full
snapshots.
"""

from typing import List, Optional

from .enums import GameStatus
from .state import Game, Player
from ..types import GameSnapshot, PlayerSnapshot, TableEntrySnapshot

RESOLVED_STATUSES = (GameStatus.ROUND_ENDED, GameStatus.GAME_OVER)


def build_game_snapshot(
    game: Game, viewer_id: Optional[str] = None, full: bool = False
) -> GameSnapshot:
    """Build a snapshot of ``game`` as seen by ``viewer_id``, or unredacted if ``full``."""
    prompt_card = game.current_prompt_card
    return {
        "game_id": game.id,
        "status": game.status.value,
        "round": game.round,
        "czar_id": game.czar_id,
        "prompt_card": prompt_card.to_dict() if prompt_card else None,
        "players": [_player_snapshot(game, p, viewer_id, full) for p in game.players],
        "table": _table_snapshot(game, full),
        "submitted_count": len(game.table),
        "winner_id": game.winner_id,
        "points_to_win": game.settings.points_to_win,
        "max_players": game.settings.max_players,
    }


def _player_snapshot(
    game: Game, player: Player, viewer_id: Optional[str], full: bool
) -> PlayerSnapshot:
    """Build snapshot for one seat."""
    show_hand = full or (viewer_id is not None and player.id == viewer_id)
    return {
        "id": player.id,
        "name": player.name,
        "is_bot": player.is_bot,
        "persona_id": player.persona.id if player.persona else None,
        "score": player.score,
        "hand_count": len(player.hand),
        "hand": [card.to_dict() for card in player.hand] if show_hand else None,
        "has_submitted": game.has_submitted(player.id),
        "is_czar": player.id == game.czar_id,
    }


def _table_snapshot(game: Game, full: bool) -> List[TableEntrySnapshot]:
    """Table in submission order; seat ids hidden until the round resolves."""
    reveal = full or game.status in RESOLVED_STATUSES
    return [
        {
            "index": i,
            "player_id": entry.player_id if reveal else None,
            "cards": [card.to_dict() for card in entry.cards],
        }
        for i, entry in enumerate(game.table)
    ]
