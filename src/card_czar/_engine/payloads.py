# Area: Engine
# PRD: docs/prd-engine.md
"""
card_czar._engine.payloads — Event payload builders
===================================================

Builds the payload dicts attached to game events. Payloads are plain
JSON-serializable data so a persisted event log can be projected without
the engine.
"""

from typing import Any, Dict, List

from .state import Game, Player, TableEntry
from ..types import WinnerDisplay


def player_joined_payload(game: Game, player: Player) -> Dict[str, Any]:
    return {
        "player_id": player.id,
        "name": player.name,
        "is_bot": player.is_bot,
        "persona_id": player.persona.id if player.persona else None,
        "seat": len(game.players) - 1,
    }


def round_started_payload(game: Game) -> Dict[str, Any]:
    return {
        "round": game.round,
        "czar_id": game.czar_id,
        "prompt_card": game.current_prompt_card.to_dict(),
        "seat_order": [p.id for p in game.players],
    }


def submission_received_payload(game: Game, entry: TableEntry) -> Dict[str, Any]:
    return {
        "player_id": entry.player_id,
        "submitted_count": len(game.table),
        "required_count": len(game.non_czar_players()),
    }


def judging_started_payload(game: Game) -> Dict[str, Any]:
    """Table in order, without seat ids."""
    return {
        "czar_id": game.czar_id,
        "table": [
            {"index": i, "cards": [card.to_dict() for card in entry.cards]}
            for i, entry in enumerate(game.table)
        ],
    }


def build_winner_display(game: Game, winner: Player, entry: TableEntry) -> WinnerDisplay:
    """Data needed to announce the round winner."""
    return {
        "winner_id": winner.id,
        "winner_name": winner.name,
        "round_score": winner.score,
        "prompt_card": game.current_prompt_card.to_dict(),
        "winning_cards": [card.to_dict() for card in entry.cards],
        "round": game.round,
    }


def winner_selected_payload(
    game: Game, winner: Player, winning_index: int
) -> Dict[str, Any]:
    entry = game.table[winning_index]
    payload: Dict[str, Any] = dict(build_winner_display(game, winner, entry))
    payload.update({
        "czar_id": game.czar_id,
        "winning_index": winning_index,
        "table": _revealed_table(game.table),
        "scores": game.scores(),
    })
    return payload


def game_over_payload(game: Game, winner: Player) -> Dict[str, Any]:
    return {
        "winner_id": winner.id,
        "winner_name": winner.name,
        "final_scores": game.scores(),
        "rounds_played": game.round,
    }


def _revealed_table(table: List[TableEntry]) -> List[Dict[str, Any]]:
    return [
        {"player_id": entry.player_id, "cards": [card.to_dict() for card in entry.cards]}
        for entry in table
    ]
