# Area: Cards
# PRD: docs/prd-engine.md
"""
card_czar._cards.hands — Deal & hand management
===============================================

Assigns answer cards to seats from the answer supply and draws prompt
cards from the prompt supply. Works on any seat object exposing ``id``
and a mutable ``hand`` list.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Protocol, Sequence

from .cards import AnswerCard, PromptCard
from .supply import CardSupply
from ..errors import ConfigurationError, InvalidSelectionError

logger = logging.getLogger("card_czar.cards.hands")

DEFAULT_HAND_SIZE = 10


class HandHolder(Protocol):
    """Anything that holds a hand: a seat id plus an ordered card list."""

    id: str
    hand: List[AnswerCard]


class HandManager:
    """
    Deals answer cards into hands and draws prompt cards.

    Attributes:
        answers: Answer card supply
        prompts: Prompt card supply
        capacity: Hand size every seat is refilled to
    """

    def __init__(
        self,
        answers: CardSupply[AnswerCard],
        prompts: CardSupply[PromptCard],
        capacity: int = DEFAULT_HAND_SIZE,
    ):
        self.answers = answers
        self.prompts = prompts
        self.capacity = capacity

    def refill_hand(self, player: HandHolder) -> List[AnswerCard]:
        """
        Draw exactly ``capacity - len(hand)`` cards into the hand.

        Returns:
            The newly dealt cards
        """
        needed = self.capacity - len(player.hand)
        if needed <= 0:
            return []

        held = {card.id for card in player.hand}
        drawn = self.answers.draw(needed)
        clashing = [card for card in drawn if card.id in held]
        if clashing:
            # A held id can only come back if the pack itself is inconsistent
            self.answers.discard(drawn)
            raise ConfigurationError(
                f"Answer supply dealt cards already held by {player.id}",
                details={"player_id": player.id, "card_ids": [c.id for c in clashing]},
            )

        player.hand.extend(drawn)
        logger.debug("Dealt %d cards to %s", len(drawn), player.id)
        return drawn

    def remove_from_hand(self, player: HandHolder, card_ids: Sequence[str]) -> List[AnswerCard]:
        """
        Remove the named cards from a hand, in the order given.

        Raises:
            InvalidSelectionError: If an id is repeated or not held by the seat
        """
        if len(set(card_ids)) != len(card_ids):
            raise InvalidSelectionError(
                "Card ids must not repeat within one submission",
                player_id=player.id, card_ids=list(card_ids),
            )

        by_id = {card.id: card for card in player.hand}
        unknown = [card_id for card_id in card_ids if card_id not in by_id]
        if unknown:
            raise InvalidSelectionError(
                f"Cards not in hand: {unknown}",
                player_id=player.id, card_ids=unknown,
            )

        removed = [by_id[card_id] for card_id in card_ids]
        wanted = set(card_ids)
        player.hand[:] = [card for card in player.hand if card.id not in wanted]
        return removed

    def draw_prompt_card(self) -> PromptCard:
        """Draw the next prompt card."""
        return self.prompts.draw(1)[0]

    def discard_round(
        self,
        prompt_card: Optional[PromptCard],
        played: Iterable[Sequence[AnswerCard]],
    ) -> None:
        """Return a finished round's prompt and played cards to the discard piles."""
        if prompt_card is not None:
            self.prompts.discard([prompt_card])
        for cards in played:
            self.answers.discard(cards)

    def check_capacity(self, seat_count: int) -> None:
        """
        Check the pack can seed a round for ``seat_count`` seats.

        Raises:
            ConfigurationError: If there are not enough cards
        """
        needed = seat_count * self.capacity
        if self.answers.total < needed:
            raise ConfigurationError(
                f"Pack has {self.answers.total} answer cards, "
                f"{seat_count} seats need {needed}",
                details={"seats": seat_count, "needed": needed,
                         "available": self.answers.total},
            )
        if self.prompts.total < 1:
            raise ConfigurationError("Pack has no prompt cards")
