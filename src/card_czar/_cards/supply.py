# Area: Cards
# PRD: docs/prd-engine.md
"""
card_czar._cards.supply — Draw and discard piles
================================================

One CardSupply owns the draw pile and discard pile for one kind of card
(prompt or answer) in one game. Cards currently held in hands or on the
table belong to neither pile until they are discarded.

When the draw pile runs out in the middle of a draw, the discard pile is
shuffled and becomes the new draw pile. Callers never see this; a draw
fails only if draw + discard together hold fewer cards than requested.
"""

from __future__ import annotations

import logging
import random
from typing import Generic, Iterable, List, Optional, Sequence, TypeVar, Union

from .cards import AnswerCard, PromptCard
from ..errors import ConfigurationError

logger = logging.getLogger("card_czar.cards.supply")

CardT = TypeVar("CardT", AnswerCard, PromptCard)


class CardSupply(Generic[CardT]):
    """
    Draw/discard piles for a single card kind.

    Attributes:
        label: Card kind used in log and error messages ("answer", "prompt")
    """

    def __init__(
        self,
        cards: Sequence[CardT],
        label: str = "answer",
        seed: Optional[Union[int, random.Random]] = None,
    ):
        ids = [card.id for card in cards]
        if len(set(ids)) != len(ids):
            duplicates = sorted({i for i in ids if ids.count(i) > 1})
            raise ConfigurationError(
                f"Duplicate {label} card ids in pack: {duplicates}",
                details={"label": label, "duplicates": duplicates},
            )

        self.label = label
        self._rng = seed if isinstance(seed, random.Random) else random.Random(seed)
        self._draw_pile: List[CardT] = list(cards)
        self._discard_pile: List[CardT] = []
        self._rng.shuffle(self._draw_pile)

    @property
    def draw_count(self) -> int:
        return len(self._draw_pile)

    @property
    def discard_count(self) -> int:
        return len(self._discard_pile)

    @property
    def total(self) -> int:
        """Cards available to future draws (draw + discard)."""
        return len(self._draw_pile) + len(self._discard_pile)

    def draw(self, n: int) -> List[CardT]:
        """
        Remove and return n cards.

        Args:
            n: Number of cards to draw (0 returns an empty list)

        Returns:
            The drawn cards, no card repeated

        Raises:
            ConfigurationError: If draw + discard hold fewer than n cards
        """
        if n <= 0:
            return []
        if n > self.total:
            raise ConfigurationError(
                f"Cannot draw {n} {self.label} cards: only {self.total} left in pack",
                details={"label": self.label, "requested": n, "available": self.total},
            )

        drawn: List[CardT] = []
        while len(drawn) < n:
            if not self._draw_pile:
                self._reshuffle()
            drawn.append(self._draw_pile.pop())
        return drawn

    def discard(self, cards: Iterable[CardT]) -> None:
        """Append cards to the discard pile."""
        self._discard_pile.extend(cards)

    def _reshuffle(self) -> None:
        logger.debug(
            "Reshuffling %d discarded %s cards into draw pile",
            len(self._discard_pile), self.label,
        )
        pile = self._discard_pile
        self._discard_pile = []
        self._rng.shuffle(pile)
        self._draw_pile = pile
