# Area: Cards
# PRD: docs/prd-engine.md
"""
card_czar._cards.cards — Card dataclasses
=========================================

Prompt cards (the fill-in-the-blank statement) and answer cards (what
seats hold and play). Both are immutable; ids are unique within a pack.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AnswerCard:
    """
    A single candidate response card.

    Attributes:
        id: Unique id within the pack
        text: Card text
        pack: Numeric id of the pack the card came from
    """

    id: str
    text: str
    pack: int = 0

    def to_dict(self) -> dict:
        return {"id": self.id, "text": self.text, "pack": self.pack}


@dataclass(frozen=True)
class PromptCard:
    """
    The round's prompt.

    Attributes:
        id: Unique id within the pack
        text: Prompt text, blanks written as ``___``
        pick: Number of answer cards required to complete it
        pack: Numeric id of the pack the card came from
    """

    id: str
    text: str
    pick: int = 1
    pack: int = 0

    def to_dict(self) -> dict:
        return {"id": self.id, "text": self.text, "pick": self.pick, "pack": self.pack}
