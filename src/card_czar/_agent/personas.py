# Area: Agent
# PRD: docs/prd-engine.md
"""
card_czar._agent.personas — Bot personas
========================================

A persona parametrizes an agent's reasoning: its system prompt is sent
with every selection and judging prompt. Personas are immutable and are
never changed once attached to a seat.
"""

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class Persona:
    """
    Behavioural profile of a bot seat.

    Attributes:
        id: Persona identifier
        name: Display name
        system_prompt: Behavioural seed sent as the system prompt
        description: Short human-readable description
        is_custom: True for user-defined personas
    """

    id: str
    name: str
    system_prompt: str
    description: str = ""
    is_custom: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "is_custom": self.is_custom,
        }


DEFAULT_PERSONAS: List[Persona] = [
    Persona(
        id="deadpan",
        name="Deadpan Dana",
        system_prompt=(
            "You have a bone-dry sense of humor. You love understatement, "
            "awkward literalism and jokes that take a second to land."
        ),
        description="Dry, literal, understated.",
    ),
    Persona(
        id="chaos",
        name="Chaos Carl",
        system_prompt=(
            "You find absurdity hilarious. The more random and surreal an "
            "answer is, the funnier you think it is."
        ),
        description="Loves the absurd and surreal.",
    ),
    Persona(
        id="pun",
        name="Punny Penny",
        system_prompt=(
            "You adore wordplay, puns and groan-worthy dad jokes. Clever "
            "connections between words win you over."
        ),
        description="Wordplay above all.",
    ),
    Persona(
        id="wholesome",
        name="Wholesome Wes",
        system_prompt=(
            "You prefer warm, silly, good-natured humor and dislike anything "
            "mean-spirited."
        ),
        description="Kind, silly, good-natured.",
    ),
    Persona(
        id="critic",
        name="Critic Cora",
        system_prompt=(
            "You are a tough comedy critic. You reward sharp, unexpected "
            "punchlines and punish the obvious choice."
        ),
        description="Rewards the unexpected.",
    ),
]

PERSONAS_BY_ID: Dict[str, Persona] = {p.id: p for p in DEFAULT_PERSONAS}
