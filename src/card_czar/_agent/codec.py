# Area: Agent
# PRD: docs/prd-engine.md
"""
card_czar._agent.codec — Prompt building and reply parsing
==========================================================

Builds the two backend-agnostic prompts and turns the backend's free
text back into a bounded index.

Parsing contract: take the first integer token of the reply. If there is
none, or it falls outside ``[0, bound)``, the result is index 0 flagged
as a fallback, with the raw text kept for logging. Parsing never raises.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

from .._cards.cards import AnswerCard, PromptCard

SUBMISSION_SEPARATOR = " + "
FALLBACK_INDEX = 0

_INTEGER_TOKEN = re.compile(r"-?\d+")


@dataclass(frozen=True)
class ParsedIndex:
    """Result of parsing a backend reply."""
    index: int
    is_fallback: bool
    raw_text: str


def build_selection_prompt(hand: Sequence[AnswerCard], prompt_card: PromptCard) -> str:
    """Prompt asking a bot to choose one card from its hand."""
    cards_required = prompt_card.pick or 1
    plural = "s" if cards_required > 1 else ""

    lines = [
        "You are playing a fill-in-the-blank party card game.",
        "",
        f'The PROMPT CARD is: "{prompt_card.text}"',
        f"(This card requires {cards_required} answer card{plural} to complete)",
        "",
        "Your HAND:",
    ]
    for i, card in enumerate(hand):
        lines.append(f'{i}: "{card.text}"')
    lines.append("")
    lines.append("Pick the card that would be the FUNNIEST answer based on your personality.")
    lines.append(
        f"Respond with ONLY a single integer from 0 to {len(hand) - 1}. No explanation."
    )
    return "\n".join(lines)


def build_judging_prompt(
    prompt_card: PromptCard, submissions: Sequence[Sequence[AnswerCard]]
) -> str:
    """Prompt asking a bot judge to pick the winning submission."""
    lines = [
        "You are the judge in a fill-in-the-blank party card game.",
        "",
        f'The PROMPT CARD is: "{prompt_card.text}"',
        "",
        "The SUBMISSIONS are:",
    ]
    for i, cards in enumerate(submissions):
        combined = SUBMISSION_SEPARATOR.join(card.text for card in cards)
        lines.append(f"{i}: {combined}")
    lines.append("")
    lines.append("Pick the FUNNIEST submission based on your personality and sense of humor.")
    lines.append(
        f"Respond with ONLY a single integer from 0 to {len(submissions) - 1}. No explanation."
    )
    return "\n".join(lines)


def parse_index(raw_text: str, bound: int) -> ParsedIndex:
    """
    Extract a validated index from a backend reply.

    Args:
        raw_text: Reply text, possibly empty or None
        bound: Exclusive upper bound for a valid index

    Returns:
        ParsedIndex with ``is_fallback`` set when the reply was unusable
    """
    text = raw_text or ""
    match = _INTEGER_TOKEN.search(text)
    if match is None:
        return ParsedIndex(index=FALLBACK_INDEX, is_fallback=True, raw_text=text)

    index = int(match.group(0))
    if index < 0 or index >= bound:
        return ParsedIndex(index=FALLBACK_INDEX, is_fallback=True, raw_text=text)

    return ParsedIndex(index=index, is_fallback=False, raw_text=text)
