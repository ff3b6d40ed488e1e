# Area: Cards
# PRD: docs/prd-engine.md
"""
Cards — prompt/answer cards, supplies and hands.

This package contains:
- Card dataclasses
- Draw/discard supplies with transparent reshuffling
- Hand dealing and submission removal
- Content pack loading
"""

from .cards import AnswerCard, PromptCard
from .supply import CardSupply
from .hands import HandManager, HandHolder, DEFAULT_HAND_SIZE
from .pack import CardPack, load_pack, parse_pack, DEFAULT_PACK_PATH

__all__ = [
    "AnswerCard",
    "PromptCard",
    "CardSupply",
    "HandManager",
    "HandHolder",
    "DEFAULT_HAND_SIZE",
    "CardPack",
    "load_pack",
    "parse_pack",
    "DEFAULT_PACK_PATH",
]
