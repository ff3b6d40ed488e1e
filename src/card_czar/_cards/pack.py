# Area: Cards
# PRD: docs/prd-engine.md
"""
card_czar._cards.pack — Content pack loading
============================================

A pack is a JSON document with two lists:

    {
        "name": "Default",
        "prompts": [{"id": "p1", "text": "Why did ___ cross the road?", "pick": 1}],
        "answers": [{"id": "a1", "text": "A chicken"}]
    }

Packs are static: each CardSupply is built from a pack once.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .cards import AnswerCard, PromptCard
from ..errors import ConfigurationError

logger = logging.getLogger("card_czar.cards.pack")

DEFAULT_PACK_PATH = Path(__file__).parent / "data" / "default_pack.json"


@dataclass
class CardPack:
    """Prompt and answer cards loaded from one pack file."""

    name: str
    prompts: List[PromptCard] = field(default_factory=list)
    answers: List[AnswerCard] = field(default_factory=list)


def load_pack(path: Optional[Union[str, Path]] = None) -> CardPack:
    """
    Load a content pack from a JSON file.

    Args:
        path: Pack file. Defaults to the bundled default pack.

    Raises:
        ConfigurationError: If the file is missing or malformed
    """
    pack_path = Path(path) if path else DEFAULT_PACK_PATH
    if not pack_path.exists():
        raise ConfigurationError(f"Pack file not found: {pack_path}")

    try:
        with open(pack_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Pack file is not valid JSON: {pack_path}: {e}") from e

    pack = parse_pack(data, default_name=pack_path.stem)
    logger.info(
        f"Loaded pack '{pack.name}': {len(pack.prompts)} prompts, {len(pack.answers)} answers"
    )
    return pack


def parse_pack(data: Dict[str, Any], default_name: str = "custom") -> CardPack:
    """Build a CardPack from an already-decoded pack document."""
    if not isinstance(data, dict):
        raise ConfigurationError("Pack document must be a JSON object")

    pack_id = data.get("pack", 0)
    try:
        prompts = [
            PromptCard(
                id=str(item["id"]),
                text=item["text"],
                pick=int(item.get("pick", 1)),
                pack=int(item.get("pack", pack_id)),
            )
            for item in data.get("prompts", [])
        ]
        answers = [
            AnswerCard(
                id=str(item["id"]),
                text=item["text"],
                pack=int(item.get("pack", pack_id)),
            )
            for item in data.get("answers", [])
        ]
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Malformed card entry in pack: {e}") from e

    bad_picks = [p.id for p in prompts if p.pick < 1]
    if bad_picks:
        raise ConfigurationError(f"Prompt cards with pick < 1: {bad_picks}")

    return CardPack(name=data.get("name", default_name), prompts=prompts, answers=answers)
