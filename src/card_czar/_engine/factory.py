# Area: Engine
# PRD: docs/prd-engine.md
"""
card_czar._engine.factory — Session construction
================================================

Wires a pack, settings and an agent client into a ready GameSession in
LOBBY. Each game gets its own pair of card supplies.
"""

from __future__ import annotations

import logging
import random
import uuid
from typing import Optional

from .session import GameSession, PersistHook, WarningHook
from .state import Game
from .._agent.client import AgentDecisionClient
from .._cards.hands import HandManager
from .._cards.pack import CardPack, load_pack
from .._cards.supply import CardSupply
from ..config import AgentSettings, GameSettings

logger = logging.getLogger("card_czar.engine")


def create_game_session(
    settings: Optional[GameSettings] = None,
    pack: Optional[CardPack] = None,
    agent: Optional[AgentDecisionClient] = None,
    agent_settings: Optional[AgentSettings] = None,
    credential: Optional[str] = None,
    persist: Optional[PersistHook] = None,
    on_agent_warning: Optional[WarningHook] = None,
    seed: Optional[int] = None,
    game_id: Optional[str] = None,
) -> GameSession:
    """
    Create a new game session in LOBBY.

    Args:
        settings: Game rules; defaults apply when omitted
        pack: Card pack; the bundled default pack when omitted
        agent: Agent client; built from ``agent_settings`` when omitted
        agent_settings: Backend settings for a newly built agent client
        credential: Session owner's hosted backend credential
        persist: Snapshot hook called after every committed change
        on_agent_warning: Hook for bot decisions that fell back
        seed: Seed for deterministic shuffling
        game_id: Game id; a random short id when omitted
    """
    settings = settings or GameSettings()
    pack = pack or load_pack()
    agent = agent or AgentDecisionClient(agent_settings or AgentSettings.from_env())
    game_id = game_id or uuid.uuid4().hex[:8]

    rng = random.Random(seed)
    hands = HandManager(
        answers=CardSupply(pack.answers, label="answer", seed=rng),
        prompts=CardSupply(pack.prompts, label="prompt", seed=rng),
        capacity=settings.hand_size,
    )
    game = Game(id=game_id, settings=settings)

    logger.info(
        f"[{game_id}] Created game: pack={pack.name} "
        f"points_to_win={settings.points_to_win} max_players={settings.max_players}"
    )
    return GameSession(
        game=game,
        hands=hands,
        agent=agent,
        credential=credential,
        persist=persist,
        on_agent_warning=on_agent_warning,
    )
