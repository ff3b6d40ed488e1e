"""
card_czar — Party card game round engine with LLM-driven bot seats
==================================================================

Runs rounds of a fill-in-the-blank party card game: one rotating czar
reads a prompt card, everyone else plays answer cards, the czar picks
the funniest. Seats can be humans or bots; bots decide through a
reasoning backend (Anthropic hosted API, or a local Ollama model).

Quick Start:
    import asyncio
    from card_czar import create_game_session, DEFAULT_PERSONAS

    async def main():
        session = create_game_session(seed=7)
        await session.add_player("alice", "Alice")
        for i, persona in enumerate(DEFAULT_PERSONAS[:3]):
            await session.add_player(f"bot-{i}", persona.name,
                                     is_bot=True, persona=persona)
        await session.start()
        await session.wait_idle()
        print(session.snapshot(viewer_id="alice"))

    asyncio.run(main())

Type Definitions
----------------
Snapshot and history shapes are available for import:

    from card_czar import GameSnapshot, PlayerSnapshot, RoundHistoryEntry
"""

from ._agent import (
    DEFAULT_PERSONAS,
    PERSONAS_BY_ID,
    AgentDecision,
    AgentDecisionClient,
    BackendKind,
    Persona,
    parse_index,
    select_backend,
)
from ._cards import AnswerCard, CardPack, CardSupply, HandManager, PromptCard, load_pack
from ._engine import (
    EventType,
    Game,
    GameEvent,
    GameSession,
    GameStatus,
    Player,
    TableEntry,
    create_game_session,
    project_round_history,
    summarize_history,
)
from ._shared import setup_logging
from .config import AgentSettings, GameSettings
from .errors import (
    AgentUnavailableError,
    CardCzarError,
    ConfigurationError,
    InvalidSelectionError,
    InvalidStateError,
)
from .types import (
    CardInfo,
    GameSnapshot,
    HistorySummary,
    PlayerSnapshot,
    PromptCardInfo,
    RoundHistoryEntry,
    TableEntrySnapshot,
    WinnerDisplay,
)

__all__ = [
    # Engine
    "GameSession",
    "create_game_session",
    "Game",
    "Player",
    "TableEntry",
    "GameStatus",
    "EventType",
    "GameEvent",
    "project_round_history",
    "summarize_history",
    # Cards
    "AnswerCard",
    "PromptCard",
    "CardPack",
    "CardSupply",
    "HandManager",
    "load_pack",
    # Agent
    "AgentDecision",
    "AgentDecisionClient",
    "BackendKind",
    "Persona",
    "DEFAULT_PERSONAS",
    "PERSONAS_BY_ID",
    "parse_index",
    "select_backend",
    # Config & logging
    "AgentSettings",
    "GameSettings",
    "setup_logging",
    # Errors
    "CardCzarError",
    "InvalidStateError",
    "InvalidSelectionError",
    "AgentUnavailableError",
    "ConfigurationError",
    # Types
    "CardInfo",
    "PromptCardInfo",
    "PlayerSnapshot",
    "TableEntrySnapshot",
    "GameSnapshot",
    "WinnerDisplay",
    "RoundHistoryEntry",
    "HistorySummary",
]
__version__ = "1.0.0"
