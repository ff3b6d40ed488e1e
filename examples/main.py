"""
main.py — Run a Card Czar game from code
========================================

Seats four bots (one with a custom persona), plays to three points and
prints every event, then each seat's round history.

    python main.py

Bots use the hosted backend when ANTHROPIC_API_KEY is set (or when a
per-session credential is passed), otherwise the local Ollama model at
OLLAMA_BASE_URL. If neither answers, bots still play: every failed
decision falls back to index 0 and is reported as an AGENT-FALLBACK line.

Snapshots are written to ./snapshots/<game_id>.json after every change.
"""

import asyncio
import json
from pathlib import Path

from card_czar import (
    DEFAULT_PERSONAS,
    GameSettings,
    GameStatus,
    Persona,
    create_game_session,
    project_round_history,
    setup_logging,
    summarize_history,
)
from card_czar._shared.event_printer import EventPrinter

# ── A persona of your own ──
pirate = Persona(
    id="pirate",
    name="Captain Quip",
    system_prompt=(
        "You are a pirate playing a party card game. You love anything "
        "involving the sea, treasure or rum. Pick the card a pirate would."
    ),
    description="Nautical humor only",
    is_custom=True,
)

SNAPSHOT_DIR = Path("snapshots")


def save_snapshot(snapshot):
    SNAPSHOT_DIR.mkdir(exist_ok=True)
    (SNAPSHOT_DIR / f"{snapshot['game_id']}.json").write_text(json.dumps(snapshot, indent=2))


async def main():
    printer = EventPrinter()
    session = create_game_session(
        settings=GameSettings(points_to_win=3),
        persist=save_snapshot,
        on_agent_warning=printer.print_agent_warning,
        seed=42,
    )
    session.events.subscribe(printer.print_event)

    for i, persona in enumerate([pirate] + DEFAULT_PERSONAS[:3]):
        await session.add_player(f"bot-{i + 1}", persona.name, is_bot=True, persona=persona)

    try:
        await session.start()
        while session.status is not GameStatus.GAME_OVER:
            await session.wait_idle()
            if session.status is GameStatus.ROUND_ENDED:
                await session.next_round()
    finally:
        await session.close()

    print()
    history = project_round_history(session.events.events)
    for player in session.game.players:
        summary = summarize_history(history.get(player.id, []))
        print(f"{player.name:16} score={player.score} "
              f"played={summary['rounds_played']} wins={summary['wins']}")


if __name__ == "__main__":
    setup_logging("card_czar.log")
    asyncio.run(main())
