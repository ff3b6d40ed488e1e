# Area: Shared
# PRD: docs/prd-engine.md
"""
card_czar.cli — Command-line interface
======================================

Runs a demo game in the terminal: bot seats played by the configured
reasoning backend, optionally one human seat answering at the prompt.

Usage:
    python -m card_czar                           # 4 bots, first to 5
    python -m card_czar --human Alice             # Alice plays with 3 bots
    python -m card_czar --players 6 --points 3
    python -m card_czar --config config.json --pack my_pack.json

Config file sections ``game`` and ``agent`` map onto GameSettings and
AgentSettings. Environment variables override the ``agent`` section;
CLI flags override the ``game`` section.
"""

import argparse
import asyncio
import logging
import sys
from typing import Any, Callable, Dict, List, Optional

from ._agent.client import AgentDecisionClient
from ._agent.personas import DEFAULT_PERSONAS
from ._cards.pack import load_pack
from ._engine.enums import GameStatus
from ._engine.factory import create_game_session
from ._engine.session import GameSession
from ._shared.event_printer import EventPrinter
from ._shared.logging_config import enable_event_mode, setup_logging
from .config import AgentSettings, GameSettings, build_settings, load_config
from .errors import CardCzarError, InvalidSelectionError

logger = logging.getLogger("card_czar.cli")

HUMAN_SEAT_ID = "human"

InputFn = Callable[[str], str]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Card Czar - party card game rounds with LLM-driven bot seats",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m card_czar
  python -m card_czar --human Alice --points 3
  python -m card_czar --players 6 --seed 42
  ANTHROPIC_API_KEY=... python -m card_czar --config config.json
        """,
    )

    parser.add_argument(
        "--players",
        type=int,
        default=4,
        help="Total number of seats, human included (default: 4)",
    )
    parser.add_argument(
        "--points",
        type=int,
        help="Points needed to win (default: from config, else 5)",
    )
    parser.add_argument(
        "--pack",
        type=str,
        help="Path to a JSON card pack (default: bundled pack)",
    )
    parser.add_argument(
        "--human",
        type=str,
        metavar="NAME",
        help="Seat one human player with this name",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for deterministic shuffling",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to JSON config file",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default="card_czar.log",
        help="Path to the JSON log file (default: card_czar.log)",
    )

    return parser.parse_args(argv)


def build_game_settings(args: argparse.Namespace, config: Dict[str, Any]) -> GameSettings:
    values = dict(config["game"])
    if args.points is not None:
        values["points_to_win"] = args.points
    return build_settings(GameSettings, values)


async def seat_players(session: GameSession, args: argparse.Namespace) -> None:
    """Seat the optional human first, then bots with rotating personas."""
    bot_count = args.players
    if args.human:
        await session.add_player(HUMAN_SEAT_ID, args.human)
        bot_count -= 1

    for i in range(bot_count):
        persona = DEFAULT_PERSONAS[i % len(DEFAULT_PERSONAS)]
        await session.add_player(
            f"bot-{i + 1}", persona.name, is_bot=True, persona=persona
        )


async def ask(input_fn: InputFn, prompt: str) -> str:
    return await asyncio.to_thread(input_fn, prompt)


def parse_indices(raw: str) -> List[int]:
    """
    Parse "0 3" or "0,3" into a list of ints.

    Raises:
        ValueError: On a non-integer or negative token
    """
    indices = [int(token) for token in raw.replace(",", " ").split()]
    if any(i < 0 for i in indices):
        raise ValueError(f"Negative index in {raw!r}")
    return indices


async def play_human_submission(
    session: GameSession, player_id: str, input_fn: InputFn
) -> None:
    game = session.game
    player = game.get_player(player_id)
    pick = game.required_pick()

    print(f"\n  Prompt: {game.current_prompt_card.text}")
    for i, card in enumerate(player.hand):
        print(f"  {i:2}: {card.text}")

    while True:
        raw = await ask(input_fn, f"  Pick {pick} card index(es): ")
        try:
            indices = parse_indices(raw)
            card_ids = [player.hand[i].id for i in indices]
            await session.submit(player_id, card_ids)
            return
        except (ValueError, IndexError):
            print("  Enter card indices from the list above.")
        except InvalidSelectionError as e:
            print(f"  {e.message}")


async def play_human_judging(
    session: GameSession, player_id: str, input_fn: InputFn
) -> None:
    game = session.game
    print(f"\n  Prompt: {game.current_prompt_card.text}")
    for i, entry in enumerate(game.table):
        print(f"  {i:2}: {' + '.join(card.text for card in entry.cards)}")

    while True:
        raw = await ask(input_fn, "  Pick the winning submission: ")
        try:
            indices = parse_indices(raw)
            if len(indices) != 1:
                raise ValueError(f"Expected one index, got {raw!r}")
            await session.judge(player_id, indices[0])
            return
        except ValueError:
            print("  Enter a submission index from the list above.")
        except InvalidSelectionError as e:
            print(f"  {e.message}")


async def run_game(
    session: GameSession,
    human_id: Optional[str] = None,
    input_fn: InputFn = input,
) -> str:
    """
    Play a started-or-lobby session to GAME_OVER.

    Returns:
        The winning seat id
    """
    if session.status is GameStatus.LOBBY:
        await session.start()

    game = session.game
    while session.status is not GameStatus.GAME_OVER:
        await session.wait_idle()
        status = session.status

        if status is GameStatus.PLAYING_CARDS and human_id is not None:
            if human_id != game.czar_id and not game.has_submitted(human_id):
                await play_human_submission(session, human_id, input_fn)
                continue
        if status is GameStatus.JUDGING and human_id == game.czar_id:
            await play_human_judging(session, human_id, input_fn)
            continue
        if status is GameStatus.ROUND_ENDED:
            await session.next_round()
            continue
        if status is not GameStatus.GAME_OVER and not session.busy:
            # Nothing pending and no one to ask: the round cannot progress
            raise CardCzarError(f"Game stalled in {status.value}")

    await session.wait_idle()
    return game.winner_id


async def run_cli(args: argparse.Namespace, config: Dict[str, Any]) -> str:
    printer = EventPrinter()
    session = create_game_session(
        settings=build_game_settings(args, config),
        pack=load_pack(args.pack),
        agent=AgentDecisionClient(AgentSettings.from_env(base=config["agent"])),
        on_agent_warning=printer.print_agent_warning,
        seed=args.seed,
    )
    session.events.subscribe(printer.print_event)
    try:
        await seat_players(session, args)
        return await run_game(
            session, HUMAN_SEAT_ID if args.human else None
        )
    finally:
        await session.close()


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    setup_logging(args.log_file)
    enable_event_mode()

    try:
        config = load_config(args.config)
        winner_id = asyncio.run(run_cli(args, config))
    except CardCzarError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130

    logger.info(f"Game finished, winner {winner_id}")
    return 0
