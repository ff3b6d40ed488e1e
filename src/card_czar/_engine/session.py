# Area: Engine
# PRD: docs/prd-engine.md
"""
card_czar._engine.session — Round/session engine
================================================

One GameSession drives one Game through its lifecycle:

    LOBBY → PLAYING_CARDS → JUDGING → ROUND_ENDED → PLAYING_CARDS ...
                                                  ↘ GAME_OVER

Concurrency model
-----------------
Every state change runs under the session's asyncio.Lock, so there is a
single writer per game. Agent calls for bot seats run as tasks outside
the lock; their results are applied under the lock only if they are
still current (session open, same round, expected status, seat has not
submitted). Anything else is discarded as stale.

Bot submissions for a round are requested concurrently and applied in
seat order once all of them have resolved.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Set, Union

from .enums import EventType, GameStatus, GameTrigger
from .events import EventLog
from .payloads import (
    game_over_payload,
    judging_started_payload,
    player_joined_payload,
    round_started_payload,
    submission_received_payload,
    winner_selected_payload,
)
from .snapshot import build_game_snapshot
from .state import Game, Player, TableEntry
from .._agent.client import AgentDecision, AgentDecisionClient
from .._agent.codec import FALLBACK_INDEX
from .._agent.personas import Persona
from .._cards.cards import AnswerCard, PromptCard
from .._cards.hands import HandManager
from ..errors import (
    AgentUnavailableError,
    ConfigurationError,
    InvalidSelectionError,
    InvalidStateError,
)
from ..types import GameSnapshot

logger = logging.getLogger("card_czar.engine")

MIN_PLAYERS = 3

PersistHook = Callable[[GameSnapshot], Union[None, Awaitable[None]]]
WarningHook = Callable[[str, AgentUnavailableError], None]


class GameSession:
    """
    Owns one game and serializes every change to it.

    Args:
        game: The game to drive (normally fresh, in LOBBY)
        hands: Hand manager over this game's card supplies
        agent: Agent decision client for bot seats
        credential: Session owner's hosted backend credential, if any
        persist: Called with a full (unredacted) snapshot after every
            committed change
        on_agent_warning: Called with (player_id, warning) when a bot
            decision fell back to index 0
    """

    def __init__(
        self,
        game: Game,
        hands: HandManager,
        agent: AgentDecisionClient,
        credential: Optional[str] = None,
        persist: Optional[PersistHook] = None,
        on_agent_warning: Optional[WarningHook] = None,
    ):
        self.game = game
        self.hands = hands
        self.agent = agent
        self.credential = credential
        self.events = EventLog(game.id)
        self._persist_hook = persist
        self._on_agent_warning = on_agent_warning
        self._lock = asyncio.Lock()
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    # ── Properties ───────────────────────────────────────────

    @property
    def game_id(self) -> str:
        return self.game.id

    @property
    def status(self) -> GameStatus:
        return self.game.status

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def busy(self) -> bool:
        """True while agent calls or persistence tasks are pending."""
        return bool(self._tasks)

    def snapshot(self, viewer_id: Optional[str] = None) -> GameSnapshot:
        return build_game_snapshot(self.game, viewer_id)

    # ── Lobby ────────────────────────────────────────────────

    async def add_player(
        self,
        player_id: str,
        name: str,
        is_bot: bool = False,
        persona: Optional[Persona] = None,
    ) -> Player:
        """
        Seat a player. Seat order is join order.

        Raises:
            InvalidStateError: Game already started, or full
            InvalidSelectionError: Seat id already taken
            ConfigurationError: Bot seat without a persona
        """
        async with self._lock:
            self._check_open("add_player")
            self.game.machine.require("add_player")
            game = self.game

            if len(game.players) >= game.settings.max_players:
                raise InvalidStateError(
                    "add_player", game.status.value,
                    message=f"Game is full ({game.settings.max_players} players)",
                )
            if game.get_player(player_id) is not None:
                raise InvalidSelectionError(
                    f"Seat {player_id} is already taken", player_id=player_id
                )
            if is_bot and persona is None:
                raise ConfigurationError(
                    f"Bot seat {player_id} needs a persona",
                    details={"player_id": player_id},
                )

            player = Player(id=player_id, name=name, is_bot=is_bot, persona=persona)
            game.players.append(player)
            logger.info(
                f"[{game.id}] {'Bot' if is_bot else 'Player'} joined: "
                f"{player_id} ({name})"
            )
            self._emit(EventType.PLAYER_JOINED, player_joined_payload(game, player))
            self._persist()
            return player

    async def start(self) -> None:
        """
        Deal the first round.

        Raises:
            InvalidStateError: Game is not in LOBBY
            ConfigurationError: Too few seats, or the pack cannot seed a round
        """
        async with self._lock:
            self._check_open("start")
            self.game.machine.require("start")

            seat_count = len(self.game.players)
            if seat_count < MIN_PLAYERS:
                raise ConfigurationError(
                    f"Need at least {MIN_PLAYERS} players to start, have {seat_count}",
                    details={"seats": seat_count, "minimum": MIN_PLAYERS},
                )
            self.hands.check_capacity(seat_count)

            prompt_card = self._draw_prompt_card()
            self.game.advance(GameTrigger.START)
            self._deal_round(prompt_card)

    async def next_round(self) -> None:
        """
        Deal the next round after a resolved one.

        Raises:
            InvalidStateError: Game is not in ROUND_ENDED
        """
        async with self._lock:
            self._check_open("next_round")
            self.game.machine.require("next_round")

            prompt_card = self._draw_prompt_card()
            self.game.advance(GameTrigger.NEXT_ROUND)
            self._deal_round(prompt_card)

    # ── Round actions ────────────────────────────────────────

    async def submit(self, player_id: str, card_ids: Sequence[str]) -> TableEntry:
        """
        Play cards from a seat's hand onto the table.

        Raises:
            InvalidStateError: Not in PLAYING_CARDS
            InvalidSelectionError: Unknown seat, czar, repeat submission,
                wrong card count, or cards not in hand
        """
        async with self._lock:
            self._check_open("submit")
            self.game.machine.require("submit")
            return self._apply_submission(player_id, list(card_ids))

    async def judge(self, player_id: str, index: int) -> Player:
        """
        Pick the winning submission by its index in table order.

        Returns:
            The round winner

        Raises:
            InvalidStateError: Not in JUDGING
            InvalidSelectionError: Caller is not the czar, or index out of range
        """
        async with self._lock:
            self._check_open("judge")
            self.game.machine.require("judge")

            if player_id != self.game.czar_id:
                raise InvalidSelectionError(
                    f"Only the czar ({self.game.czar_id}) can judge this round",
                    player_id=player_id,
                )
            if not 0 <= index < len(self.game.table):
                raise InvalidSelectionError(
                    f"Submission index {index} out of range "
                    f"[0, {len(self.game.table)})",
                    player_id=player_id, index=index,
                )
            return self._resolve_round(index)

    # ── Teardown ─────────────────────────────────────────────

    async def wait_idle(self) -> None:
        """Wait until no agent or persistence work is pending."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        """Stop the session and cancel in-flight agent calls."""
        if self._closed:
            return
        self._closed = True
        pending = [task for task in self._tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        logger.info(f"[{self.game.id}] Session closed ({len(pending)} task(s) cancelled)")

    # ── Transitions (lock held) ──────────────────────────────

    def _draw_prompt_card(self) -> PromptCard:
        prompt_card = self.hands.draw_prompt_card()
        if prompt_card.pick > self.hands.capacity:
            self.hands.discard_round(prompt_card, [])
            raise ConfigurationError(
                f"Prompt {prompt_card.id} needs {prompt_card.pick} cards, "
                f"hand size is {self.hands.capacity}",
                details={"prompt_id": prompt_card.id, "pick": prompt_card.pick},
            )
        return prompt_card

    def _deal_round(self, prompt_card: PromptCard) -> None:
        game = self.game
        game.round += 1
        game.reset_for_new_round()
        game.czar_id = game.next_czar_id()
        game.current_prompt_card = prompt_card
        for player in game.players:
            self.hands.refill_hand(player)

        logger.info(
            f"[{game.id}] Round {game.round}: czar={game.czar_id} "
            f"prompt={prompt_card.id} pick={prompt_card.pick}"
        )
        self._emit(EventType.ROUND_STARTED, round_started_payload(game))
        self._persist()
        self._schedule_bot_submissions()

    def _apply_submission(self, player_id: str, card_ids: List[str]) -> TableEntry:
        game = self.game
        player = game.get_player(player_id)
        if player is None:
            raise InvalidSelectionError(f"Unknown seat {player_id}", player_id=player_id)
        if player_id == game.czar_id:
            raise InvalidSelectionError(
                "The czar does not submit this round", player_id=player_id
            )
        if game.has_submitted(player_id):
            raise InvalidSelectionError(
                "Seat already submitted this round", player_id=player_id
            )
        required = game.required_pick()
        if len(card_ids) != required:
            raise InvalidSelectionError(
                f"Expected {required} card(s), got {len(card_ids)}",
                player_id=player_id, expected=required, received=len(card_ids),
            )

        cards = self.hands.remove_from_hand(player, card_ids)
        entry = TableEntry(player_id=player_id, cards=tuple(cards))
        game.table.append(entry)
        logger.info(
            f"[{game.id}] Submission {len(game.table)}/{len(game.non_czar_players())} "
            f"from {player_id}"
        )
        self._emit(EventType.SUBMISSION_RECEIVED, submission_received_payload(game, entry))

        if game.all_submitted():
            game.advance(GameTrigger.ALL_SUBMITTED)
            self._emit(EventType.JUDGING_STARTED, judging_started_payload(game))
            self._schedule_bot_judge()
        self._persist()
        return entry

    def _resolve_round(self, index: int) -> Player:
        game = self.game
        entry = game.table[index]
        winner = game.get_player(entry.player_id)

        winner.score += game.settings.round_award
        game.winner_id = winner.id
        game.advance(GameTrigger.WINNER_CHOSEN)
        self.hands.discard_round(
            game.current_prompt_card, [e.cards for e in game.table]
        )
        logger.info(
            f"[{game.id}] Round {game.round} won by {winner.id} "
            f"(score {winner.score}/{game.settings.points_to_win})"
        )
        self._emit(EventType.WINNER_SELECTED, winner_selected_payload(game, winner, index))

        if winner.score >= game.settings.points_to_win:
            game.advance(GameTrigger.TARGET_REACHED)
            logger.info(f"[{game.id}] Game over, winner {winner.id}")
            self._emit(EventType.GAME_OVER, game_over_payload(game, winner))

        self._persist()
        return winner

    # ── Bot seats ────────────────────────────────────────────

    def _schedule_bot_submissions(self) -> None:
        bots = [p for p in self.game.pending_players() if p.is_bot]
        if bots:
            self._spawn(self._run_bot_submissions(self.game.round, bots))

    def _schedule_bot_judge(self) -> None:
        czar = self.game.get_czar()
        if czar is not None and czar.is_bot:
            self._spawn(self._run_bot_judge(self.game.round, czar))

    async def _run_bot_submissions(self, round_number: int, bots: List[Player]) -> None:
        prompt_card = self.game.current_prompt_card
        hands = {bot.id: list(bot.hand) for bot in bots}
        results = await asyncio.gather(*[
            self.agent.choose_answer(
                bot.persona, hands[bot.id], prompt_card, self.credential
            )
            for bot in bots
        ], return_exceptions=True)
        decisions = [
            _decision_or_fallback(result, "choose_answer")
            for result in results
        ]

        async with self._lock:
            for bot, decision in zip(bots, decisions):
                self._report_warning(bot.id, decision)
                if self._is_stale(round_number, GameStatus.PLAYING_CARDS, bot.id):
                    continue
                card_ids = _consecutive_card_ids(
                    hands[bot.id], decision.index, prompt_card.pick
                )
                self._apply_submission(bot.id, card_ids)

    async def _run_bot_judge(self, round_number: int, czar: Player) -> None:
        prompt_card = self.game.current_prompt_card
        submissions = [entry.cards for entry in self.game.table]
        try:
            decision = await self.agent.judge_submissions(
                czar.persona, prompt_card, submissions, self.credential
            )
        except Exception as e:
            decision = _decision_or_fallback(e, "judge_submissions")

        async with self._lock:
            self._report_warning(czar.id, decision)
            if self._is_stale(round_number, GameStatus.JUDGING, None):
                return
            self._resolve_round(decision.index)

    def _is_stale(
        self, round_number: int, status: GameStatus, player_id: Optional[str]
    ) -> bool:
        game = self.game
        reason = None
        if self._closed:
            reason = "session closed"
        elif game.round != round_number:
            reason = f"round moved to {game.round}"
        elif game.status is not status:
            reason = f"status is {game.status.value}"
        elif player_id is not None and game.has_submitted(player_id):
            reason = "seat already submitted"

        if reason is None:
            return False
        logger.debug(
            f"[{game.id}] Discarding stale agent result for round {round_number}"
            f"{' seat ' + player_id if player_id else ''}: {reason}"
        )
        return True

    def _report_warning(self, player_id: str, decision: AgentDecision) -> None:
        if decision.warning is None or self._on_agent_warning is None:
            return
        try:
            self._on_agent_warning(player_id, decision.warning)
        except Exception:
            logger.error(f"[{self.game.id}] Agent warning hook failed", exc_info=True)

    # ── Helpers ──────────────────────────────────────────────

    def _check_open(self, operation: str) -> None:
        if self._closed:
            raise InvalidStateError(
                operation, self.game.status.value, message="Session is closed"
            )

    def _emit(self, event_type: EventType, payload: dict) -> None:
        self.events.append(event_type, self.game.round, payload)

    def _spawn(self, coro: Awaitable[Any]) -> asyncio.Task:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                f"[{self.game.id}] Background task failed: {error}",
                exc_info=(type(error), error, error.__traceback__),
            )

    def _persist(self) -> None:
        if self._persist_hook is None:
            return
        snapshot = build_game_snapshot(self.game, full=True)
        try:
            result = self._persist_hook(snapshot)
        except Exception:
            logger.error(f"[{self.game.id}] Persist hook failed", exc_info=True)
            return
        if inspect.isawaitable(result):
            self._spawn(result)


def _consecutive_card_ids(hand: List[AnswerCard], start: int, count: int) -> List[str]:
    """Ids of ``count`` hand positions starting at ``start``, wrapping."""
    return [hand[(start + offset) % len(hand)].id for offset in range(count)]


def _decision_or_fallback(
    result: Union[AgentDecision, BaseException], operation: str
) -> AgentDecision:
    """Turn an agent call that raised into the index-0 fallback decision."""
    if not isinstance(result, BaseException):
        return result
    if not isinstance(result, Exception):
        raise result
    logger.error(
        f"Agent {operation} raised: {result}",
        exc_info=(type(result), result, result.__traceback__),
    )
    warning = AgentUnavailableError(
        operation=operation,
        backend="unknown",
        reason=f"{type(result).__name__}: {result}",
    )
    return AgentDecision(
        index=FALLBACK_INDEX, fallback=True, backend="unknown", warning=warning
    )
