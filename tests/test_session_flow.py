# Area: Engine Tests
# PRD: docs/prd-engine.md
"""Tests for GameSession round flow with human seats."""

import asyncio

import pytest

from card_czar._engine.enums import EventType, GameStatus
from card_czar._engine.factory import create_game_session
from card_czar.config import GameSettings
from card_czar.errors import (
    ConfigurationError,
    InvalidSelectionError,
    InvalidStateError,
)


def make_session(agent, pack, points=5, hand_size=10, max_players=10, **kwargs):
    return create_game_session(
        settings=GameSettings(
            points_to_win=points, hand_size=hand_size, max_players=max_players
        ),
        pack=pack,
        agent=agent,
        seed=1,
        game_id="g1",
        **kwargs,
    )


async def seat_humans(session, ids):
    for player_id in ids:
        await session.add_player(player_id, player_id.upper())


async def submit_all(session):
    """Every pending seat plays its first ``pick`` cards, in seat order."""
    game = session.game
    for player in game.pending_players():
        await session.submit(player.id, [c.id for c in player.hand[:game.required_pick()]])


async def play_round(session, winner_index=0):
    await submit_all(session)
    return await session.judge(session.game.czar_id, winner_index)


class TestLobby:
    """Tests for seating and starting."""

    def test_start_needs_three_players(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack)
            await seat_humans(session, ["a", "b"])
            with pytest.raises(ConfigurationError):
                await session.start()
            assert session.status is GameStatus.LOBBY

        asyncio.run(scenario())

    def test_start_deals_first_round(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack)
            await seat_humans(session, ["a", "b", "c", "d"])
            await session.start()

            game = session.game
            assert game.status is GameStatus.PLAYING_CARDS
            assert game.round == 1
            assert game.czar_id == "a"
            assert game.current_prompt_card is not None
            assert all(len(p.hand) == 10 for p in game.players)
            all_ids = [c.id for p in game.players for c in p.hand]
            assert len(set(all_ids)) == len(all_ids)

        asyncio.run(scenario())

    def test_add_player_after_start_rejected(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack)
            await seat_humans(session, ["a", "b", "c"])
            await session.start()
            with pytest.raises(InvalidStateError):
                await session.add_player("late", "Late")

        asyncio.run(scenario())

    def test_add_player_respects_max_players(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack, max_players=3)
            await seat_humans(session, ["a", "b", "c"])
            with pytest.raises(InvalidStateError):
                await session.add_player("d", "D")

        asyncio.run(scenario())

    def test_duplicate_seat_rejected(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack)
            await session.add_player("a", "A")
            with pytest.raises(InvalidSelectionError):
                await session.add_player("a", "Again")

        asyncio.run(scenario())

    def test_bot_without_persona_rejected(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack)
            with pytest.raises(ConfigurationError):
                await session.add_player("bot", "Bot", is_bot=True)

        asyncio.run(scenario())

    def test_pick_larger_than_hand_rejected(self, scripted_agent, pack_builder):
        async def scenario():
            pack = pack_builder(pick=3)
            session = make_session(scripted_agent(), pack, hand_size=2)
            await seat_humans(session, ["a", "b", "c"])
            with pytest.raises(ConfigurationError):
                await session.start()
            assert session.status is GameStatus.LOBBY

        asyncio.run(scenario())


class TestSubmissions:
    """Tests for submit validation and the move to JUDGING."""

    def test_czar_cannot_submit(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack)
            await seat_humans(session, ["a", "b", "c"])
            await session.start()
            czar = session.game.get_czar()
            with pytest.raises(InvalidSelectionError):
                await session.submit(czar.id, [czar.hand[0].id])

        asyncio.run(scenario())

    def test_second_submission_rejected(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack)
            await seat_humans(session, ["a", "b", "c", "d"])
            await session.start()
            player = session.game.get_player("b")
            await session.submit("b", [player.hand[0].id])
            with pytest.raises(InvalidSelectionError):
                await session.submit("b", [player.hand[0].id])

        asyncio.run(scenario())

    def test_wrong_card_count_rejected(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack)
            await seat_humans(session, ["a", "b", "c"])
            await session.start()
            player = session.game.get_player("b")
            with pytest.raises(InvalidSelectionError):
                await session.submit("b", [player.hand[0].id, player.hand[1].id])
            assert len(player.hand) == 10

        asyncio.run(scenario())

    def test_card_not_in_hand_rejected(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack)
            await seat_humans(session, ["a", "b", "c"])
            await session.start()
            other = session.game.get_player("c")
            with pytest.raises(InvalidSelectionError):
                await session.submit("b", [other.hand[0].id])

        asyncio.run(scenario())

    def test_unknown_seat_rejected(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack)
            await seat_humans(session, ["a", "b", "c"])
            await session.start()
            with pytest.raises(InvalidSelectionError):
                await session.submit("ghost", ["a001"])

        asyncio.run(scenario())

    def test_judging_starts_when_all_non_czar_submitted(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack)
            await seat_humans(session, ["a", "b", "c", "d", "e"])
            await session.start()
            await submit_all(session)

            game = session.game
            assert game.status is GameStatus.JUDGING
            assert len(game.table) == len(game.players) - 1
            assert all(len(entry.cards) == 1 for entry in game.table)
            assert game.czar_id not in [entry.player_id for entry in game.table]

        asyncio.run(scenario())

    def test_pick_two_prompt_takes_two_cards(self, scripted_agent, pack_builder):
        async def scenario():
            session = make_session(scripted_agent(), pack_builder(pick=2))
            await seat_humans(session, ["a", "b", "c"])
            await session.start()
            await submit_all(session)

            game = session.game
            assert game.status is GameStatus.JUDGING
            assert all(len(entry.cards) == 2 for entry in game.table)

        asyncio.run(scenario())

    def test_table_keeps_arrival_order(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack)
            await seat_humans(session, ["a", "b", "c", "d"])
            await session.start()
            for player_id in ["d", "b", "c"]:
                player = session.game.get_player(player_id)
                await session.submit(player_id, [player.hand[0].id])
            assert [e.player_id for e in session.game.table] == ["d", "b", "c"]

        asyncio.run(scenario())


class TestJudging:
    """Tests for judge and scoring."""

    def test_cross_the_road_scenario(self, scripted_agent, pack_builder):
        """Czar A judges index 1 of [B, C, D]; C scores one point."""
        async def scenario():
            pack = pack_builder(first_prompt="Why did ___ cross the road?")
            session = make_session(scripted_agent(), pack)
            await seat_humans(session, ["a", "b", "c", "d"])
            await session.start()
            game = session.game
            assert game.current_prompt_card.text == "Why did ___ cross the road?"

            await submit_all(session)
            winner = await session.judge("a", 1)

            assert winner.id == "c"
            assert game.status is GameStatus.ROUND_ENDED
            assert game.winner_id == "c"
            assert game.scores() == {"a": 0, "b": 0, "c": 1, "d": 0}

        asyncio.run(scenario())

    def test_reaching_target_ends_game(self, scripted_agent, small_pack):
        """A seat at 4 of 5 that wins the round ends the game."""
        async def scenario():
            session = make_session(scripted_agent(), small_pack, points=5)
            await seat_humans(session, ["a", "b", "c", "d"])
            await session.start()
            game = session.game
            game.get_player("b").score = 4

            await submit_all(session)
            await session.judge("a", 0)

            assert game.get_player("b").score == 5
            assert game.status is GameStatus.GAME_OVER
            assert game.winner_id == "b"
            types = [e.type for e in session.events.events]
            assert types[-2:] == [EventType.WINNER_SELECTED, EventType.GAME_OVER]

        asyncio.run(scenario())

    def test_operations_after_game_over_raise(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack, points=1)
            await seat_humans(session, ["a", "b", "c"])
            await session.start()
            await play_round(session)
            assert session.status is GameStatus.GAME_OVER

            with pytest.raises(InvalidStateError):
                await session.start()
            with pytest.raises(InvalidStateError):
                await session.submit("b", ["a001"])
            with pytest.raises(InvalidStateError):
                await session.judge("a", 0)
            with pytest.raises(InvalidStateError):
                await session.next_round()

        asyncio.run(scenario())

    def test_non_czar_cannot_judge(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack)
            await seat_humans(session, ["a", "b", "c"])
            await session.start()
            await submit_all(session)
            with pytest.raises(InvalidSelectionError):
                await session.judge("b", 0)

        asyncio.run(scenario())

    def test_judge_index_out_of_range(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack)
            await seat_humans(session, ["a", "b", "c"])
            await session.start()
            await submit_all(session)
            with pytest.raises(InvalidSelectionError):
                await session.judge("a", 2)
            with pytest.raises(InvalidSelectionError):
                await session.judge("a", -1)
            assert session.status is GameStatus.JUDGING

        asyncio.run(scenario())

    def test_submit_into_resolved_round_raises_state_error(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack)
            await seat_humans(session, ["a", "b", "c"])
            await session.start()
            await play_round(session)
            player = session.game.get_player("b")
            with pytest.raises(InvalidStateError):
                await session.submit("b", [player.hand[0].id])

        asyncio.run(scenario())


class TestRounds:
    """Tests for dealing subsequent rounds."""

    def test_next_round_rotates_czar_and_refills(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack)
            await seat_humans(session, ["a", "b", "c"])
            await session.start()
            await play_round(session)
            await session.next_round()

            game = session.game
            assert game.round == 2
            assert game.czar_id == "b"
            assert game.status is GameStatus.PLAYING_CARDS
            assert game.table == []
            assert game.winner_id is None
            assert all(len(p.hand) == 10 for p in game.players)

        asyncio.run(scenario())

    def test_czar_rotation_visits_every_seat(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack, points=50)
            await seat_humans(session, ["a", "b", "c", "d"])
            await session.start()
            czars = []
            for _ in range(8):
                czars.append(session.game.czar_id)
                await play_round(session)
                await session.next_round()
            assert czars == ["a", "b", "c", "d", "a", "b", "c", "d"]

        asyncio.run(scenario())

    def test_exactly_one_score_increases_per_round(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack, points=50)
            await seat_humans(session, ["a", "b", "c", "d"])
            await session.start()
            game = session.game
            for round_index in range(6):
                before = game.scores()
                await play_round(session, winner_index=round_index % 3)
                after = game.scores()
                deltas = {pid: after[pid] - before[pid] for pid in before}
                assert sorted(deltas.values()) == [0, 0, 0, 1]
                assert deltas[game.winner_id] == 1
                await session.next_round()

        asyncio.run(scenario())

    def test_answer_cards_are_conserved(self, scripted_agent, small_pack):
        """Hands + table + supply always account for every answer card."""
        async def scenario():
            session = make_session(scripted_agent(), small_pack, points=50)
            await seat_humans(session, ["a", "b", "c", "d"])
            await session.start()
            game = session.game
            total = len(small_pack.answers)
            for _ in range(5):
                await submit_all(session)
                in_hands = sum(len(p.hand) for p in game.players)
                on_table = sum(len(e.cards) for e in game.table)
                assert in_hands + on_table + session.hands.answers.total == total
                await session.judge(game.czar_id, 0)
                await session.next_round()

        asyncio.run(scenario())

    def test_closed_session_rejects_operations(self, scripted_agent, small_pack):
        async def scenario():
            session = make_session(scripted_agent(), small_pack)
            await seat_humans(session, ["a", "b", "c"])
            await session.close()
            with pytest.raises(InvalidStateError):
                await session.start()

        asyncio.run(scenario())
