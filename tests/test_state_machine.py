# Area: Engine Tests
# PRD: docs/prd-engine.md
"""Tests for the round state machine."""

import pytest

from card_czar._engine.enums import GameStatus, GameTrigger
from card_czar._engine.state_machine import TRANSITIONS, GameStateMachine
from card_czar.errors import InvalidStateError


class TestGameStateMachineBase:
    """Tests for basic state machine functionality."""

    def test_initial_status_is_lobby(self):
        sm = GameStateMachine("g1")
        assert sm.current_status == GameStatus.LOBBY

    def test_can_transition_returns_true_for_valid(self):
        sm = GameStateMachine("g1")
        assert sm.can_transition(GameTrigger.START) is True

    def test_can_transition_returns_false_for_invalid(self):
        sm = GameStateMachine("g1")
        assert sm.can_transition(GameTrigger.WINNER_CHOSEN) is False

    def test_transition_raises_on_invalid(self):
        sm = GameStateMachine("g1")
        with pytest.raises(InvalidStateError):
            sm.transition(GameTrigger.ALL_SUBMITTED)


class TestGameStateMachineTransitions:
    """Tests for specific transitions."""

    def test_full_round_cycle(self):
        sm = GameStateMachine("g1")

        sm.transition(GameTrigger.START)
        assert sm.current_status == GameStatus.PLAYING_CARDS

        sm.transition(GameTrigger.ALL_SUBMITTED)
        assert sm.current_status == GameStatus.JUDGING

        sm.transition(GameTrigger.WINNER_CHOSEN)
        assert sm.current_status == GameStatus.ROUND_ENDED

        sm.transition(GameTrigger.NEXT_ROUND)
        assert sm.current_status == GameStatus.PLAYING_CARDS

    def test_target_reached_is_terminal(self):
        sm = GameStateMachine("g1", status=GameStatus.ROUND_ENDED)
        sm.transition(GameTrigger.TARGET_REACHED)

        assert sm.current_status == GameStatus.GAME_OVER
        assert sm.is_terminal is True
        for trigger in GameTrigger:
            assert sm.can_transition(trigger) is False

    def test_every_status_has_a_row(self):
        assert set(TRANSITIONS) == set(GameStatus)


class TestRequire:
    """Tests for operation guards."""

    def test_require_passes_in_matching_status(self):
        sm = GameStateMachine("g1", status=GameStatus.JUDGING)
        sm.require("judge")

    def test_require_raises_with_operation_and_status(self):
        sm = GameStateMachine("g1", status=GameStatus.GAME_OVER)
        with pytest.raises(InvalidStateError) as exc_info:
            sm.require("submit")
        assert exc_info.value.operation == "submit"
        assert exc_info.value.status == "GAME_OVER"
