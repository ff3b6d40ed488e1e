# Area: Engine
# PRD: docs/prd-engine.md
"""
card_czar._engine.state_machine — Round state machine
=====================================================

Table-driven status transitions for one game. The machine only answers
"is this legal" and moves the status; dealing, scoring and events live in
the session.
"""

import logging

from .enums import GameStatus, GameTrigger
from ..errors import InvalidStateError

logger = logging.getLogger("card_czar.engine.state_machine")


# Valid transitions: {current_status: {trigger: next_status}}
TRANSITIONS = {
    GameStatus.LOBBY: {
        GameTrigger.START: GameStatus.PLAYING_CARDS,
    },
    GameStatus.PLAYING_CARDS: {
        GameTrigger.ALL_SUBMITTED: GameStatus.JUDGING,
    },
    GameStatus.JUDGING: {
        GameTrigger.WINNER_CHOSEN: GameStatus.ROUND_ENDED,
    },
    GameStatus.ROUND_ENDED: {
        GameTrigger.NEXT_ROUND: GameStatus.PLAYING_CARDS,
        GameTrigger.TARGET_REACHED: GameStatus.GAME_OVER,
    },
    GameStatus.GAME_OVER: {},
}

# Status a caller-facing operation requires
OPERATION_STATUS = {
    "add_player": GameStatus.LOBBY,
    "start": GameStatus.LOBBY,
    "submit": GameStatus.PLAYING_CARDS,
    "judge": GameStatus.JUDGING,
    "next_round": GameStatus.ROUND_ENDED,
}


class GameStateMachine:
    """
    Status tracker for one game.

    Attributes:
        game_id: Owning game, for log lines
        current_status: The current status
    """

    def __init__(self, game_id: str, status: GameStatus = GameStatus.LOBBY):
        self.game_id = game_id
        self.current_status = status

    @property
    def is_terminal(self) -> bool:
        return self.current_status is GameStatus.GAME_OVER

    def can_transition(self, trigger: GameTrigger) -> bool:
        return trigger in TRANSITIONS.get(self.current_status, {})

    def require(self, operation: str) -> None:
        """
        Check that ``operation`` is legal in the current status.

        Raises:
            InvalidStateError: If the status does not match
        """
        required = OPERATION_STATUS[operation]
        if self.current_status is not required:
            raise InvalidStateError(operation, self.current_status.value)

    def transition(self, trigger: GameTrigger) -> GameStatus:
        """
        Execute a status transition.

        Raises:
            InvalidStateError: If the trigger is not valid from the current status
        """
        if not self.can_transition(trigger):
            raise InvalidStateError(
                trigger.value.lower(),
                self.current_status.value,
                message=(
                    f"Invalid transition: {trigger.value} "
                    f"from {self.current_status.value}"
                ),
            )

        next_status = TRANSITIONS[self.current_status][trigger]
        logger.info(
            f"[{self.game_id}] Status: {self.current_status.value} → {next_status.value}"
        )
        self.current_status = next_status
        return next_status
