# Area: Agent
# PRD: docs/prd-engine.md
"""
card_czar._agent.client — Agent decision client
===============================================

Turns a persona plus a game situation into an index, via a reasoning
backend. Each call:

1. Selects a backend for the credential (hosted or local)
2. Builds the prompt with the codec
3. Awaits the backend under its timeout
4. Parses the reply into a bounded index

Any failure in steps 1, 3 and 4 resolves to index 0 with an
AgentUnavailableError attached as a warning. Nothing here raises to the
engine except cancellation.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .backends import BackendRequest, ReasoningBackend
from .codec import (
    FALLBACK_INDEX,
    build_judging_prompt,
    build_selection_prompt,
    parse_index,
)
from .personas import Persona
from .selection import select_backend
from .._cards.cards import AnswerCard, PromptCard
from ..config import AgentSettings
from ..errors import AgentUnavailableError

logger = logging.getLogger("card_czar.agent")

BackendFactory = Callable[[Optional[str], AgentSettings], ReasoningBackend]


@dataclass(frozen=True)
class AgentDecision:
    """
    Outcome of one agent call.

    Attributes:
        index: Chosen index, always within bounds
        fallback: True when index 0 was used because the call failed
        backend: Name of the backend that was asked
        raw_text: Raw reply text (empty when the call failed)
        warning: The failure, when ``fallback`` is True
    """

    index: int
    fallback: bool
    backend: str
    raw_text: str = ""
    warning: Optional[AgentUnavailableError] = None


class AgentDecisionClient:
    """
    Asks reasoning backends to pick answer cards and judge rounds.

    Args:
        settings: Backend settings (models, endpoints, timeouts)
        backend_factory: Builds the backend for a credential; replaced in tests
    """

    def __init__(
        self,
        settings: Optional[AgentSettings] = None,
        backend_factory: BackendFactory = select_backend,
    ):
        self.settings = settings or AgentSettings()
        self._backend_factory = backend_factory

    async def choose_answer(
        self,
        persona: Persona,
        hand: Sequence[AnswerCard],
        prompt_card: PromptCard,
        credential: Optional[str] = None,
    ) -> AgentDecision:
        """Pick an index into ``hand`` for ``prompt_card``."""
        prompt = build_selection_prompt(hand, prompt_card)
        return await self._decide(
            "choose_answer", persona, prompt, len(hand), credential
        )

    async def judge_submissions(
        self,
        persona: Persona,
        prompt_card: PromptCard,
        submissions: Sequence[Sequence[AnswerCard]],
        credential: Optional[str] = None,
    ) -> AgentDecision:
        """Pick an index into ``submissions`` (table order)."""
        prompt = build_judging_prompt(prompt_card, submissions)
        return await self._decide(
            "judge_submissions", persona, prompt, len(submissions), credential
        )

    async def validate(self, credential: str) -> bool:
        """Check a hosted credential with a minimal authenticated request."""
        if not credential:
            return False
        backend = self._backend_factory(credential, self.settings)
        try:
            await asyncio.wait_for(backend.ping(), timeout=backend.timeout_seconds)
            return True
        except asyncio.TimeoutError:
            logger.warning("Credential validation timed out")
            return False
        except Exception as e:
            logger.warning(f"Credential validation failed: {e}")
            return False
        finally:
            await self._close_backend(backend)

    async def check_local_health(self) -> bool:
        """Return True if the local backend answers within the health timeout."""
        backend = self._backend_factory(None, self.settings.model_copy(
            update={"operator_api_key": None}
        ))
        try:
            await asyncio.wait_for(
                backend.ping(), timeout=self.settings.health_timeout_seconds
            )
            return True
        except asyncio.TimeoutError:
            logger.info("Local backend health check timed out")
            return False
        except Exception as e:
            logger.info(f"Local backend health check failed: {e}")
            return False
        finally:
            await self._close_backend(backend)

    # ── Internal ──────────────────────────────────────────────

    async def _decide(
        self,
        operation: str,
        persona: Persona,
        user_prompt: str,
        bound: int,
        credential: Optional[str],
    ) -> AgentDecision:
        try:
            backend = self._backend_factory(credential, self.settings)
        except Exception as e:
            logger.debug(f"[AGENT] {operation} backend construction failed", exc_info=True)
            warning = AgentUnavailableError(
                operation=operation,
                backend="unavailable",
                reason=f"{type(e).__name__}: {e}",
            )
            return self._fallback(warning)

        request = BackendRequest(
            system_prompt=persona.system_prompt,
            user_prompt=user_prompt,
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_tokens,
        )
        logger.debug(
            f"[AGENT] {operation} for persona={persona.id} "
            f"backend={backend.name} bound={bound}"
        )

        try:
            reply = await asyncio.wait_for(
                backend.complete(request), timeout=backend.timeout_seconds
            )
        except asyncio.TimeoutError:
            warning = AgentUnavailableError(
                operation=operation,
                backend=backend.name,
                reason="timed out",
                timeout_seconds=backend.timeout_seconds,
            )
            return self._fallback(warning)
        except Exception as e:
            logger.debug(f"[AGENT] {operation} raised", exc_info=True)
            warning = AgentUnavailableError(
                operation=operation,
                backend=backend.name,
                reason=f"{type(e).__name__}: {e}",
            )
            return self._fallback(warning)
        finally:
            await self._close_backend(backend)

        parsed = parse_index(reply.text, bound)
        if parsed.is_fallback:
            warning = AgentUnavailableError(
                operation=operation,
                backend=backend.name,
                reason=f"no valid index in [0, {bound}) in reply",
                raw_text=parsed.raw_text,
            )
            return self._fallback(warning, raw_text=parsed.raw_text)

        logger.debug(f"[AGENT] {operation} -> {parsed.index} ({backend.name})")
        return AgentDecision(
            index=parsed.index,
            fallback=False,
            backend=backend.name,
            raw_text=parsed.raw_text,
        )

    async def _close_backend(self, backend: ReasoningBackend) -> None:
        """Release a backend's HTTP client; failures are logged only."""
        try:
            await backend.aclose()
        except Exception as e:
            logger.warning(f"[AGENT] Closing {backend.name} backend failed: {e}")

    def _fallback(
        self, warning: AgentUnavailableError, raw_text: str = ""
    ) -> AgentDecision:
        logger.warning(warning.message)
        logger.debug(warning.format_error_log())
        return AgentDecision(
            index=FALLBACK_INDEX,
            fallback=True,
            backend=warning.backend,
            raw_text=raw_text,
            warning=warning,
        )
