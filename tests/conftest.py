# Area: Engine Tests
# PRD: docs/prd-engine.md
"""Shared fixtures: small card packs and a scripted agent client."""

import asyncio

import pytest

from card_czar._agent.client import AgentDecision
from card_czar._agent.personas import DEFAULT_PERSONAS
from card_czar._cards.cards import AnswerCard, PromptCard
from card_czar._cards.pack import CardPack
from card_czar.errors import AgentUnavailableError


def build_pack(prompt_count=6, answer_count=80, pick=1, first_prompt=None):
    """Pack with numbered cards; optionally a fixed first prompt text."""
    prompts = [
        PromptCard(id=f"p{i:03}", text=f"Prompt {i} ___", pick=pick)
        for i in range(prompt_count)
    ]
    if first_prompt is not None:
        prompts = [PromptCard(id="p-fixed", text=first_prompt, pick=pick)]
    answers = [AnswerCard(id=f"a{i:03}", text=f"Answer {i}") for i in range(answer_count)]
    return CardPack(name="test", prompts=prompts, answers=answers)


class ScriptedAgent:
    """
    Stands in for AgentDecisionClient.

    Returns fixed indices and records every call. Calls wait on ``gate``
    (an asyncio.Event) when given, then sleep ``delay`` or the persona's
    entry in ``delay_by_persona``.
    ``fail`` makes every decision a fallback with a warning attached.
    """

    def __init__(self, answer_index=0, judge_index=0, delay=0.0, fail=False,
                 gate=None, delay_by_persona=None):
        self.answer_index = answer_index
        self.judge_index = judge_index
        self.delay = delay
        self.fail = fail
        self.gate = gate
        self.delay_by_persona = delay_by_persona or {}
        self.answer_calls = []
        self.judge_calls = []

    async def _wait(self, persona):
        if self.gate is not None:
            await self.gate.wait()
        delay = self.delay_by_persona.get(persona.id, self.delay)
        if delay:
            await asyncio.sleep(delay)

    def _decision(self, operation, index):
        if self.fail:
            warning = AgentUnavailableError(operation, "fake", "scripted failure")
            return AgentDecision(index=0, fallback=True, backend="fake", warning=warning)
        return AgentDecision(index=index, fallback=False, backend="fake", raw_text=str(index))

    async def choose_answer(self, persona, hand, prompt_card, credential=None):
        self.answer_calls.append((persona.id, [c.id for c in hand], prompt_card.id, credential))
        await self._wait(persona)
        return self._decision("choose_answer", self.answer_index)

    async def judge_submissions(self, persona, prompt_card, submissions, credential=None):
        self.judge_calls.append((persona.id, prompt_card.id, len(submissions), credential))
        await self._wait(persona)
        return self._decision("judge_submissions", self.judge_index)


@pytest.fixture
def small_pack():
    return build_pack()


@pytest.fixture
def pack_builder():
    return build_pack


@pytest.fixture
def scripted_agent():
    """Factory for ScriptedAgent instances."""
    return ScriptedAgent


@pytest.fixture
def personas():
    return DEFAULT_PERSONAS
