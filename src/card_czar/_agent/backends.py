# Area: Agent
# PRD: docs/prd-engine.md
"""
card_czar._agent.backends — Reasoning backend abstraction
=========================================================

Two backends behind one request/response shape:

  - HOSTED: Anthropic Messages API, scoped to an API key
  - LOCAL:  Ollama through its OpenAI-compatible endpoint (no key)

Callers build a BackendRequest and get a BackendReply back; nothing above
this module knows which backend answered beyond the reply's ``backend``
label used for logging.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

logger = logging.getLogger("card_czar.agent.backends")

# Ollama ignores the key but the OpenAI SDK requires one
LOCAL_PLACEHOLDER_KEY = "ollama"


class BackendKind(Enum):
    """The closed set of reasoning backends."""
    HOSTED = "hosted"
    LOCAL = "local"


@dataclass(frozen=True)
class BackendRequest:
    """One prompt sent to a backend."""
    system_prompt: str
    user_prompt: str
    temperature: float = 0.9
    max_tokens: int = 10


@dataclass(frozen=True)
class BackendReply:
    """Raw text returned by a backend."""
    text: str
    backend: str
    model: str


class ReasoningBackend(ABC):
    """Abstract base for reasoning backends."""

    kind: BackendKind

    def __init__(self, model: str, timeout_seconds: float):
        self.model = model
        self.timeout_seconds = timeout_seconds

    @property
    def name(self) -> str:
        return self.kind.value

    @abstractmethod
    async def complete(self, request: BackendRequest) -> BackendReply:
        """Send one request. Raises on transport or API errors."""
        ...

    @abstractmethod
    async def ping(self) -> None:
        """Make a minimal authenticated request. Raises if unusable."""
        ...

    @abstractmethod
    async def aclose(self) -> None:
        """Release the underlying HTTP client."""
        ...


class HostedBackend(ReasoningBackend):
    """Anthropic Messages API backend."""

    kind = BackendKind.HOSTED

    def __init__(self, api_key: str, model: str, timeout_seconds: float):
        super().__init__(model, timeout_seconds)
        self._client = AsyncAnthropic(
            api_key=api_key, timeout=timeout_seconds, max_retries=0,
        )

    async def complete(self, request: BackendRequest) -> BackendReply:
        response = await self._client.messages.create(
            model=self.model,
            max_tokens=request.max_tokens,
            temperature=request.temperature,
            system=request.system_prompt,
            messages=[{"role": "user", "content": request.user_prompt}],
        )
        text = ""
        if response.content and len(response.content) > 0:
            text = getattr(response.content[0], "text", "") or ""
        return BackendReply(text=text, backend=self.name, model=self.model)

    async def ping(self) -> None:
        await self._client.models.list()

    async def aclose(self) -> None:
        await self._client.close()


class LocalBackend(ReasoningBackend):
    """Ollama backend spoken to through the OpenAI chat completions API."""

    kind = BackendKind.LOCAL

    def __init__(self, base_url: str, model: str, timeout_seconds: float):
        super().__init__(model, timeout_seconds)
        self.base_url = base_url
        self._client = AsyncOpenAI(
            base_url=base_url,
            api_key=LOCAL_PLACEHOLDER_KEY,
            timeout=timeout_seconds,
            max_retries=0,
        )

    async def complete(self, request: BackendRequest) -> BackendReply:
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": request.system_prompt},
                {"role": "user", "content": request.user_prompt},
            ],
            temperature=request.temperature,
            max_tokens=request.max_tokens,
        )
        text = ""
        if response.choices:
            text = response.choices[0].message.content or ""
        return BackendReply(text=text, backend=self.name, model=self.model)

    async def ping(self) -> None:
        await self._client.models.list()

    async def aclose(self) -> None:
        await self._client.close()
