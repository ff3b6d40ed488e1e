# Area: Agent
# PRD: docs/prd-engine.md
"""
Agent - Decision pipeline for bot seats.

This package contains:
- Personas (behavioural seeds)
- Hosted and local reasoning backends
- Backend selection policy
- Prompt building and reply parsing
- The decision client with timeout and fallback
"""

from .backends import (
    BackendKind,
    BackendReply,
    BackendRequest,
    HostedBackend,
    LocalBackend,
    ReasoningBackend,
)
from .client import AgentDecision, AgentDecisionClient
from .codec import (
    ParsedIndex,
    build_judging_prompt,
    build_selection_prompt,
    parse_index,
)
from .personas import DEFAULT_PERSONAS, PERSONAS_BY_ID, Persona
from .selection import resolve_kind, select_backend

__all__ = [
    "AgentDecision",
    "AgentDecisionClient",
    "BackendKind",
    "BackendReply",
    "BackendRequest",
    "DEFAULT_PERSONAS",
    "HostedBackend",
    "LocalBackend",
    "PERSONAS_BY_ID",
    "ParsedIndex",
    "Persona",
    "ReasoningBackend",
    "build_judging_prompt",
    "build_selection_prompt",
    "parse_index",
    "resolve_kind",
    "select_backend",
]
