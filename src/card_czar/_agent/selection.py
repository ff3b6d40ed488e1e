# Area: Agent
# PRD: docs/prd-engine.md
"""
card_czar._agent.selection — Backend selection policy
=====================================================

Evaluated on every agent call:

1. A per-user credential selects the hosted backend.
2. Otherwise an operator-level credential (settings) selects it.
3. Otherwise the local backend is used, with its longer timeout.
"""

from __future__ import annotations

from typing import Optional

from .backends import BackendKind, HostedBackend, LocalBackend, ReasoningBackend
from ..config import AgentSettings


def resolve_kind(credential: Optional[str], settings: AgentSettings) -> BackendKind:
    """Decide which backend a call with this credential should use."""
    if credential or settings.operator_api_key:
        return BackendKind.HOSTED
    return BackendKind.LOCAL


def select_backend(credential: Optional[str], settings: AgentSettings) -> ReasoningBackend:
    """Build the backend for one call."""
    if resolve_kind(credential, settings) is BackendKind.HOSTED:
        return HostedBackend(
            api_key=credential or settings.operator_api_key,
            model=settings.hosted_model,
            timeout_seconds=settings.hosted_timeout_seconds,
        )
    return LocalBackend(
        base_url=settings.local_base_url,
        model=settings.local_model,
        timeout_seconds=settings.local_timeout_seconds,
    )
