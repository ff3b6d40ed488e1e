# Area: Shared
# PRD: docs/prd-engine.md
"""
card_czar.config — Settings models
==================================

Game rules and agent backend settings, validated with pydantic.

Agent settings come from the environment (a ``.env`` file is loaded
first if present):

    ANTHROPIC_API_KEY          operator-level hosted credential (optional)
    CARD_CZAR_HOSTED_MODEL     hosted model name
    CARD_CZAR_HOSTED_TIMEOUT   hosted call timeout, seconds
    OLLAMA_BASE_URL            local backend endpoint
    OLLAMA_MODEL               local model name
    CARD_CZAR_LOCAL_TIMEOUT    local call timeout, seconds
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError

logger = logging.getLogger("card_czar")

DEFAULT_HOSTED_MODEL = "claude-3-haiku-20240307"
DEFAULT_LOCAL_BASE_URL = "http://ollama:11434/v1"
DEFAULT_LOCAL_MODEL = "qwen2.5:3b"

# Environment variable → AgentSettings field
ENV_MAPPINGS = {
    "ANTHROPIC_API_KEY": "operator_api_key",
    "CARD_CZAR_HOSTED_MODEL": "hosted_model",
    "CARD_CZAR_HOSTED_TIMEOUT": "hosted_timeout_seconds",
    "OLLAMA_BASE_URL": "local_base_url",
    "OLLAMA_MODEL": "local_model",
    "CARD_CZAR_LOCAL_TIMEOUT": "local_timeout_seconds",
}


class GameSettings(BaseModel):
    """Per-game rules."""

    model_config = ConfigDict(frozen=True)

    max_players: int = Field(10, ge=3, le=20)
    points_to_win: int = Field(5, ge=1)
    hand_size: int = Field(10, ge=1, le=20)
    round_award: int = Field(1, ge=1)


class AgentSettings(BaseModel):
    """Reasoning backend settings shared by every agent call."""

    model_config = ConfigDict(frozen=True)

    operator_api_key: Optional[str] = None
    hosted_model: str = DEFAULT_HOSTED_MODEL
    hosted_timeout_seconds: float = Field(10.0, gt=0)
    local_base_url: str = DEFAULT_LOCAL_BASE_URL
    local_model: str = DEFAULT_LOCAL_MODEL
    local_timeout_seconds: float = Field(30.0, gt=0)
    health_timeout_seconds: float = Field(5.0, gt=0)
    temperature: float = Field(0.9, ge=0.0, le=2.0)
    max_tokens: int = Field(10, ge=1)

    @classmethod
    def from_env(
        cls, base: Optional[Dict[str, Any]] = None, **overrides: Any
    ) -> "AgentSettings":
        """
        Build settings from environment variables (after loading .env).

        Precedence, lowest first: ``base`` (e.g. a config file section),
        environment variables, keyword overrides.
        """
        load_dotenv()
        values: Dict[str, Any] = dict(base or {})
        for env_key, field_name in ENV_MAPPINGS.items():
            value = os.environ.get(env_key)
            if value:
                values[field_name] = value
        values.update(overrides)
        return build_settings(cls, values)


def build_settings(model: type, values: Dict[str, Any]) -> Any:
    """
    Validate ``values`` against a settings model.

    Raises:
        ConfigurationError: With pydantic's error list in ``details``
    """
    try:
        return model(**values)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid {model.__name__}: {e.error_count()} error(s)",
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    """
    Load a JSON config file with ``game`` and ``agent`` sections.

    Missing file means an empty config; environment variables still
    apply to the agent section through ``AgentSettings.from_env``.
    """
    config: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                config = json.load(f)
        else:
            logger.warning(f"Config file not found: {config_path}")

    config.setdefault("game", {})
    config.setdefault("agent", {})
    return config
