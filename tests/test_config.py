# Area: Shared Tests
# PRD: docs/prd-engine.md
"""Tests for card_czar.config — settings models and config loading."""

import json
import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from card_czar.config import AgentSettings, GameSettings, build_settings, load_config
from card_czar.errors import ConfigurationError


class TestGameSettings:
    """Tests for GameSettings defaults and bounds."""

    def test_defaults(self):
        settings = GameSettings()
        assert settings.max_players == 10
        assert settings.points_to_win == 5
        assert settings.hand_size == 10
        assert settings.round_award == 1

    def test_bounds_rejected_as_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            build_settings(GameSettings, {"max_players": 2})
        assert exc_info.value.details["errors"]

    def test_max_players_upper_bound(self):
        with pytest.raises(ConfigurationError):
            build_settings(GameSettings, {"max_players": 21})

    def test_frozen(self):
        settings = GameSettings()
        with pytest.raises(ValidationError):
            settings.points_to_win = 9


class TestAgentSettings:
    """Tests for AgentSettings and environment loading."""

    def test_defaults(self):
        settings = AgentSettings()
        assert settings.operator_api_key is None
        assert settings.hosted_timeout_seconds == 10.0
        assert settings.local_base_url == "http://ollama:11434/v1"
        assert settings.local_model == "qwen2.5:3b"
        assert settings.local_timeout_seconds == 30.0
        assert settings.temperature == 0.9
        assert settings.max_tokens == 10

    @patch("card_czar.config.load_dotenv")
    def test_from_env_reads_mapped_variables(self, mock_dotenv):
        env = {
            "ANTHROPIC_API_KEY": "sk-operator",
            "OLLAMA_MODEL": "llama3",
            "CARD_CZAR_LOCAL_TIMEOUT": "45",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = AgentSettings.from_env()

        mock_dotenv.assert_called_once()
        assert settings.operator_api_key == "sk-operator"
        assert settings.local_model == "llama3"
        assert settings.local_timeout_seconds == 45.0

    @patch("card_czar.config.load_dotenv")
    def test_precedence_base_then_env_then_overrides(self, mock_dotenv):
        with patch.dict(os.environ, {"OLLAMA_MODEL": "from-env"}, clear=True):
            settings = AgentSettings.from_env(
                base={"local_model": "from-file", "hosted_model": "file-hosted"},
                hosted_timeout_seconds=3,
            )
        assert settings.local_model == "from-env"
        assert settings.hosted_model == "file-hosted"
        assert settings.hosted_timeout_seconds == 3.0

    @patch("card_czar.config.load_dotenv")
    def test_invalid_env_value_raises(self, mock_dotenv):
        with patch.dict(os.environ, {"CARD_CZAR_HOSTED_TIMEOUT": "soon"}, clear=True):
            with pytest.raises(ConfigurationError):
                AgentSettings.from_env()


class TestLoadConfig:
    """Tests for load_config."""

    def test_no_path_gives_empty_sections(self):
        assert load_config(None) == {"game": {}, "agent": {}}

    def test_missing_file_gives_empty_sections(self, tmp_path):
        assert load_config(str(tmp_path / "nope.json")) == {"game": {}, "agent": {}}

    def test_reads_sections(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"game": {"points_to_win": 3}}))
        config = load_config(str(path))
        assert config["game"] == {"points_to_win": 3}
        assert config["agent"] == {}
