"""Tests for configuration."""

from pathlib import Path

import pytest


def test_config_defaults():
    from team_matcher.config import MatchingConfig

    config = MatchingConfig()

    assert config.provider == "groq"
    assert config.model_for() == "llama-3.1-8b-instant"
    assert config.model_for("openai") == "gpt-3.5-turbo"
    assert config.temperature == 0.7
    assert config.max_tokens == 2000
    assert config.default_duration_weeks == 12


def test_config_from_env(monkeypatch, tmp_path):
    from team_matcher.config import MatchingConfig

    db = tmp_path / "custom.db"
    monkeypatch.setenv("TEAM_MATCHER_DB", str(db))
    monkeypatch.setenv("AI_PROVIDER", " OpenAI ")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("AI_MAX_TOKENS", "1000")

    config = MatchingConfig.from_env()

    assert config.db_path == db
    assert config.provider == "openai"
    assert config.api_key_for() == "sk-test"
    assert config.api_key_for("groq") is None
    assert config.max_tokens == 1000


def test_empty_key_is_treated_as_missing(monkeypatch):
    from team_matcher.config import MatchingConfig

    monkeypatch.setenv("GROQ_API_KEY", "")

    assert MatchingConfig.from_env().api_key_for("groq") is None


def test_db_path_default(monkeypatch):
    from team_matcher.db.config import DEFAULT_DB_PATH, get_db_path

    monkeypatch.delenv("TEAM_MATCHER_DB", raising=False)

    assert get_db_path() == DEFAULT_DB_PATH
    assert DEFAULT_DB_PATH.name == "team_matcher.db"


def test_db_path_env_override(monkeypatch):
    from team_matcher.db.config import get_db_path

    monkeypatch.setenv("TEAM_MATCHER_DB", "/tmp/elsewhere.db")

    assert get_db_path() == Path("/tmp/elsewhere.db")


@pytest.mark.parametrize("var,value", [
    ("AI_TEMPERATURE", "warm"),
    ("AI_MAX_TOKENS", "lots"),
    ("DEFAULT_DURATION_WEEKS", "1.5"),
])
def test_from_env_rejects_malformed_numbers(monkeypatch, var, value):
    from team_matcher.config import MatchingConfig
    from team_matcher.orchestrator.errors import ConfigurationError

    monkeypatch.setenv(var, value)

    with pytest.raises(ConfigurationError, match=var):
        MatchingConfig.from_env()


def test_from_env_blank_number_uses_default(monkeypatch):
    from team_matcher.config import MatchingConfig

    monkeypatch.setenv("AI_TEMPERATURE", "  ")

    assert MatchingConfig.from_env().temperature == 0.7
