"""
Tests for assistant settings loaded from the environment.
"""

import pytest
from pydantic import ValidationError

from millpower.config import GEMINI_API_URL, Settings

ENV_VARS = (
    "GEMINI_API_KEY",
    "MILLPOWER_GEMINI_BASE_URL",
    "MILLPOWER_LLM_MODEL",
    "MILLPOWER_TTS_MODEL",
    "MILLPOWER_TIMEOUT_S",
    "MILLPOWER_RETRY_ATTEMPTS",
    "MILLPOWER_SPEECH_LANGUAGE",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Point at an empty file so no stray .env is picked up
    env_file = tmp_path / ".env"
    env_file.write_text("")
    return env_file


class TestSettings:

    def test_defaults(self):
        settings = Settings()
        assert settings.gemini_api_key == ""
        assert settings.gemini_base_url == GEMINI_API_URL
        assert settings.retry_attempts == 3
        assert settings.speech_language == "pt-BR"

    def test_frozen(self):
        with pytest.raises(ValidationError):
            Settings().retry_attempts = 5

    def test_retry_attempts_at_least_one(self):
        with pytest.raises(ValidationError):
            Settings(retry_attempts=0)


class TestFromEnv:

    def test_empty_environment(self, clean_env):
        assert Settings.from_env(clean_env) == Settings()

    def test_reads_variables(self, clean_env, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "  abc123  ")
        monkeypatch.setenv("MILLPOWER_LLM_MODEL", "gemini-2.0-flash")
        monkeypatch.setenv("MILLPOWER_TIMEOUT_S", "12.5")
        monkeypatch.setenv("MILLPOWER_RETRY_ATTEMPTS", "5")

        settings = Settings.from_env(clean_env)
        assert settings.gemini_api_key == "abc123"
        assert settings.llm_model == "gemini-2.0-flash"
        assert settings.timeout_s == 12.5
        assert settings.retry_attempts == 5

    def test_reads_env_file(self, clean_env):
        # load_dotenv writes into os.environ; clean_env restores it afterwards
        clean_env.write_text("GEMINI_API_KEY=from-file\nMILLPOWER_SPEECH_LANGUAGE=en-US\n")
        settings = Settings.from_env(clean_env)
        assert settings.gemini_api_key == "from-file"
        assert settings.speech_language == "en-US"

    def test_environment_wins_over_file(self, clean_env, monkeypatch):
        clean_env.write_text("GEMINI_API_KEY=from-file\n")
        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        assert Settings.from_env(clean_env).gemini_api_key == "from-env"

    def test_invalid_value(self, clean_env, monkeypatch):
        monkeypatch.setenv("MILLPOWER_RETRY_ATTEMPTS", "0")
        with pytest.raises(ValidationError):
            Settings.from_env(clean_env)
