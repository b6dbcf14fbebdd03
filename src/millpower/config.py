"""
Runtime settings for the optional assistant services.

Read from the environment after loading a .env file, if present:

    GEMINI_API_KEY              API key for the Gemini REST API
    MILLPOWER_GEMINI_BASE_URL   Models endpoint
    MILLPOWER_LLM_MODEL         Model used for the parameter analysis
    MILLPOWER_TTS_MODEL         Model used for speech synthesis
    MILLPOWER_TIMEOUT_S         Per-request timeout in seconds
    MILLPOWER_RETRY_ATTEMPTS    Attempts per request, including the first
    MILLPOWER_SPEECH_LANGUAGE   Language tag for synthesized speech

The calculator itself needs no configuration.
"""

import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/"


class Settings(BaseModel):
    """Assistant service settings."""
    model_config = ConfigDict(frozen=True)

    gemini_api_key: str = ""
    gemini_base_url: str = GEMINI_API_URL
    llm_model: str = "gemini-1.5-flash-latest"
    tts_model: str = "text-to-speech"
    timeout_s: float = Field(default=30.0, gt=0)

    # Retry budget: delay = base * 2^attempt + uniform(0, jitter)
    retry_attempts: int = Field(default=3, ge=1)
    retry_base_delay_s: float = Field(default=1.0, ge=0)
    retry_jitter_s: float = Field(default=1.0, ge=0)

    speech_language: str = "pt-BR"
    summary_language: str = "Portuguese"

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> "Settings":
        """Build settings from environment variables (and .env, without overriding)."""
        load_dotenv(env_file)

        values = {
            'gemini_api_key': os.getenv("GEMINI_API_KEY", "").strip(),
            'gemini_base_url': os.getenv("MILLPOWER_GEMINI_BASE_URL"),
            'llm_model': os.getenv("MILLPOWER_LLM_MODEL"),
            'tts_model': os.getenv("MILLPOWER_TTS_MODEL"),
            'timeout_s': os.getenv("MILLPOWER_TIMEOUT_S"),
            'retry_attempts': os.getenv("MILLPOWER_RETRY_ATTEMPTS"),
            'speech_language': os.getenv("MILLPOWER_SPEECH_LANGUAGE"),
        }
        return cls(**{k: v for k, v in values.items() if v is not None})
