"""Settings for the King Orian completion relay.

The persona prompt and the fallback greeting are fixed; credentials, endpoint
and model come from the environment on every invocation.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()

SYSTEM_PROMPT = "You are King Orian, a mythic advisor. Speak with depth, clarity, and power."
DEFAULT_USER_MESSAGE = "Hello, who are you?"


def _env_api_key() -> str:
    return os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY", "")


class RelayConfig(BaseModel):
    """Completion settings for one relay invocation.

    Attributes:
        api_key: Credential for the completion provider.
        base_url: Override for an OpenAI-compatible endpoint.
        model_name: Completion model.
        temperature: Sampling temperature sent with each call.
        max_tokens: Reply length cap sent with each call.
        system_prompt: King Orian persona, sent ahead of the user message.
    """

    api_key: str = Field(default_factory=_env_api_key)
    base_url: str | None = Field(default_factory=lambda: os.getenv("LLM_BASE_URL") or None)
    model_name: str = Field(default_factory=lambda: os.getenv("LLM_MODEL", "gpt-3.5-turbo"))
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=1024, ge=1)
    system_prompt: str = Field(default=SYSTEM_PROMPT, min_length=1)

    @field_validator("api_key")
    @classmethod
    def require_api_key(cls, v: str) -> str:
        """Reject a missing credential so the relay fails before calling out."""
        key = v.strip()
        if not key:
            raise ValueError("API key required. Set LLM_API_KEY or OPENAI_API_KEY")
        return key


def get_relay_config() -> RelayConfig:
    """Read relay settings from the environment.

    Raises:
        pydantic.ValidationError: If no API key is set.
    """
    return RelayConfig()
