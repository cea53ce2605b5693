"""Chat client configuration with environment variable loading."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()


class ClientConfig(BaseModel):
    """Configuration for the chat request manager.

    Attributes:
        relay_url: Base URL of the relay service.
        message_timeout: Seconds allowed for a chat request.
        probe_timeout: Seconds allowed for the connectivity probe.
        max_retries: Retries after the initial attempt.
        base_delay: Backoff delay before the first retry, in seconds.
        max_delay: Upper bound on any backoff delay, in seconds.
    """

    relay_url: str = Field(
        default_factory=lambda: os.getenv("ORIAN_RELAY_URL", "http://localhost:8000"),
        description="Relay base URL",
    )
    message_timeout: float = Field(
        default_factory=lambda: float(os.getenv("ORIAN_MESSAGE_TIMEOUT", "30")),
        gt=0,
    )
    probe_timeout: float = Field(
        default_factory=lambda: float(os.getenv("ORIAN_PROBE_TIMEOUT", "5")),
        gt=0,
    )
    max_retries: int = Field(
        default_factory=lambda: int(os.getenv("ORIAN_MAX_RETRIES", "3")),
        ge=0,
        le=10,
    )
    base_delay: float = Field(default=1.0, ge=0.0)
    max_delay: float = Field(default=10.0, ge=0.0)

    @field_validator("relay_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the relay URL so paths can be appended."""
        v = v.strip()
        if not v:
            raise ValueError("Relay URL required. Set ORIAN_RELAY_URL in .env")
        return v.rstrip("/")

    @property
    def chat_url(self) -> str:
        return f"{self.relay_url}/chat"

    @property
    def health_url(self) -> str:
        return f"{self.relay_url}/health"


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.
    """
    return ClientConfig()
