"""Completion relay: one chat-completion call per incoming message.

The relay is stateless. Each invocation reads its configuration, builds a
two-message transcript (persona + user message), performs exactly one
upstream call, and returns the first choice's text. There is no retry and no
caching here; resilience lives in the client's request manager.
"""

import logging

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from orian.relay.config import DEFAULT_USER_MESSAGE, RelayConfig, get_relay_config
from orian.relay.errors import UpstreamError

logger = logging.getLogger(__name__)


class RelayService:
    """Forwards a single user message to the completion API."""

    def __init__(
        self,
        config: RelayConfig | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        """Initialize the relay service.

        Args:
            config: Optional relay configuration.
                    Loads from environment if not provided.
            client: Optional preconfigured OpenAI client.
        """
        self._config = config or get_relay_config()
        self._client = client or self._create_client()

    def _create_client(self) -> AsyncOpenAI:
        return AsyncOpenAI(
            api_key=self._config.api_key,
            base_url=self._config.base_url,
        )

    def build_messages(self, message: str | None) -> list[dict[str, str]]:
        """Build the persona + user transcript.

        Missing or empty messages fall back to a default greeting; anything
        else, whitespace included, is passed through unmodified.
        """
        user_message = message if message else DEFAULT_USER_MESSAGE
        return [
            {"role": "system", "content": self._config.system_prompt},
            {"role": "user", "content": user_message},
        ]

    async def handle(self, message: str | None) -> str:
        """Get the generated reply for a message.

        Args:
            message: The user's message, possibly missing.

        Returns:
            Text of the first completion choice.

        Raises:
            UpstreamError: If the completion call fails or returns no text.
        """
        try:
            completion = await self._client.chat.completions.create(
                model=self._config.model_name,
                messages=self.build_messages(message),
                temperature=self._config.temperature,
                max_tokens=self._config.max_tokens,
            )
        except OpenAIError as e:
            raise UpstreamError(str(e)) from e

        if not completion.choices:
            raise UpstreamError("Completion returned no choices")

        choice = completion.choices[0]
        content = choice.message.content if choice.message is not None else None
        if content is None:
            raise UpstreamError("Completion returned no content")
        return content


def get_relay_service() -> RelayService:
    """Build a relay service for the current invocation.

    Configuration is read per call so credential changes apply without a
    restart.

    Returns:
        A fresh RelayService.

    Raises:
        UpstreamError: If the configuration is missing or invalid.
    """
    try:
        config = get_relay_config()
    except ValidationError as e:
        logger.error(f"Relay configuration invalid: {e}")
        raise UpstreamError("Completion service is not configured") from e
    return RelayService(config=config)
