"""Request manager: sanitized, bounded-retry calls to the chat relay.

One ``send_message`` call validates and sanitizes the text, posts a
ChatRequest to the relay, and validates the reply shape. Failed attempts are
retried with exponential backoff when the error kind allows it:

    attempt 0 -> wait 1s -> attempt 1 -> wait 2s -> attempt 2 -> wait 4s -> attempt 3

Timeouts cancel the in-flight request and count as a failed attempt. The
last error propagates to the caller.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import TypeVar

import httpx
from pydantic import ValidationError

from orian.client.config import ClientConfig, get_client_config
from orian.client.errors import (
    ChatClientError,
    FormatError,
    InputValidationError,
    NetworkError,
    RequestTimeoutError,
    ServerError,
)
from orian.client.security import sanitize_input, validate_input
from orian.client.session import ClientSession
from orian.models.schemas import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

REQUEST_HEADERS = {
    "Content-Type": "application/json",
    "X-Requested-With": "XMLHttpRequest",
}

CONNECTION_TEST_STATUS = "healthy"


def _utc_timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _error_message(response: httpx.Response) -> str:
    """Extract the relay's ``error`` field or fall back to the status line."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and isinstance(data.get("error"), str) and data["error"]:
        return data["error"]
    return f"HTTP {response.status_code}: {response.reason_phrase}"


class RequestManager:
    """Sends chat messages to the relay with timeout and retry handling."""

    def __init__(
        self,
        session: ClientSession,
        config: ClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the request manager.

        Args:
            session: Session whose identifiers and online flag are used.
            config: Optional client configuration.
                    Loads from environment if not provided.
            client: Optional HTTP client; one is created and owned otherwise.
            sleep: Coroutine used to wait between attempts.
        """
        self._session = session
        self._config = config or get_client_config()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient()
        self._sleep = sleep

    @property
    def session(self) -> ClientSession:
        return self._session

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def aclose(self) -> None:
        """Close the HTTP client if this manager created it."""
        if self._owns_client:
            await self._client.aclose()

    def backoff_delay(self, attempt: int) -> float:
        """Delay in seconds before retrying after the given 0-based attempt."""
        return min(self._config.base_delay * 2**attempt, self._config.max_delay)

    def build_request(self, text: str) -> ChatRequest:
        """Build the wire payload for already-validated text."""
        return ChatRequest(
            message=sanitize_input(text),
            client_id=self._session.client_id,
            conversation_id=self._session.conversation_id,
            preferences=self._session.preferences(),
            timestamp=_utc_timestamp(),
        )

    async def send_message(self, raw_text: str, timeout: float | None = None) -> ChatResponse:
        """Send a user message to the relay.

        Args:
            raw_text: Text as typed by the user.
            timeout: Per-attempt deadline in seconds; defaults to the
                     configured message timeout.

        Returns:
            The validated relay reply.

        Raises:
            InputValidationError: Text is blank, too long or unsafe.
            NetworkError: Offline, or the relay could not be reached.
            RequestTimeoutError: Every permitted attempt timed out.
            ServerError: The relay answered with a non-2xx status.
            FormatError: The relay's success body had the wrong shape.
        """
        if not validate_input(raw_text):
            raise InputValidationError("Please enter a valid message.")

        if not self._session.is_online:
            raise NetworkError("No internet connection")

        payload = self.build_request(raw_text).model_dump(by_alias=True)
        deadline = timeout or self._config.message_timeout

        async def attempt() -> ChatResponse:
            response = await self._request("POST", self._config.chat_url, deadline, payload)
            return self._parse_chat_response(response)

        return await self._with_retries(attempt)

    async def check_connection(self) -> bool:
        """Probe the relay's health route.

        Returns:
            True if the relay reports itself healthy, False on any failure.
        """
        if not self._session.is_online:
            return False

        async def attempt() -> bool:
            response = await self._request(
                "GET", self._config.health_url, self._config.probe_timeout
            )
            try:
                data = response.json()
            except ValueError as e:
                raise FormatError("Invalid response from server") from e
            return isinstance(data, dict) and data.get("status") == CONNECTION_TEST_STATUS

        try:
            return await self._with_retries(attempt)
        except ChatClientError as e:
            logger.warning(f"Connection test failed: {e}")
            return False

    async def _with_retries(self, operation: Callable[[], Awaitable[T]]) -> T:
        max_retries = self._config.max_retries
        for attempt in range(max_retries + 1):
            try:
                return await operation()
            except ChatClientError as e:
                if attempt == max_retries or not e.retryable:
                    raise
                delay = self.backoff_delay(attempt)
                logger.warning(
                    f"Attempt {attempt + 1}/{max_retries + 1} failed ({e}); "
                    f"retrying in {delay:.1f}s"
                )
                await self._sleep(delay)
        raise AssertionError("unreachable")

    async def _request(
        self,
        method: str,
        url: str,
        timeout: float,
        payload: dict | None = None,
    ) -> httpx.Response:
        try:
            response = await asyncio.wait_for(
                self._client.request(
                    method,
                    url,
                    json=payload,
                    headers=REQUEST_HEADERS,
                    timeout=timeout,
                ),
                timeout,
            )
        except (TimeoutError, httpx.TimeoutException) as e:
            raise RequestTimeoutError(f"Request timed out after {timeout:g}s") from e
        except httpx.TransportError as e:
            raise NetworkError(f"Connection failed: {e}") from e

        if not response.is_success:
            raise ServerError(response.status_code, _error_message(response))
        return response

    @staticmethod
    def _parse_chat_response(response: httpx.Response) -> ChatResponse:
        try:
            data = response.json()
        except ValueError as e:
            raise FormatError("Invalid response format") from e

        if not isinstance(data, dict):
            raise FormatError("Invalid response format")

        try:
            return ChatResponse.model_validate(data)
        except ValidationError as e:
            raise FormatError("Invalid response format") from e
