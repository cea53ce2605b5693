"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - client_config: Client configuration pointing at a fake relay host
    - client_session: Session with predictable identifiers
    - recorded_sleep: Backoff sleep replacement that records delays
    - fake_relay: Relay service stand-in with a scripted reply
    - relay_app: Fresh FastAPI app whose relay service is the fake
    - async_client: HTTPX client bound to relay_app via ASGITransport

Helpers:
    - FakeView: ChatView that records what the controller showed
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from orian.api.app import create_app
from orian.client.config import ClientConfig
from orian.client.session import ClientSession
from orian.models.schemas import ConnectionStatus, RenderedMessage
from orian.relay.errors import UpstreamError
from orian.relay.service import get_relay_service

RELAY_URL = "http://relay.test"


class RecordedSleep:
    """Async sleep replacement that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class FakeRelayService:
    """Relay service stand-in with a scripted reply or failure."""

    def __init__(self, reply: str = "Greetings, traveler.") -> None:
        self.reply = reply
        self.error: str | None = None
        self.messages: list[str | None] = []

    async def handle(self, message: str | None) -> str:
        self.messages.append(message)
        if self.error is not None:
            raise UpstreamError(self.error)
        return self.reply


class FakeView:
    """ChatView that records what the controller asked it to show."""

    def __init__(self) -> None:
        self.messages: list[RenderedMessage] = []
        self.events: list[str] = []
        self.errors: list[tuple[str, str | None]] = []
        self.follow_ups: list[list[str]] = []
        self.statuses: list[tuple[ConnectionStatus, str]] = []
        self.submit_enabled = True
        self.typing = False

    def add_message(self, message: RenderedMessage) -> None:
        self.messages.append(message)

    def clear_messages(self) -> None:
        self.messages.clear()
        self.events.append("clear")

    def show_typing(self) -> None:
        self.typing = True
        self.events.append("typing")

    def hide_typing(self) -> None:
        self.typing = False

    def show_error(self, text: str, retry_text: str | None = None) -> None:
        self.errors.append((text, retry_text))

    def hide_error(self) -> None:
        self.events.append("hide_error")

    def show_follow_ups(self, questions: list[str]) -> None:
        self.follow_ups.append(questions)

    def set_connection_status(self, status: ConnectionStatus, text: str) -> None:
        self.statuses.append((status, text))

    def set_submit_enabled(self, enabled: bool) -> None:
        self.submit_enabled = enabled

    def fade_out_hero(self) -> None:
        self.events.append("fade_hero")

    def reset_hero(self) -> None:
        self.events.append("reset_hero")


@pytest.fixture
def client_config() -> ClientConfig:
    """Client configuration with production retry settings."""
    return ClientConfig(
        relay_url=RELAY_URL,
        message_timeout=30.0,
        probe_timeout=5.0,
        max_retries=3,
    )


@pytest.fixture
def client_session() -> ClientSession:
    """Session with predictable identifiers for payload assertions."""
    return ClientSession(client_id="client_test", conversation_id="conv_test")


@pytest.fixture
def recorded_sleep() -> RecordedSleep:
    return RecordedSleep()


@pytest.fixture
def fake_relay() -> FakeRelayService:
    return FakeRelayService()


@pytest.fixture
def relay_app(fake_relay: FakeRelayService) -> FastAPI:
    """Create a relay app that uses the fake relay service.

    Returns:
        FastAPI application with dependency override applied.
    """
    application = create_app()
    application.dependency_overrides[get_relay_service] = lambda: fake_relay
    return application


@pytest.fixture
async def async_client(relay_app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for relay testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=relay_app)
    async with AsyncClient(transport=transport, base_url=RELAY_URL) as client:
        yield client
