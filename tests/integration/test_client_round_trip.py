"""Integration tests for the chat client talking to the real relay app.

The request manager's HTTP client is bound to the FastAPI app through
ASGITransport, so requests travel through routing, validation and error
handlers exactly as in production.
"""

import json
from datetime import datetime

import pytest
import pytest_check as check
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from orian.client.config import ClientConfig
from orian.client.controller import ChatController
from orian.client.errors import ServerError
from orian.client.request_manager import RequestManager
from orian.client.session import ClientSession
from orian.models.schemas import RelayRequest
from tests.conftest import FakeRelayService, FakeView, RecordedSleep


@pytest.fixture
async def manager(
    relay_app: FastAPI,
    client_session: ClientSession,
    client_config: ClientConfig,
    recorded_sleep: RecordedSleep,
) -> RequestManager:
    transport = ASGITransport(app=relay_app)
    async with AsyncClient(transport=transport) as client:
        yield RequestManager(
            client_session, config=client_config, client=client, sleep=recorded_sleep
        )


class TestRoundTrip:
    """End-to-end submissions through the relay app."""

    async def test_reply_is_rendered_verbatim(
        self,
        manager: RequestManager,
        fake_relay: FakeRelayService,
        recorded_sleep: RecordedSleep,
    ) -> None:
        """One submission renders the relay's exact text with no retries."""
        view = FakeView()
        controller = ChatController(manager, view, clock=lambda: datetime(2026, 10, 18, 9, 0))

        await controller.handle_submit("Who are you?")

        check.equal(view.messages[-1].content, "Greetings, traveler.")
        check.equal(fake_relay.messages, ["Who are you?"])
        check.equal(recorded_sleep.delays, [])
        check.equal(view.errors, [])

    async def test_upstream_failure_is_retried_then_reported(
        self,
        manager: RequestManager,
        fake_relay: FakeRelayService,
        recorded_sleep: RecordedSleep,
    ) -> None:
        fake_relay.error = "upstream exploded"

        with pytest.raises(ServerError) as exc_info:
            await manager.send_message("Hello")

        check.equal(exc_info.value.status_code, 500)
        check.equal(str(exc_info.value), "AI function failed. upstream exploded")
        check.equal(len(fake_relay.messages), 4)
        check.equal(recorded_sleep.delays, [1.0, 2.0, 4.0])

    async def test_probe_reports_connected(self, manager: RequestManager) -> None:
        assert await manager.check_connection() is True

    async def test_sanitized_payload_reaches_relay(
        self,
        manager: RequestManager,
        fake_relay: FakeRelayService,
    ) -> None:
        await manager.send_message("\x07  Hail\x00, King  ")

        assert fake_relay.messages == ["Hail, King"]


class TestWireFormat:
    """Checks that the client payload satisfies the relay's request model."""

    def test_payload_is_accepted_by_relay_model(
        self, client_session: ClientSession, client_config: ClientConfig
    ) -> None:
        manager = RequestManager(client_session, config=client_config)
        payload = json.loads(manager.build_request("Hello").model_dump_json(by_alias=True))

        request = RelayRequest.model_validate(payload)

        check.equal(request.message, "Hello")
        check.equal(request.conversation_id, client_session.conversation_id)
