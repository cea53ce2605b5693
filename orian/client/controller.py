"""Submission boundary between the chat page and the request manager.

The controller owns the processing flag, the retry affordance and the
connection status signal. Nothing it exposes raises: every failure is mapped
to a user-facing notice and the view is always left usable.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from orian.client.errors import (
    FormatError,
    InputValidationError,
    NetworkError,
    RequestTimeoutError,
    ServerError,
)
from orian.client.request_manager import RequestManager
from orian.client.security import validate_input
from orian.models.schemas import ConnectionStatus, RenderedMessage

logger = logging.getLogger(__name__)

AI_SPEAKER = "King Orian"
USER_SPEAKER = "You"

ERROR_PREFIX = "The realm experiences turbulence. "
INVALID_INPUT_TEXT = "Please enter a valid message."
OFFLINE_TEXT = "You are offline. Reconnect to continue seeking counsel."
UNAVAILABLE_STATUSES = frozenset({500, 503})


class ChatView(Protocol):
    """Rendering collaborator driven by the controller."""

    def add_message(self, message: RenderedMessage) -> None: ...

    def clear_messages(self) -> None: ...

    def show_typing(self) -> None: ...

    def hide_typing(self) -> None: ...

    def show_error(self, text: str, retry_text: str | None = None) -> None: ...

    def hide_error(self) -> None: ...

    def show_follow_ups(self, questions: list[str]) -> None: ...

    def set_connection_status(self, status: ConnectionStatus, text: str) -> None: ...

    def set_submit_enabled(self, enabled: bool) -> None: ...

    def fade_out_hero(self) -> None: ...

    def reset_hero(self) -> None: ...


@dataclass(frozen=True)
class ErrorNotice:
    """User-facing description of a failed submission.

    Attributes:
        text: Message shown in the error banner.
        retryable: Whether a one-click retry may be offered.
        connection_lost: Whether the status indicator should go offline.
    """

    text: str
    retryable: bool = True
    connection_lost: bool = False


def describe_error(error: Exception, is_online: bool = True) -> ErrorNotice:
    """Map a submission failure to the notice shown to the user."""
    if isinstance(error, RequestTimeoutError):
        return ErrorNotice(ERROR_PREFIX + "Connection timed out. Please try again.")
    if isinstance(error, ServerError) and error.is_rate_limited:
        return ErrorNotice(
            ERROR_PREFIX + "Too many requests. Please wait before seeking counsel again.",
            retryable=False,
        )
    if isinstance(error, ServerError) and error.status_code in UNAVAILABLE_STATUSES:
        return ErrorNotice(ERROR_PREFIX + "King Orian is temporarily unavailable.")
    if isinstance(error, NetworkError) or not is_online:
        return ErrorNotice(
            ERROR_PREFIX + "Connection lost. Check your internet connection.",
            connection_lost=True,
        )
    if isinstance(error, InputValidationError):
        return ErrorNotice(INVALID_INPUT_TEXT, retryable=False)
    return ErrorNotice(ERROR_PREFIX + "Please try again, warrior.")


class ChatController:
    """Drives one chat page: submit, render, recover."""

    def __init__(
        self,
        manager: RequestManager,
        view: ChatView,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._manager = manager
        self._view = view
        self._clock = clock
        self._session = manager.session
        self._processing = False
        self._hero_visible = True
        self.messages: list[RenderedMessage] = []

    @property
    def is_processing(self) -> bool:
        return self._processing

    @property
    def max_retries(self) -> int:
        return self._manager.config.max_retries

    def _timestamp(self) -> str:
        return self._clock().strftime("%I:%M %p")

    def _render(self, content: str, sender: str, speaker: str) -> None:
        message = RenderedMessage(
            content=content,
            sender=sender,
            speaker=speaker,
            timestamp=self._timestamp(),
        )
        self.messages.append(message)
        self._view.add_message(message)

    def _set_status(self, status: ConnectionStatus, text: str) -> None:
        self._session.status = status
        self._view.set_connection_status(status, text)

    def note_typing(self, text: str | None) -> None:
        """Fade the hero section once the user starts typing."""
        if self._hero_visible and text and text.strip():
            self._view.fade_out_hero()
            self._hero_visible = False

    async def handle_submit(self, text: str | None) -> None:
        """Submit a message typed by the user.

        Re-entrant calls while a submission is in flight are dropped.
        """
        message = (text or "").strip()
        if not message or self._processing:
            return

        if not validate_input(message):
            self._view.show_error(INVALID_INPUT_TEXT)
            return

        if self._hero_visible:
            self._view.fade_out_hero()
            self._hero_visible = False

        self._processing = True
        self._view.set_submit_enabled(False)
        self._view.hide_error()

        try:
            self._render(message, "user", USER_SPEAKER)
            self._view.show_typing()

            response = await self._manager.send_message(message)

            self._view.hide_typing()
            if not response.content:
                raise FormatError(f"Empty response from {AI_SPEAKER}")

            self._render(response.content, "ai", AI_SPEAKER)
            if response.follow_up_questions:
                self._view.show_follow_ups(response.follow_up_questions)
            self._session.retry_count = 0
        except Exception as e:
            self._view.hide_typing()
            self.handle_error(e, message)
        finally:
            self._processing = False
            self._view.set_submit_enabled(True)

    def handle_error(self, error: Exception, original_message: str | None = None) -> None:
        """Show a failure and offer a retry of the original text when allowed."""
        logger.error(f"Application error: {error!r}")

        notice = describe_error(error, self._session.is_online)
        if notice.connection_lost:
            self._set_status(ConnectionStatus.DISCONNECTED, "Connection interrupted")

        offer_retry = (
            notice.retryable
            and original_message is not None
            and self._session.retry_count < self.max_retries
        )
        self._view.show_error(notice.text, original_message if offer_retry else None)

        if original_message:
            self._session.retry_count += 1

    async def retry_message(self, message: str) -> None:
        """Resubmit the exact text of a failed message."""
        self._view.hide_error()
        await self.handle_submit(message)

    async def probe_connection(self) -> bool:
        """Run the connectivity probe and update the status indicator."""
        self._set_status(ConnectionStatus.CONNECTING, "Establishing connection to Orian's realm...")

        if await self._manager.check_connection():
            self._set_status(ConnectionStatus.CONNECTED, "Connected to Orian's realm")
            self._session.retry_count = 0
            return True

        self._set_status(
            ConnectionStatus.DISCONNECTED, "Connection failed - using offline mode"
        )
        if not self._session.is_online:
            self._view.show_error(OFFLINE_TEXT)
        return False

    def set_online(self, online: bool) -> None:
        """React to the browser's online/offline events."""
        self._session.is_online = online
        if online:
            self._set_status(ConnectionStatus.CONNECTED, "Reconnected to Orian's realm")
        else:
            self._set_status(ConnectionStatus.DISCONNECTED, "Connection lost")

    def clear_chat(self) -> None:
        """Drop rendered messages and start a new conversation."""
        self.messages.clear()
        self._view.clear_messages()
        conversation_id = self._session.new_conversation()
        self._hero_visible = True
        self._view.reset_hero()
        logger.info(f"Chat cleared, new conversation {conversation_id}")
