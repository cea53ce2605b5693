"""Pydantic models shared by the chat widget and the relay.

Provides type safety, validation, and camelCase wire serialization.

Models:
    - ChatRequest: Payload posted by the widget
    - ChatResponse: Relay reply with optional follow-up questions
    - RelayRequest: Lenient relay-side view of ChatRequest
    - RelayReply / ErrorPayload: Relay response bodies
    - RenderedMessage: Message handed to the UI layer
    - ConnectionStatus: Advisory connectivity states
"""

from orian.models.schemas import (
    MAX_MESSAGE_LENGTH,
    ChatRequest,
    ChatResponse,
    ConnectionStatus,
    ErrorPayload,
    RelayReply,
    RelayRequest,
    RenderedMessage,
)

__all__ = [
    "MAX_MESSAGE_LENGTH",
    "ChatRequest",
    "ChatResponse",
    "ConnectionStatus",
    "ErrorPayload",
    "RelayReply",
    "RelayRequest",
    "RenderedMessage",
]
