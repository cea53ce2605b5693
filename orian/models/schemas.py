from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_MESSAGE_LENGTH = 3000


class ConnectionStatus(str, Enum):
    """Advisory connection states shown by the status indicator."""

    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


class ChatRequest(BaseModel):
    """Request payload sent by the chat widget to the relay.

    Serialized with camelCase names on the wire.

    Attributes:
        message: Sanitized user message.
        client_id: Identifier of the page instance.
        conversation_id: Identifier of the current conversation.
        preferences: Fixed response preferences.
        timestamp: ISO-8601 creation time.
    """

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)
    client_id: str = Field(..., alias="clientId")
    conversation_id: str = Field(..., alias="conversationId")
    preferences: dict[str, str] = Field(default_factory=dict)
    timestamp: str


class ChatResponse(BaseModel):
    """Successful relay reply.

    Attributes:
        content: The generated answer.
        follow_up_questions: Optional suggested questions, in display order.
    """

    model_config = ConfigDict(populate_by_name=True)

    content: str
    follow_up_questions: list[str] | None = Field(None, alias="followUpQuestions")

    @field_validator("content", mode="before")
    @classmethod
    def require_string_content(cls, v: object) -> object:
        """Reject non-string content instead of coercing it."""
        if not isinstance(v, str):
            raise ValueError("content must be a string")
        return v


class RelayRequest(BaseModel):
    """Lenient view of ChatRequest as received by the relay.

    Only ``message`` is used; the other fields are accepted for logging.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    message: str | None = None
    client_id: str | None = Field(None, alias="clientId")
    conversation_id: str | None = Field(None, alias="conversationId")


class RelayReply(BaseModel):
    """Relay success body."""

    content: str


class ErrorPayload(BaseModel):
    """Relay error body for every non-200 response."""

    error: str


class RenderedMessage(BaseModel):
    """A message handed to the rendering layer.

    Attributes:
        content: Message text.
        sender: ``user`` or ``ai``.
        speaker: Display name of the sender.
        timestamp: Display time (e.g. ``07:15 PM``).
    """

    content: str
    sender: str
    speaker: str
    timestamp: str
