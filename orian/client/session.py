"""Per-page client session state."""

from dataclasses import dataclass, field

from orian.client.security import generate_client_id, generate_conversation_id
from orian.models.schemas import ConnectionStatus

USER_PREFERENCES: dict[str, str] = {
    "responseStyle": "strategic",
    "responseLength": "detailed",
    "followUpQuestions": "always",
    "autoSave": "enabled",
    "exportFormat": "txt",
}


@dataclass
class ClientSession:
    """State owned by one loaded chat page.

    Attributes:
        client_id: Stable identifier of the page instance.
        conversation_id: Identifier of the current conversation.
        retry_count: Failed submissions since the last success.
        is_online: Whether the browser reports network connectivity.
        status: Last advisory connection status.
    """

    client_id: str = field(default_factory=generate_client_id)
    conversation_id: str = field(default_factory=generate_conversation_id)
    retry_count: int = 0
    is_online: bool = True
    status: ConnectionStatus = ConnectionStatus.CONNECTING

    def preferences(self) -> dict[str, str]:
        return dict(USER_PREFERENCES)

    def new_conversation(self) -> str:
        """Start a new conversation and return its identifier."""
        self.conversation_id = generate_conversation_id()
        return self.conversation_id
