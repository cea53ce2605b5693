"""Chat client: request manager and submission controller.

Responsibilities:
    - Input validation and sanitization before any network call
    - Bounded-retry relay calls with timeout and exponential backoff
    - Response shape validation
    - Error mapping, retry affordance and connection status for the UI
    - Conversation export and theme persistence

Has no NiceGUI dependency; the page implements the ChatView protocol.
"""

from orian.client.config import ClientConfig, get_client_config
from orian.client.controller import ChatController, ChatView, ErrorNotice, describe_error
from orian.client.errors import (
    ChatClientError,
    FormatError,
    InputValidationError,
    NetworkError,
    RequestTimeoutError,
    ServerError,
)
from orian.client.request_manager import RequestManager
from orian.client.session import ClientSession

__all__ = [
    "ChatClientError",
    "ChatController",
    "ChatView",
    "ClientConfig",
    "ClientSession",
    "ErrorNotice",
    "FormatError",
    "InputValidationError",
    "NetworkError",
    "RequestManager",
    "RequestTimeoutError",
    "ServerError",
    "describe_error",
    "get_client_config",
]
