"""Completion relay logic.

Forwards one user message per call to an OpenAI-compatible chat-completion
API behind a fixed persona prompt.

Responsibilities:
    - Relay configuration from the environment
    - Two-message transcript construction
    - Upstream error normalization into UpstreamError

Holds no state between calls. Kept separate from the HTTP layer.
"""

from orian.relay.config import RelayConfig, get_relay_config
from orian.relay.errors import UpstreamError
from orian.relay.service import RelayService, get_relay_service

__all__ = [
    "RelayConfig",
    "RelayService",
    "UpstreamError",
    "get_relay_config",
    "get_relay_service",
]
