"""Unit tests for individual components in isolation.

Coverage:
    - client/: Sanitization, retry policy, response validation, controller
    - relay/: Configuration and completion call handling
    - models/: Pydantic validation and wire serialization

HTTP is served by httpx.MockTransport; the OpenAI client is mocked.
"""
