"""King Orian - a chat widget backed by a stateless completion relay.

Combines FastAPI for the relay endpoint, httpx for the resilient client,
NiceGUI for the chat page, and Pydantic for wire validation.

Components:
    - api: Relay HTTP endpoints and error payloads
    - relay: Completion call behind the persona prompt
    - client: Request manager, retry policy and submission controller
    - ui: NiceGUI chat page
    - models: Request/response schemas
"""

__version__ = "0.1.0"
