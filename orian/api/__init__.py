"""FastAPI endpoints for the King Orian relay.

Endpoints:
    - GET /health: Service health status (connectivity probe target)
    - POST /chat: Relay one message to the completion API

Every non-200 response carries an ``{"error": str}`` body.
"""

from orian.api.app import app, create_app

__all__ = ["app", "create_app"]
