"""Integration tests for the relay app and the client working together.

Uses the real FastAPI app through httpx.ASGITransport. Only the completion
call is replaced, via FastAPI dependency overrides.
"""
