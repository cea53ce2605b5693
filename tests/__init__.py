"""Test package for King Orian.

Structure:
    - unit/: Client request manager, controller, relay service and helpers
    - integration/: Relay endpoint and full client-to-relay round trips

No live LLM calls: the completion client is always replaced.
Leverages pytest with pytest-check for soft assertions.
"""
