"""NiceGUI interface - thin rendering layer for the chat widget.

Responsibilities:
    - Message bubbles, typing indicator and hero section
    - Error banner with one-click retry
    - Sidebar actions: new/clear conversation, export, theme, reconnect
    - Connection status indicator fed by browser online/offline events

Contains no request logic. Delegates every action to ChatController.
"""
