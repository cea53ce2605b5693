"""Plain-text conversation export and theme persistence."""

from collections.abc import MutableMapping
from datetime import datetime

from orian.models.schemas import RenderedMessage

EXPORT_TITLE = "King Orian Conversation Export"
EXPORT_TRAILER = "--- End of Conversation ---"

THEME_KEY = "king-orian-theme"
THEMES = ("dark", "light")


def export_filename(now: datetime) -> str:
    return f"king-orian-conversation-{now.date().isoformat()}.txt"


def export_conversation(
    messages: list[RenderedMessage],
    conversation_id: str | None,
    now: datetime,
) -> str:
    """Render the conversation as a plain-text transcript.

    Args:
        messages: Rendered messages in display order.
        conversation_id: Current conversation identifier.
        now: Export time.

    Returns:
        The transcript text.

    Raises:
        ValueError: If there are no messages.
    """
    if not messages:
        raise ValueError("No conversation to export")

    lines = [
        EXPORT_TITLE,
        "=" * 50,
        "",
        f"Exported: {now.strftime('%Y-%m-%d %H:%M:%S')}",
        f"Conversation ID: {conversation_id or 'unknown'}",
        "",
    ]
    content = "\n".join(lines) + "\n"
    for message in messages:
        content += f"{message.speaker} ({message.timestamp}):\n{message.content}\n\n"
    return content + "\n" + EXPORT_TRAILER


class ThemeStore:
    """Persists the dark/light choice under a single storage key."""

    def __init__(self, storage: MutableMapping[str, str]) -> None:
        self._storage = storage

    @property
    def current(self) -> str:
        theme = self._storage.get(THEME_KEY, "dark")
        return theme if theme in THEMES else "dark"

    def set(self, theme: str) -> str:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme}")
        self._storage[THEME_KEY] = theme
        return theme

    def toggle(self) -> str:
        return self.set("light" if self.current == "dark" else "dark")
