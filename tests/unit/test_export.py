"""Unit tests for conversation export and theme persistence."""

from datetime import datetime

import pytest
import pytest_check as check

from orian.client.export import (
    THEME_KEY,
    ThemeStore,
    export_conversation,
    export_filename,
)
from orian.models.schemas import RenderedMessage

NOW = datetime(2026, 10, 18, 19, 30, 5)


def message(content: str, sender: str, speaker: str) -> RenderedMessage:
    return RenderedMessage(content=content, sender=sender, speaker=speaker, timestamp="07:30 PM")


class TestExportConversation:
    """Tests for the plain-text transcript."""

    def test_transcript_layout(self) -> None:
        """Header, one block per message, and the closing trailer."""
        text = export_conversation(
            [
                message("Who are you?", "user", "You"),
                message("I am Orian.", "ai", "King Orian"),
            ],
            "conv_1",
            NOW,
        )

        assert text == (
            "King Orian Conversation Export\n"
            + "=" * 50
            + "\n\n"
            + "Exported: 2026-10-18 19:30:05\n"
            + "Conversation ID: conv_1\n\n"
            + "You (07:30 PM):\nWho are you?\n\n"
            + "King Orian (07:30 PM):\nI am Orian.\n\n"
            + "\n--- End of Conversation ---"
        )

    def test_unknown_conversation_id(self) -> None:
        text = export_conversation([message("hi", "user", "You")], None, NOW)

        assert "Conversation ID: unknown" in text

    def test_empty_conversation_raises(self) -> None:
        with pytest.raises(ValueError, match="No conversation to export"):
            export_conversation([], "conv_1", NOW)

    def test_filename_uses_date(self) -> None:
        assert export_filename(NOW) == "king-orian-conversation-2026-10-18.txt"


class TestThemeStore:
    """Tests for ThemeStore."""

    def test_defaults_to_dark(self) -> None:
        assert ThemeStore({}).current == "dark"

    def test_toggle_persists_under_single_key(self) -> None:
        storage: dict[str, str] = {}
        store = ThemeStore(storage)

        check.equal(store.toggle(), "light")
        check.equal(storage, {THEME_KEY: "light"})
        check.equal(store.toggle(), "dark")
        check.equal(storage, {THEME_KEY: "dark"})

    def test_unknown_stored_value_falls_back_to_dark(self) -> None:
        assert ThemeStore({THEME_KEY: "sepia"}).current == "dark"

    def test_set_rejects_unknown_theme(self) -> None:
        with pytest.raises(ValueError):
            ThemeStore({}).set("sepia")
