"""NiceGUI chat page for King Orian."""

from collections.abc import Awaitable, Callable
from datetime import datetime
from functools import partial

import httpx
from nicegui import app, ui

from orian.client.config import get_client_config
from orian.client.controller import ChatController
from orian.client.export import ThemeStore, export_conversation, export_filename
from orian.client.request_manager import RequestManager
from orian.client.security import escape_html
from orian.client.session import ClientSession
from orian.models.schemas import ConnectionStatus, RenderedMessage

ERROR_DISPLAY_SECONDS = 10.0

_http_client: httpx.AsyncClient | None = None


def get_http_client() -> httpx.AsyncClient:
    """Shared HTTP client for every page instance, closed on shutdown."""
    global _http_client
    if _http_client is None:
        _http_client = httpx.AsyncClient()
    return _http_client


async def close_http_client() -> None:
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


app.on_shutdown(close_http_client)


CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Cinzel:wght@500;700&family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }
    .royal-title { font-family: 'Cinzel', serif; letter-spacing: 0.08em; }

    body { background: #f4f1ea; min-height: 100vh; }
    body.body--dark { background: #0e0c14; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }
    .body--dark .app-container { background: #18151f; }

    .header { background: linear-gradient(135deg, #3b1f5c 0%, #b8860b 100%); }

    .hero { transition: opacity 0.8s, transform 0.8s; }
    .hero-hidden { opacity: 0; transform: translateY(-12px); height: 0; overflow: hidden; }

    .message-user {
        background: linear-gradient(135deg, #3b1f5c 0%, #5b2d8c 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }
    .message-ai {
        background: #f3efe4;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
        border-left: 3px solid #b8860b;
    }
    .body--dark .message-ai { background: #241f2e; color: #e5e1d8; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #b8860b;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .status-dot { width: 8px; height: 8px; border-radius: 50%; background: #9ca3af; }
    .status-connecting { background: #f59e0b; }
    .status-connected { background: #10b981; }
    .status-disconnected { background: #dc143c; }

    .error-banner { background: #fde8ec; color: #9f1239; border-radius: 10px; }
    .send-btn { background: linear-gradient(135deg, #3b1f5c 0%, #b8860b 100%) !important; }
</style>
"""

CONNECTIVITY_JS = """
<script>
window.addEventListener('online', () => emitEvent('orian_online'));
window.addEventListener('offline', () => emitEvent('orian_offline'));
</script>
"""


def render_message(message: RenderedMessage) -> None:
    """Render one chat bubble in the current container."""
    is_user = message.sender == "user"
    align = "justify-end" if is_user else "justify-start"
    bubble = "message-user" if is_user else "message-ai"

    with ui.row().classes(f"w-full {align} gap-3 items-end"):
        with ui.column().classes("max-w-[75%] gap-1"):
            ui.label(message.speaker).classes(
                f"text-[11px] font-semibold text-gray-500 {'self-end' if is_user else 'self-start'}"
            )
            with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                ui.html(escape_html(message.content), sanitize=False).classes("text-sm leading-relaxed")
            ui.label(message.timestamp).classes(
                f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
            )


class ChatPageView:
    """ChatView backed by NiceGUI elements.

    Elements are assigned by ``chat_page`` while it builds the layout.
    """

    def __init__(self) -> None:
        self.hero: ui.column
        self.messages_container: ui.column
        self.scroll_area: ui.scroll_area
        self.typing_row: ui.row
        self.follow_up_row: ui.row
        self.error_row: ui.row
        self.error_label: ui.label
        self.retry_button: ui.button
        self.status_dot: ui.element
        self.status_label: ui.label
        self.input_field: ui.textarea
        self.send_button: ui.button
        self.retry_text: str | None = None
        self._error_timer: ui.timer | None = None

    def add_message(self, message: RenderedMessage) -> None:
        if message.sender == "user":
            self.input_field.value = ""
            self.follow_up_row.clear()
            self.follow_up_row.set_visibility(False)
        with self.messages_container:
            render_message(message)
        self.scroll_area.scroll_to(percent=1.0)

    def clear_messages(self) -> None:
        self.messages_container.clear()
        self.follow_up_row.clear()
        self.follow_up_row.set_visibility(False)

    def show_typing(self) -> None:
        self.typing_row.set_visibility(True)
        self.scroll_area.scroll_to(percent=1.0)

    def hide_typing(self) -> None:
        self.typing_row.set_visibility(False)

    def show_error(self, text: str, retry_text: str | None = None) -> None:
        self.retry_text = retry_text
        self.error_label.set_text(text)
        self.retry_button.set_visibility(retry_text is not None)
        self.error_row.set_visibility(True)
        if self._error_timer is not None:
            self._error_timer.cancel()
        with self.error_row:
            self._error_timer = ui.timer(ERROR_DISPLAY_SECONDS, self.hide_error, once=True)

    def hide_error(self) -> None:
        self.retry_text = None
        self.error_row.set_visibility(False)

    def show_follow_ups(self, questions: list[str]) -> None:
        self.follow_up_row.clear()
        with self.follow_up_row:
            for question in questions:
                ui.button(
                    question,
                    on_click=partial(self.use_follow_up, question),
                ).props("outline rounded no-caps size=sm")
        self.follow_up_row.set_visibility(True)

    def use_follow_up(self, question: str) -> None:
        self.input_field.set_value(question)
        self.input_field.run_method("focus")

    def set_connection_status(self, status: ConnectionStatus, text: str) -> None:
        self.status_dot.classes(
            replace=f"status-dot status-{status.value}",
        )
        self.status_label.set_text(text)

    def set_submit_enabled(self, enabled: bool) -> None:
        if enabled:
            self.send_button.enable()
        else:
            self.send_button.disable()

    def fade_out_hero(self) -> None:
        self.hero.classes(add="hero-hidden")

    def reset_hero(self) -> None:
        self.hero.classes(remove="hero-hidden")


async def confirm(text: str) -> bool:
    """Ask the user to confirm a destructive action."""
    with ui.dialog() as dialog, ui.card():
        ui.label(text)
        with ui.row().classes("w-full justify-end"):
            ui.button("Cancel", on_click=lambda: dialog.submit(False)).props("flat")
            ui.button("Confirm", on_click=lambda: dialog.submit(True))
    return bool(await dialog)


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    ui.add_body_html(CONNECTIVITY_JS)

    view = ChatPageView()
    session = ClientSession()
    manager = RequestManager(session, config=get_client_config(), client=get_http_client())
    controller = ChatController(manager, view)

    theme = ThemeStore(app.storage.user)
    dark = ui.dark_mode(theme.current == "dark")

    def toggle_theme() -> None:
        dark.set_value(theme.toggle() == "dark")

    async def send() -> None:
        await controller.handle_submit(view.input_field.value)

    async def retry() -> None:
        if view.retry_text is not None:
            await controller.retry_message(view.retry_text)

    async def clear_chat() -> None:
        if await confirm("Clear current conversation? This action cannot be undone."):
            controller.clear_chat()

    async def new_conversation() -> None:
        if await confirm("Start a new conversation? Current chat will be cleared."):
            ui.navigate.reload()

    def export() -> None:
        now = datetime.now()
        try:
            content = export_conversation(controller.messages, session.conversation_id, now)
        except ValueError as e:
            ui.notify(str(e), type="warning")
            return
        ui.download.content(content.encode("utf-8"), export_filename(now))

    def sidebar_action(label: str, icon: str, handler: Callable[[], Awaitable[None] | None]) -> None:
        ui.button(label, icon=icon, on_click=handler).props("flat align=left no-caps").classes("w-full")

    ui.on("orian_online", lambda: controller.set_online(True))
    ui.on("orian_offline", lambda: controller.set_online(False))

    # === Sidebar ===
    with ui.left_drawer(value=False).classes("p-4 gap-2") as sidebar:
        ui.label("Royal Chamber").classes("royal-title text-lg mb-2")
        sidebar_action("New conversation", "add", new_conversation)
        sidebar_action("Clear chat", "delete_sweep", clear_chat)
        sidebar_action("Export conversation", "download", export)
        sidebar_action("Toggle theme", "contrast", toggle_theme)
        sidebar_action("Retry connection", "refresh", controller.probe_connection)

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.button(icon="menu", on_click=sidebar.toggle).props("flat round color=white")
                ui.label("King Orian").classes("royal-title text-lg text-white")
            with ui.row().classes("items-center gap-2"):
                view.status_dot = ui.element("div").classes("status-dot status-connecting")
                view.status_label = ui.label("Establishing connection...").classes(
                    "text-xs text-white/80"
                )
                ui.button(icon="contrast", on_click=toggle_theme).props("flat round color=white")

        # Messages
        with ui.scroll_area().classes("flex-grow w-full") as view.scroll_area:
            with ui.column().classes("w-full p-5 gap-4"):
                with ui.column().classes("hero w-full items-center gap-2 py-10") as view.hero:
                    ui.label("👑").classes("text-5xl")
                    ui.label("Seek the counsel of King Orian").classes("royal-title text-xl")
                    ui.label("Ask of strategy, purpose, or the road ahead.").classes(
                        "text-sm text-gray-500"
                    )
                view.messages_container = ui.column().classes("w-full gap-4")
                with ui.row().classes("w-full justify-start") as view.typing_row:
                    with ui.element("div").classes("message-ai px-4 py-3"):
                        with ui.row().classes("items-center gap-2"):
                            with ui.row().classes("gap-1"):
                                for _ in range(3):
                                    ui.element("div").classes("typing-dot")
                            ui.label("King Orian is contemplating...").classes(
                                "text-sm text-gray-500 italic"
                            )
                view.typing_row.set_visibility(False)
                view.follow_up_row = ui.row().classes("w-full gap-2 flex-wrap")
                view.follow_up_row.set_visibility(False)

        # Error banner
        with ui.row().classes("w-full error-banner mx-4 px-4 py-2 items-center gap-3") as view.error_row:
            ui.icon("warning")
            view.error_label = ui.label().classes("flex-grow text-sm")
            view.retry_button = ui.button("Retry", on_click=retry).props("flat dense")
            ui.button(icon="close", on_click=view.hide_error).props("flat round dense")
        view.error_row.set_visibility(False)

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-end border-t"):
            view.input_field = (
                ui.textarea(
                    placeholder="Speak your question to the King...",
                    on_change=lambda e: controller.note_typing(e.value),
                )
                .props("autogrow outlined dense rows=1 maxlength=3000")
                .classes("flex-grow")
                .on("keydown.enter.prevent", send)
            )
            view.send_button = (
                ui.button(icon="send", on_click=send)
                .props("round unelevated color=white")
                .classes("send-btn")
            )

    ui.timer(0.1, controller.probe_connection, once=True)


def main(
    host: str = "0.0.0.0",
    port: int = 8080,
    storage_secret: str = "king-orian-secret",
) -> None:
    """Serve the chat page on its own, talking to a relay elsewhere."""
    ui.run(
        title="King Orian",
        favicon="👑",
        host=host,
        port=port,
        reload=False,
        storage_secret=storage_secret,
    )


if __name__ == "__main__":
    main()
