"""Command-line entry point for King Orian.

Integrated mode serves the relay and the chat page from one uvicorn server.
Separate mode runs the relay in a child process and the page on its own
port, the way a static widget talks to a separately hosted function. In
both modes the page is pointed at the relay through ORIAN_RELAY_URL unless
that is already set.
"""

import logging
import os
import subprocess
import sys

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


class ServerSettings(BaseModel):
    """Process-level settings read once at startup."""

    mode: str = Field(default_factory=lambda: os.getenv("RUN_MODE", "integrated").lower())
    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(default_factory=lambda: int(os.getenv("PORT", "8000")), gt=0)
    ui_port: int = Field(default_factory=lambda: int(os.getenv("UI_PORT", "8080")), gt=0)
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "info").lower())
    storage_secret: str = Field(
        default_factory=lambda: os.getenv("NICEGUI_STORAGE_SECRET", "king-orian-secret")
    )

    @property
    def relay_url(self) -> str:
        """URL the chat page uses to reach a relay started by this process."""
        return f"http://localhost:{self.port}"


def point_client_at_relay(settings: ServerSettings) -> str:
    """Default ORIAN_RELAY_URL to the locally started relay.

    Returns:
        The relay URL the chat page will use.
    """
    return os.environ.setdefault("ORIAN_RELAY_URL", settings.relay_url)


def relay_command(settings: ServerSettings) -> list[str]:
    """Command line that starts the relay on its own."""
    return [
        sys.executable,
        "-m",
        "uvicorn",
        "orian.api.app:app",
        "--host",
        settings.host,
        "--port",
        str(settings.port),
        "--log-level",
        settings.log_level,
    ]


def run_integrated(settings: ServerSettings) -> None:
    """Serve /chat, /health and the page from a single server."""
    import uvicorn
    from nicegui import ui

    from orian.api.app import create_app
    from orian.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    relay_url = point_client_at_relay(settings)
    app = create_app()
    ui.run_with(app, title="King Orian", favicon="👑", storage_secret=settings.storage_secret)

    logger.info(f"King Orian on http://localhost:{settings.port}/ (relay {relay_url})")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)


def run_separate(settings: ServerSettings) -> None:
    """Run the relay as a child process and the page in this one."""
    from orian.ui.chat_page import main as run_chat_page

    relay_url = point_client_at_relay(settings)
    logger.info(f"Starting relay on {settings.relay_url}")
    relay_proc = subprocess.Popen(relay_command(settings))
    try:
        logger.info(f"Chat page on http://localhost:{settings.ui_port}/ (relay {relay_url})")
        run_chat_page(
            host=settings.host,
            port=settings.ui_port,
            storage_secret=settings.storage_secret,
        )
    finally:
        logger.info("Stopping relay")
        relay_proc.terminate()
        relay_proc.wait()


def main() -> None:
    """Start King Orian; RUN_MODE=separate splits relay and page."""
    settings = ServerSettings()
    logger.info(f"Starting King Orian in {settings.mode} mode")

    if settings.mode == "separate":
        run_separate(settings)
    else:
        run_integrated(settings)


if __name__ == "__main__":
    main()
