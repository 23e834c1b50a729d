"""Main application entry point.

Runs FastAPI (port 3000) with the NiceGUI chat page mounted on it.
Environment variables are loaded once from the project's .env file;
variables already set in the process environment take precedence.
"""

import logging
import os
import sys

from brandchat.env import load_environment

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure root logging from LOG_LEVEL."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def run_integrated() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI handles /api routes, NiceGUI serves the chat page at /.
    """
    import uvicorn
    from nicegui import ui

    from brandchat.api.app import create_app
    from brandchat.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="QB Tech Solutions Chat",
        favicon="💬",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "brand-chat-secret"),
    )

    port = int(os.getenv("PORT", "3000"))
    logger.info(f"Server running on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def main() -> None:
    """Application entry point: FastAPI and NiceGUI on one port."""
    configure_logging()
    load_environment()

    logger.info("Starting brand chat")
    run_integrated()


if __name__ == "__main__":
    main()
