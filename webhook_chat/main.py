"""Main application entry point.

Runs FastAPI with NiceGUI mounted for the chat interface.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Application entry point.

    Mounts the NiceGUI chat page onto the FastAPI host app and serves both
    on the configured host and port.
    """
    import uvicorn
    from nicegui import ui

    from webhook_chat.api.app import create_app
    from webhook_chat.config import get_client_config
    from webhook_chat.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    config = get_client_config()
    app = create_app()

    ui.run_with(
        app,
        title=config.app_title,
        favicon="💬",
        storage_secret=config.storage_secret,
    )

    logger.info(f"Starting Webhook Chat on http://{config.host}:{config.port}")

    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
