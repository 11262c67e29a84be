"""Main application entry point.

Runs the NiceGUI session window against a running code-intelligence backend.
Environment variables are loaded from .env file.
"""

import logging
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

from src.client.config import get_client_config  # noqa: E402

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def main() -> None:
    """Application entry point.

    Set API_BASE_URL to point the client at the backend.
    """
    from nicegui import ui

    from src.ui.session_page import session_page  # noqa: F401 - Registers the page

    config = get_client_config()
    configure_logging(config.log_level)

    logger.info(f"Backend API at {config.api_base_url}")
    logger.info(f"Session UI available at http://localhost:{config.ui_port}/")

    ui.run(
        title="CodeIntel",
        host=config.ui_host,
        port=config.ui_port,
        reload=False,
        show=False,
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
