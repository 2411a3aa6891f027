# =============================================================================
# main.py  —  Entry Point for the Kynhood Events MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py          (or the installed `mcp-kynhood-events`)
#
# WHAT HAPPENS:
#   1. Loads .env into the environment
#   2. Reads Settings once (API_BASE_URL, DEFAULT_SKIP, DEFAULT_LIMIT, DEBUG, ...)
#   3. Configures logging to stderr
#   4. Builds the FastMCP server and serves it over stdio
#
# An MCP host (e.g. Claude Desktop) starts this script as a subprocess and
# talks to it over stdin/stdout.
# =============================================================================

import logging
import sys

from dotenv import load_dotenv

from core.config import Settings
from core.errors import ConfigurationError
from tools.mcp_server import SERVER_NAME, configure_logging, create_server

logger = logging.getLogger(__name__)


def main() -> None:
    load_dotenv()

    try:
        settings = Settings.from_env()
    except ConfigurationError as exc:
        configure_logging()
        logger.error("Failed to start server: %s", exc)
        sys.exit(1)

    configure_logging(settings.debug)
    logger.info("Starting %s (API_BASE_URL=%s)", SERVER_NAME, settings.api_base_url)

    server = create_server(settings)
    logger.info("%s running on stdio", SERVER_NAME)
    server.run()


if __name__ == "__main__":
    main()
