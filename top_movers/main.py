"""
Main application entry point.
Configures logging and serves the FastAPI app (JSON API, dashboard, widget, MCP).
"""
import logging
import sys

import uvicorn

from top_movers.api.routes import create_app
from top_movers.config.settings import settings

# Configure logging for stdout/stderr collectors
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
    force=True,
)

logger = logging.getLogger(__name__)


def main():
    """Run the application."""
    logger.info(
        "Configuration loaded",
        extra={
            "host": settings.host,
            "port": settings.port,
            "log_level": settings.log_level,
            "request_timeout_seconds": settings.request_timeout_seconds,
            "yahoo_screener_id": settings.yahoo_screener_id,
        },
    )
    logger.info(f"Top Movers server is running at http://localhost:{settings.port}")
    logger.info(f"MCP endpoint available at http://localhost:{settings.port}/mcp")

    uvicorn.run(
        create_app(),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        lifespan="on",
        access_log=True,
    )


if __name__ == "__main__":
    main()
