"""Entry point for serving the built site.

Usage:
    python -m blog_engine.webserver.main
    WEBROOT=blog/public USE_MEMORY=true DEBUG=true python -m blog_engine.webserver.main
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import uvicorn

from blog_engine.common.config import ServerSettings, settings
from blog_engine.common.logging import set_debug, setup_logging

from .app import create_app, create_metrics_app

logger = setup_logging(module_name="blog_engine.webserver.main")


def log_configuration(server: ServerSettings) -> None:
    logger.info("Debug mode enabled")
    logger.info("Configuration:")
    logger.info("Debug: %s", server.debug)
    logger.info("Port: %d", server.port)
    logger.info("Metrics Port: %d", server.metrics_port)
    logger.info("Web Root: %s", server.webroot)
    logger.info("Use Memory: %s", server.use_memory)
    logger.info("Access Log: %s", server.log_file_path)


async def serve(server: ServerSettings) -> None:
    """Run the site and the metrics server in one event loop."""
    log_level = "debug" if server.debug else "info"
    site = uvicorn.Server(
        uvicorn.Config(
            create_app(server),
            host="0.0.0.0",
            port=server.port,
            log_level=log_level,
            access_log=False,
        )
    )
    metrics = uvicorn.Server(
        uvicorn.Config(
            create_metrics_app(),
            host="0.0.0.0",
            port=server.metrics_port,
            log_level=log_level,
            access_log=False,
        )
    )
    logger.info("Serving %s on HTTP port: %d", server.webroot, server.port)
    logger.info("Metrics server starting on port %d", server.metrics_port)
    await asyncio.gather(site.serve(), metrics.serve())


def main() -> int:
    server = settings.server
    set_debug(server.debug)
    if server.debug:
        log_configuration(server)

    if not Path(server.webroot).is_dir():
        logger.error("Web root not found: %s", server.webroot)
        return 1

    asyncio.run(serve(server))
    return 0


if __name__ == "__main__":
    sys.exit(main())
