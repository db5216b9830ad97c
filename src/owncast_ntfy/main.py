import asyncio
import logging
import os
import sys
import uvicorn
from owncast_ntfy.config import load_settings
from owncast_ntfy.errors import ConfigError
from owncast_ntfy.logger import setup_logging
from owncast_ntfy.webhook import create_app

log = logging.getLogger(__name__)


async def run(settings):
    app = create_app(settings)
    config = uvicorn.Config(
        app, host=settings.host, port=settings.port, log_level=settings.log_level.lower()
    )
    server = uvicorn.Server(config)
    log.info("Forwarding Owncast notifications to ntfy... %s", settings.ntfy_url)
    log.info("Listening on port %d...", settings.port)
    await server.serve()


def cli():
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))
    try:
        settings = load_settings()
    except ConfigError as e:
        log.error("Configuration error: %s", e)
        sys.exit(1)
    # LOG_LEVEL may have come from .env
    setup_logging(settings.log_level)

    log.info("ntfy-url: %s", settings.ntfy_url)
    log.info("topic: %s", settings.ntfy_topic)
    log.info("serverUrl: %s", settings.ntfy_server_url)
    if settings.ntfy_basic_auth:
        log.info("basicAuth: %s", settings.masked_basic_auth)

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    cli()
