"""
FastAPI Application Entry Point

Integrates:
  - LINE webhook receiver (POST /webhook)
  - Middleware for request logging

Run: python main.py  (reads CHANNEL_SECRET, CHANNEL_ACCESS_TOKEN, PORT)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request

from config import Config, ConfigurationError
from transport.line import (
    DispatchPolicy,
    EventHandler,
    LineMessagingClient,
    handle_event,
    router as line_router,
)

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan: startup and shutdown handlers.
    """
    config: Config = app.state.config
    logger.info(f"Starting on http://{config.host}:{config.port}")
    logger.info(f"Event failure policy: {config.failure_policy}")

    yield

    logger.info("LINE webhook receiver shutting down...")


def create_app(
    config: Config,
    handler: Optional[EventHandler] = None,
    client: Optional[LineMessagingClient] = None,
) -> FastAPI:
    """
    Build the application around one read-only configuration.

    Args:
        config: Loaded configuration
        handler: Per-event handler (defaults to the echo handler)
        client: Messaging client (defaults to one built from config)
    """
    app = FastAPI(
        title="LINE Webhook Receiver",
        description="Verifies LINE webhooks and dispatches their events",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.state.config = config
    app.state.client = client or LineMessagingClient.from_config(config)
    app.state.handler = handler or handle_event
    app.state.dispatch_policy = DispatchPolicy(config.failure_policy)

    # Middleware for logging
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests."""
        logger.debug(f"{request.method} {request.url.path}")
        response = await call_next(request)
        logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")
        return response

    app.include_router(line_router)
    return app


def main() -> None:
    """Load configuration and serve; exit 1 if a secret is missing."""
    try:
        config = Config.from_env()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    logging.getLogger().setLevel(config.log_level)

    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
