"""
Server bootstrap: resolve settings and run the app under uvicorn.
"""

from __future__ import annotations

import uvicorn

from pumpfun_api.api_server.app import create_app
from pumpfun_api.api_server.routes import EXAMPLE_MINT
from pumpfun_api.config import Settings, get_settings
from pumpfun_api.pumpfun_logging import get_logger, normalize_log_level

logger = get_logger(__name__)


def run(settings: Settings | None = None) -> None:
    """Start uvicorn on settings.host:settings.port (PORT env, default 3000)."""
    settings = settings or get_settings()
    app = create_app(settings)
    logger.info(
        "server_starting",
        host=settings.host,
        port=settings.port,
        example=f"http://localhost:{settings.port}/api/pumpfun/{EXAMPLE_MINT}",
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=normalize_log_level(settings.log_level))
