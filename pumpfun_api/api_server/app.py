"""
FastAPI/ASGI application factory.

create_app() wires settings and provider clients into a fresh app; nothing is
held in module-level state. Providers may be injected (tests); otherwise the
lifespan builds DexScreener and Solscan clients over one redirect-following
httpx.AsyncClient and closes it on shutdown.

Run with: uvicorn pumpfun_api.api_server.app:create_app --factory --port 3000
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pumpfun_api import __version__
from pumpfun_api.aggregator import TokenAggregator
from pumpfun_api.aggregator.composer import utc_now
from pumpfun_api.aggregator.service import HolderCountProvider, MarketDataProvider
from pumpfun_api.api_server.middleware import log_requests
from pumpfun_api.api_server.routes import router
from pumpfun_api.config import Settings, get_settings
from pumpfun_api.core.exceptions import InternalError, TokenApiError
from pumpfun_api.providers import DexScreenerClient, SolscanHolderClient, create_http_client
from pumpfun_api.pumpfun_logging import configure_logging, get_logger

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Error handlers: every error body is {"error": ..., "message": ...}
# -----------------------------------------------------------------------------


async def handle_token_api_error(request: Request, exc: TokenApiError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "request_failed",
            path=request.url.path,
            status_code=exc.status_code,
            error=exc.error,
            provider=getattr(exc, "provider", None),
            message=exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request_unhandled_error", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content=InternalError().to_dict())


# -----------------------------------------------------------------------------
# App factory
# -----------------------------------------------------------------------------


def create_app(
    settings: Settings | None = None,
    *,
    market: MarketDataProvider | None = None,
    holders: HolderCountProvider | None = None,
    clock: Callable[[], datetime] = utc_now,
) -> FastAPI:
    """Build the API app; missing providers are created from settings at startup."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        http = None
        if market is None or holders is None:
            http = create_http_client()
        app.state.aggregator = TokenAggregator(
            market or DexScreenerClient(
                http,
                base_url=settings.dexscreener_base_url,
                timeout_sec=settings.market_timeout_sec,
            ),
            holders or SolscanHolderClient(
                http,
                base_url=settings.solscan_base_url,
                timeout_sec=settings.holders_timeout_sec,
                user_agent=settings.holders_user_agent,
            ),
            clock=clock,
        )
        logger.info(
            "api_started",
            dexscreener_base_url=settings.dexscreener_base_url,
            solscan_base_url=settings.solscan_base_url,
        )
        try:
            yield
        finally:
            if http is not None:
                await http.aclose()
            logger.info("api_stopped")

    app = FastAPI(
        title="Pump.fun Token API",
        description="Real-time market cap, volume and holder data for pump.fun tokens.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.middleware("http")(log_requests)
    app.add_exception_handler(TokenApiError, handle_token_api_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
    app.include_router(router)
    return app
