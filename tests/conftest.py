"""
Pytest fixtures for Pump.fun Token API tests.

Upstream providers are stubbed with httpx.MockTransport so the real
DexScreener/Solscan clients run without network access; every outbound
request is recorded on the `upstream` fixture.
"""

from __future__ import annotations

import asyncio
import json
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable

import httpx
import pytest

from pumpfun_api.config import Settings
from pumpfun_api.providers import create_http_client

VALID_MINT = "CzLSujWBLFsSjncfkh59rUFqvafWcY5tzedWJSuypump"

EXAMPLE_PAIR: dict[str, Any] = {
    "dexId": "raydium",
    "pairAddress": "5KKsLVU6TcbVDK4BS6K1DGDxnh4Q9xjYJ8XaDCG5t8ht",
    "baseToken": {"symbol": "ABC", "name": "ABC Token"},
    "priceUsd": "0.002",
    "priceChange": {"h24": "-3.5"},
    "volume": {"h24": "200"},
    "liquidity": {"usd": "500"},
    "fdv": "1000000",
}

Handler = Callable[[httpx.Request], httpx.Response]


class UpstreamStub:
    """Route DexScreener and Solscan URLs to swappable handlers; record every request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.dex: Handler = lambda request: httpx.Response(200, json={"pairs": [EXAMPLE_PAIR]})
        self.holders: Handler = lambda request: httpx.Response(200, json={"total": 42})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.startswith("/latest/dex/tokens/"):
            return self.dex(request)
        if request.url.path == "/token/holders":
            return self.holders(request)
        return httpx.Response(404)

    def calls_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]


@asynccontextmanager
async def slow_body_server(byte_interval: float = 0.2) -> AsyncIterator[str]:
    """
    Local HTTP server that sends headers at once, then the JSON body one byte per interval.

    Yields the base URL. Every path gets the same body, which satisfies both
    providers (it carries "pairs" and "total").
    """
    body = json.dumps({"pairs": [EXAMPLE_PAIR], "total": 42}).encode()
    head = (
        "HTTP/1.1 200 OK\r\n"
        "Content-Type: application/json\r\n"
        f"Content-Length: {len(body)}\r\n\r\n"
    ).encode()

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        try:
            await reader.readuntil(b"\r\n\r\n")
            writer.write(head)
            for i in range(len(body)):
                await writer.drain()
                writer.write(body[i : i + 1])
                await asyncio.sleep(byte_interval)
        except (ConnectionError, asyncio.IncompleteReadError):
            pass
        finally:
            writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        server.close()


def local_http_client() -> httpx.AsyncClient:
    """Provider client over a real transport; explicit transport keeps env proxies out of local calls."""
    return create_http_client(httpx.AsyncHTTPTransport())


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def upstream() -> UpstreamStub:
    return UpstreamStub()


@pytest.fixture
def http_client(upstream):
    """Provider AsyncClient whose transport is the upstream stub."""
    return create_http_client(httpx.MockTransport(upstream))


@pytest.fixture
def client(settings, http_client):
    """FastAPI TestClient over real provider clients backed by the upstream stub."""
    from fastapi.testclient import TestClient

    from pumpfun_api.api_server.app import create_app
    from pumpfun_api.providers import DexScreenerClient, SolscanHolderClient

    app = create_app(
        settings,
        market=DexScreenerClient(http_client, settings.dexscreener_base_url, settings.market_timeout_sec),
        holders=SolscanHolderClient(
            http_client,
            settings.solscan_base_url,
            settings.holders_timeout_sec,
            settings.holders_user_agent,
        ),
    )
    with TestClient(app) as test_client:
        yield test_client
