"""
Tests for the DexScreener and Solscan clients against httpx.MockTransport.

Client coroutines are driven with asyncio.run.
"""

from __future__ import annotations

import asyncio
import time

import httpx
import pytest

from pumpfun_api.core.exceptions import NotFound, UpstreamError
from pumpfun_api.providers import DexScreenerClient, SolscanHolderClient, create_http_client
from pumpfun_api.providers.solscan import parse_total

from tests.conftest import EXAMPLE_PAIR, VALID_MINT, local_http_client, slow_body_server


def _dex(http_client) -> DexScreenerClient:
    return DexScreenerClient(http_client, "https://api.dexscreener.com/", 10.0)


def _holders(http_client) -> SolscanHolderClient:
    return SolscanHolderClient(http_client, "https://api.solscan.io", 5.0, "PumpFunAPI/1.0")


# -----------------------------------------------------------------------------
# DexScreener
# -----------------------------------------------------------------------------


def test_fetch_pairs_requests_tokens_endpoint(upstream, http_client):
    pairs = asyncio.run(_dex(http_client).fetch_pairs(VALID_MINT))
    assert len(pairs) == 1
    assert pairs[0].base_symbol == "ABC"
    assert len(upstream.requests) == 1
    request = upstream.requests[0]
    assert request.method == "GET"
    assert str(request.url) == f"https://api.dexscreener.com/latest/dex/tokens/{VALID_MINT}"


def test_fetch_pairs_keeps_provider_order_and_skips_non_objects(upstream, http_client):
    upstream.dex = lambda request: httpx.Response(
        200,
        json={"pairs": [{"pairAddress": "one"}, None, "junk", {"pairAddress": "two"}]},
    )
    pairs = asyncio.run(_dex(http_client).fetch_pairs(VALID_MINT))
    assert [p.pair_address for p in pairs] == ["one", "two"]


@pytest.mark.parametrize("body", [{"pairs": []}, {"pairs": None}, {}, [], {"pairs": "nope"}, {"pairs": [None]}])
def test_fetch_pairs_empty_is_not_found(upstream, http_client, body):
    upstream.dex = lambda request: httpx.Response(200, json=body)
    with pytest.raises(NotFound) as exc_info:
        asyncio.run(_dex(http_client).fetch_pairs(VALID_MINT))
    assert exc_info.value.message.startswith("No trading pairs found")


def test_fetch_pairs_upstream_404_is_not_found(upstream, http_client):
    upstream.dex = lambda request: httpx.Response(404, json={"error": "nope"})
    with pytest.raises(NotFound) as exc_info:
        asyncio.run(_dex(http_client).fetch_pairs(VALID_MINT))
    assert exc_info.value.message == "No data available for this mint address"


@pytest.mark.parametrize("status", [429, 500, 503])
def test_fetch_pairs_other_status_is_upstream_error(upstream, http_client, status):
    upstream.dex = lambda request: httpx.Response(status)
    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(_dex(http_client).fetch_pairs(VALID_MINT))
    assert exc_info.value.status_code == 500
    assert exc_info.value.provider == "dexscreener"


def test_fetch_pairs_timeout_is_upstream_error(upstream, http_client):
    def timeout(request):
        raise httpx.ReadTimeout("timed out", request=request)

    upstream.dex = timeout
    with pytest.raises(UpstreamError):
        asyncio.run(_dex(http_client).fetch_pairs(VALID_MINT))


def test_fetch_pairs_connect_error_is_upstream_error(upstream, http_client):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    upstream.dex = refuse
    with pytest.raises(UpstreamError):
        asyncio.run(_dex(http_client).fetch_pairs(VALID_MINT))


def test_fetch_pairs_invalid_json_is_upstream_error(upstream, http_client):
    upstream.dex = lambda request: httpx.Response(200, content=b"<html>oops</html>")
    with pytest.raises(UpstreamError):
        asyncio.run(_dex(http_client).fetch_pairs(VALID_MINT))


# -----------------------------------------------------------------------------
# Solscan
# -----------------------------------------------------------------------------


def test_holder_count_request_shape(upstream, http_client):
    result = asyncio.run(_holders(http_client).fetch_holder_count(VALID_MINT))
    assert result.count == 42
    assert result.source == "solscan_api"
    request = upstream.requests[0]
    assert request.url.host == "api.solscan.io"
    assert request.url.path == "/token/holders"
    assert request.url.params["token"] == VALID_MINT
    assert request.url.params["offset"] == "0"
    assert request.url.params["size"] == "1"
    assert request.headers["User-Agent"] == "PumpFunAPI/1.0"


def test_holder_count_timeout_is_unavailable(upstream, http_client):
    def timeout(request):
        raise httpx.ReadTimeout("timed out", request=request)

    upstream.holders = timeout
    result = asyncio.run(_holders(http_client).fetch_holder_count(VALID_MINT))
    assert result.count is None
    assert result.source == "unavailable"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500),
        httpx.Response(403, json={"error": "forbidden"}),
        httpx.Response(200, content=b"not json"),
        httpx.Response(200, json={"data": []}),
        httpx.Response(200, json={"total": 0}),
        httpx.Response(200, json={"total": None}),
        httpx.Response(200, json=[1, 2, 3]),
    ],
)
def test_holder_count_failures_are_unavailable(upstream, http_client, response):
    upstream.holders = lambda request: response
    result = asyncio.run(_holders(http_client).fetch_holder_count(VALID_MINT))
    assert result.available is False


@pytest.mark.parametrize(
    "data, expected",
    [
        ({"total": 42}, 42),
        ({"total": 42.0}, 42),
        ({"total": "1234"}, 1234),
        ({"total": 0}, None),
        ({"total": -5}, None),
        ({"total": 4.5}, None),
        ({"total": True}, None),
        ({"total": "many"}, None),
        ({}, None),
        (None, None),
    ],
)
def test_parse_total(data, expected):
    assert parse_total(data) == expected


# -----------------------------------------------------------------------------
# Shared client: redirects and total-time limits
# -----------------------------------------------------------------------------


def test_http_client_follows_redirects():
    assert create_http_client().follow_redirects is True


def test_fetch_pairs_follows_redirect(upstream, http_client):
    def moved(request):
        if request.url.path.endswith("/moved"):
            return httpx.Response(200, json={"pairs": [EXAMPLE_PAIR]})
        return httpx.Response(301, headers={"Location": f"/latest/dex/tokens/{VALID_MINT}/moved"})

    upstream.dex = moved
    pairs = asyncio.run(_dex(http_client).fetch_pairs(VALID_MINT))
    assert len(pairs) == 1
    assert pairs[0].base_symbol == "ABC"
    assert len(upstream.requests) == 2


def test_holder_count_follows_redirect(upstream, http_client):
    def moved(request):
        if request.url.params.get("v") == "2":
            return httpx.Response(200, json={"total": 42})
        return httpx.Response(
            302,
            headers={"Location": f"/token/holders?token={VALID_MINT}&offset=0&size=1&v=2"},
        )

    upstream.holders = moved
    result = asyncio.run(_holders(http_client).fetch_holder_count(VALID_MINT))
    assert result.count == 42


def test_fetch_pairs_slow_body_times_out():
    """Body trickling in byte by byte still fails the call at its time limit."""

    async def scenario():
        async with slow_body_server() as base_url, local_http_client() as http:
            client = DexScreenerClient(http, base_url, timeout_sec=0.5)
            start = time.monotonic()
            with pytest.raises(UpstreamError) as exc_info:
                await client.fetch_pairs(VALID_MINT)
            return time.monotonic() - start, exc_info.value

    elapsed, error = asyncio.run(scenario())
    assert elapsed < 2.5
    assert error.message == "Market data provider timed out"
    assert error.status_code == 500


def test_holder_count_slow_body_is_unavailable():
    async def scenario():
        async with slow_body_server() as base_url, local_http_client() as http:
            client = SolscanHolderClient(http, base_url, timeout_sec=0.5)
            start = time.monotonic()
            result = await client.fetch_holder_count(VALID_MINT)
            return time.monotonic() - start, result

    elapsed, result = asyncio.run(scenario())
    assert elapsed < 2.5
    assert result.source == "unavailable"
