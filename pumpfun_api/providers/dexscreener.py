"""
DexScreener market data client.

GET {base}/latest/dex/tokens/{mint} -> {"pairs": [...]}. Returns the pairs in
provider order as TradingPair values. Upstream 404 and empty pair lists map to
NotFound; every other failure maps to UpstreamError. No retries, no caching.

The whole call (connect, headers and body) is capped at timeout_sec; httpx's
own timeouts only bound each individual read.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from pumpfun_api.aggregator.models import TradingPair
from pumpfun_api.config.settings import DEFAULT_DEXSCREENER_BASE_URL, DEFAULT_MARKET_TIMEOUT_SEC
from pumpfun_api.core.exceptions import NotFound, UpstreamError
from pumpfun_api.pumpfun_logging import get_logger

logger = get_logger(__name__)

PROVIDER_NAME = "dexscreener"
TOKENS_PATH = "/latest/dex/tokens/{mint}"
NO_DATA_MESSAGE = "No data available for this mint address"
TIMEOUT_MESSAGE = "Market data provider timed out"


class DexScreenerClient:
    """Fetch trading pairs for a mint from DexScreener over a shared httpx.AsyncClient."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        base_url: str = DEFAULT_DEXSCREENER_BASE_URL,
        timeout_sec: float = DEFAULT_MARKET_TIMEOUT_SEC,
    ) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._timeout_sec = timeout_sec

    async def fetch_pairs(self, mint: str) -> list[TradingPair]:
        """
        Return every pair DexScreener lists for mint, in provider order.

        Raises NotFound when the provider 404s or lists no pairs, UpstreamError
        on timeouts, transport errors, other non-2xx statuses or bad JSON.
        """
        url = self._base_url + TOKENS_PATH.format(mint=mint)
        try:
            resp = await asyncio.wait_for(
                self._http.get(url, timeout=self._timeout_sec),
                timeout=self._timeout_sec,
            )
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("market_fetch_failed", provider=PROVIDER_NAME, status_code=status)
            if status == 404:
                raise NotFound(NO_DATA_MESSAGE) from e
            raise UpstreamError(PROVIDER_NAME) from e
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.error(
                "market_fetch_failed",
                provider=PROVIDER_NAME,
                error="timeout",
                timeout_sec=self._timeout_sec,
            )
            raise UpstreamError(PROVIDER_NAME, TIMEOUT_MESSAGE) from e
        except httpx.HTTPError as e:
            logger.error("market_fetch_failed", provider=PROVIDER_NAME, error=str(e))
            raise UpstreamError(PROVIDER_NAME) from e
        except ValueError as e:
            logger.error("market_fetch_failed", provider=PROVIDER_NAME, error="invalid_json")
            raise UpstreamError(PROVIDER_NAME) from e

        pairs = _parse_pairs(data)
        if not pairs:
            logger.info("market_pairs_empty", provider=PROVIDER_NAME)
            raise NotFound()
        return pairs


def _parse_pairs(data: Any) -> list[TradingPair]:
    """Extract TradingPair list from a tokens response; non-object entries are skipped."""
    if not isinstance(data, dict):
        return []
    raw = data.get("pairs") or []
    if not isinstance(raw, list):
        return []
    return [TradingPair.from_provider_item(item) for item in raw if isinstance(item, dict)]
