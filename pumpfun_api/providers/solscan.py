"""
Solscan holder count client.

GET {base}/token/holders?token={mint}&offset=0&size=1 -> {"total": N}. Only the
aggregate total is read. Holder count is enrichment: every failure is logged
and returned as HolderCount.unavailable(), never raised. The whole call is
capped at timeout_sec, body read included.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from pumpfun_api.aggregator.models import HolderCount
from pumpfun_api.config.settings import (
    DEFAULT_HOLDERS_TIMEOUT_SEC,
    DEFAULT_HOLDERS_USER_AGENT,
    DEFAULT_SOLSCAN_BASE_URL,
)
from pumpfun_api.pumpfun_logging import get_logger

logger = get_logger(__name__)

PROVIDER_NAME = "solscan"
HOLDERS_PATH = "/token/holders"


def parse_total(data: Any) -> int | None:
    """
    Return the positive integer `total` from a holders response, else None.

    Accepts ints, integral floats and digit strings; zero counts as unavailable.
    """
    if not isinstance(data, dict):
        return None
    total = data.get("total")
    if isinstance(total, bool):
        return None
    if isinstance(total, float) and total.is_integer():
        total = int(total)
    elif isinstance(total, str) and total.strip().isdigit():
        total = int(total.strip())
    if isinstance(total, int) and total > 0:
        return total
    return None


class SolscanHolderClient:
    """Best-effort holder count lookup over a shared httpx.AsyncClient."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        base_url: str = DEFAULT_SOLSCAN_BASE_URL,
        timeout_sec: float = DEFAULT_HOLDERS_TIMEOUT_SEC,
        user_agent: str = DEFAULT_HOLDERS_USER_AGENT,
    ) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._timeout_sec = timeout_sec
        self._headers = {"User-Agent": user_agent}

    async def fetch_holder_count(self, mint: str) -> HolderCount:
        """Return the holder total for mint, or HolderCount.unavailable() on any failure."""
        params = {"token": mint, "offset": 0, "size": 1}
        try:
            resp = await asyncio.wait_for(
                self._http.get(
                    self._base_url + HOLDERS_PATH,
                    params=params,
                    headers=self._headers,
                    timeout=self._timeout_sec,
                ),
                timeout=self._timeout_sec,
            )
            resp.raise_for_status()
            total = parse_total(resp.json())
        except Exception as e:
            logger.warning(
                "holder_count_fetch_failed",
                provider=PROVIDER_NAME,
                error=str(e) or type(e).__name__,
            )
            return HolderCount.unavailable()
        if total is None:
            logger.info("holder_count_missing", provider=PROVIDER_NAME)
            return HolderCount.unavailable()
        return HolderCount.of(total)
