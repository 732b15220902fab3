"""
Request orchestration: validate -> fetch market + holders -> select -> compose.

TokenAggregator receives its provider clients through the constructor so the
API server (and tests) decide which implementations to use. The holder fetch
runs concurrently with the market fetch; it returns a HolderCount value and
never raises, so it cannot change the outcome of the market path.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Callable, Protocol

from pumpfun_api.aggregator.composer import compose_record, utc_now
from pumpfun_api.aggregator.models import AggregatedTokenRecord, HolderCount, TradingPair
from pumpfun_api.aggregator.selection import select_best_pair
from pumpfun_api.aggregator.validation import validate_identifier
from pumpfun_api.core.exceptions import InvalidIdentifier
from pumpfun_api.pumpfun_logging import get_logger, request_context

logger = get_logger(__name__)


class MarketDataProvider(Protocol):
    async def fetch_pairs(self, mint: str) -> list[TradingPair]: ...


class HolderCountProvider(Protocol):
    async def fetch_holder_count(self, mint: str) -> HolderCount: ...


class TokenAggregator:
    """Build one AggregatedTokenRecord per request from injected providers."""

    def __init__(
        self,
        market: MarketDataProvider,
        holders: HolderCountProvider,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._market = market
        self._holders = holders
        self._clock = clock

    async def aggregate(self, mint: str | None) -> AggregatedTokenRecord:
        """
        Return the aggregated record for mint.

        Raises InvalidIdentifier before any network call, NotFound or
        UpstreamError when the market fetch fails. Holder failures only show
        up as holders.source == "unavailable".
        """
        try:
            mint = validate_identifier(mint)
        except InvalidIdentifier:
            logger.info("token_request_rejected", mint_length=len(mint or ""))
            raise

        with request_context(mint=mint):
            return await self._aggregate(mint)

    async def _aggregate(self, mint: str) -> AggregatedTokenRecord:
        holders_task = asyncio.create_task(self._holders.fetch_holder_count(mint))
        try:
            pairs = await self._market.fetch_pairs(mint)
        except BaseException:
            holders_task.cancel()
            raise

        best = select_best_pair(pairs)
        holders = await holders_task
        record = compose_record(mint, best, holders, now=self._clock())
        logger.info(
            "token_aggregated",
            pairs=len(pairs),
            dex=record.dex,
            liquidity_usd=record.liquidity_usd,
            holders_source=record.holders.source,
        )
        return record
