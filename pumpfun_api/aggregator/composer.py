"""
Response composer: selected pair + holder count -> AggregatedTokenRecord.

Pure apart from the timestamp, which comes from the supplied clock.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pumpfun_api.aggregator.models import (
    AggregatedTokenRecord,
    DataSources,
    HolderCount,
    Holders,
    MarketCap,
    TradingPair,
    Volume,
    json_number,
)

DEFAULT_SYMBOL = "UNKNOWN"
DEFAULT_NAME = "Unknown Token"
DEFAULT_DEX = "unknown"


def iso_timestamp(now: datetime) -> str:
    """UTC ISO 8601 with millisecond precision and Z suffix (2024-01-01T00:00:00.000Z)."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def compose_record(
    mint: str,
    pair: TradingPair,
    holders: HolderCount,
    now: datetime | None = None,
) -> AggregatedTokenRecord:
    """Merge mint, pair and holder count into the response record; text fields get placeholders.

    Whole-number amounts are emitted as ints so JSON shows 1000000 rather than 1000000.0.
    """
    return AggregatedTokenRecord(
        mint=mint,
        symbol=pair.base_symbol or DEFAULT_SYMBOL,
        name=pair.base_name or DEFAULT_NAME,
        marketcap=MarketCap(usd=json_number(pair.fdv)),
        volume=Volume(usd_24h=json_number(pair.volume_24h_usd)),
        holders=Holders(count=holders.count, source=holders.source),
        price_usd=json_number(pair.price_usd),
        price_change_24h=json_number(pair.price_change_24h),
        liquidity_usd=json_number(pair.liquidity_usd),
        dex=pair.dex_id or DEFAULT_DEX,
        pair_address=pair.pair_address,
        data_sources=DataSources(),
        timestamp=iso_timestamp(now or utc_now()),
    )
