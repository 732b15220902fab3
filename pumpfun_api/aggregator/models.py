"""
Data models for the aggregator.

- TradingPair / HolderCount: normalized provider results (frozen dataclasses).
- AggregatedTokenRecord: the 200 response body (Pydantic, fixed keys).

Numeric provider fields arrive as strings, numbers, or not at all; to_number()
turns all of them into finite floats, defaulting to 0.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, Field

HOLDERS_SOURCE_AVAILABLE = "solscan_api"
HOLDERS_SOURCE_UNAVAILABLE = "unavailable"

# Leading numeric prefix, as accepted by lenient float parsing ("12.5abc" -> 12.5)
_NUMBER_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def to_number(value: Any) -> float:
    """Parse value as a finite float; missing, unparseable, NaN or infinite -> 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMBER_PREFIX.match(value.strip())
        if not match:
            return 0.0
        number = float(match.group(0))
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


# Integers above this lose precision as floats; keep them as floats
_MAX_SAFE_INTEGER = 2**53


def json_number(value: float) -> int | float:
    """Whole values as int (1000000, not 1000000.0); fractions stay float."""
    if value.is_integer() and abs(value) < _MAX_SAFE_INTEGER:
        return int(value)
    return value


def _str_or_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text or None


def _nested(item: dict[str, Any], key: str, field: str) -> Any:
    inner = item.get(key)
    if not isinstance(inner, dict):
        return None
    return inner.get(field)


@dataclass(frozen=True)
class TradingPair:
    """
    One venue's market listing for a mint, normalized from a DexScreener pair.

    Numeric fields are already parsed (0.0 when absent); text fields are None
    when the provider omitted them or sent an empty string.
    """

    base_symbol: str | None
    base_name: str | None
    fdv: float
    volume_24h_usd: float
    price_change_24h: float
    liquidity_usd: float
    price_usd: float
    dex_id: str | None
    pair_address: str | None

    @classmethod
    def from_provider_item(cls, item: dict[str, Any]) -> "TradingPair":
        """Build from a single entry of the DexScreener `pairs` array."""
        return cls(
            base_symbol=_str_or_none(_nested(item, "baseToken", "symbol")),
            base_name=_str_or_none(_nested(item, "baseToken", "name")),
            fdv=to_number(item.get("fdv")),
            volume_24h_usd=to_number(_nested(item, "volume", "h24")),
            price_change_24h=to_number(_nested(item, "priceChange", "h24")),
            liquidity_usd=to_number(_nested(item, "liquidity", "usd")),
            price_usd=to_number(item.get("priceUsd")),
            dex_id=_str_or_none(item.get("dexId")),
            pair_address=_str_or_none(item.get("pairAddress")),
        )


@dataclass(frozen=True)
class HolderCount:
    """Best-effort holder total: either a count or an explicit unavailable marker."""

    count: int | None

    @property
    def available(self) -> bool:
        return self.count is not None

    @property
    def source(self) -> str:
        return HOLDERS_SOURCE_AVAILABLE if self.available else HOLDERS_SOURCE_UNAVAILABLE

    @classmethod
    def of(cls, count: int) -> "HolderCount":
        return cls(count=count)

    @classmethod
    def unavailable(cls) -> "HolderCount":
        return cls(count=None)


# -----------------------------------------------------------------------------
# Response models
# -----------------------------------------------------------------------------


class MarketCap(BaseModel):
    usd: int | float = Field(..., description="Fully diluted valuation in USD")
    type: str = Field("fully_diluted_valuation")
    description: str = Field("Market cap calculated as: current price × total supply")


class Volume(BaseModel):
    usd_24h: int | float = Field(..., description="24h trading volume in USD")
    window: str = Field("24_hours")
    description: str = Field("Total trading volume across all DEXs in the last 24 hours")


class Holders(BaseModel):
    count: int | None = Field(None, description="Unique holder count, or null when unavailable")
    source: str = Field(..., description="solscan_api | unavailable")
    description: str = Field("Number of unique wallet addresses holding this token")


class DataSources(BaseModel):
    price_and_volume: str = "dexscreener_api"
    holder_count: str = "solscan_api"
    data_method: str = "on_chain_dex_aggregation"


class AggregatedTokenRecord(BaseModel):
    """GET /api/pumpfun/{mint} response: selected pair + holders + provenance."""

    mint: str = Field(..., description="Token mint address")
    symbol: str
    name: str
    marketcap: MarketCap
    volume: Volume
    holders: Holders
    price_usd: int | float
    price_change_24h: int | float
    liquidity_usd: int | float
    dex: str
    pair_address: str | None
    data_sources: DataSources = Field(default_factory=DataSources)
    timestamp: str = Field(..., description="ISO 8601 UTC generation time")
