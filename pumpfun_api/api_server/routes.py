"""
API route definitions — REST endpoints.

Routes only translate HTTP to TokenAggregator calls; domain errors are raised
as TokenApiError subclasses and rendered by the handlers registered in app.py.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request

from pumpfun_api import __version__
from pumpfun_api.aggregator import AggregatedTokenRecord, TokenAggregator
from pumpfun_api.aggregator.composer import iso_timestamp, utc_now

router = APIRouter()

EXAMPLE_MINT = "CzLSujWBLFsSjncfkh59rUFqvafWcY5tzedWJSuypump"

API_DOCUMENTATION: dict[str, Any] = {
    "service": "Pump.fun Token API",
    "version": __version__,
    "endpoints": {
        "token_data": "GET /api/pumpfun/:mint",
        "health": "GET /health",
    },
    "example": f"/api/pumpfun/{EXAMPLE_MINT}",
    "documentation": {
        "mint": "Solana token mint address (32-44 characters)",
        "response_fields": {
            "marketcap": "Fully diluted valuation (price × total supply)",
            "volume": "24-hour trading volume in USD",
            "holders": "Number of unique token holders",
        },
        "data_sources": {
            "price_volume": "DexScreener API (aggregates Raydium, Orca, etc.)",
            "holders": "Solscan API (on-chain token account parser)",
        },
    },
}


def get_aggregator(request: Request) -> TokenAggregator:
    """Dependency: aggregator built by the app lifespan."""
    return request.app.state.aggregator


@router.get("/api/pumpfun/{mint}", response_model=AggregatedTokenRecord)
async def get_token_data(
    mint: str,
    aggregator: TokenAggregator = Depends(get_aggregator),
) -> AggregatedTokenRecord:
    """
    Market cap, 24h volume, holder count and price data for a pump.fun token.

    400 for a malformed mint, 404 when DexScreener lists no pairs, 500 for
    other upstream failures. Holder lookup failures still return 200.
    """
    return await aggregator.aggregate(mint)


@router.get("/api/pumpfun", include_in_schema=False)
@router.get("/api/pumpfun/", include_in_schema=False)
async def get_token_data_missing_mint(
    aggregator: TokenAggregator = Depends(get_aggregator),
) -> AggregatedTokenRecord:
    """Mint omitted from the path: rejected by the validator like any bad mint."""
    return await aggregator.aggregate(None)


@router.get("/health")
def health() -> dict[str, str]:
    """Liveness probe: API is up."""
    return {"status": "ok", "timestamp": iso_timestamp(utc_now())}


@router.get("/")
def root() -> dict[str, Any]:
    """Static API documentation."""
    return API_DOCUMENTATION
