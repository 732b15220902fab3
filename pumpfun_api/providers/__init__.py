"""
Upstream provider clients.

- DexScreenerClient: trading pairs for a mint (required; errors propagate).
- SolscanHolderClient: holder total for a mint (best-effort; never raises).
- create_http_client: the shared httpx.AsyncClient both clients run on.
"""

from __future__ import annotations

import httpx

from pumpfun_api.providers.dexscreener import DexScreenerClient
from pumpfun_api.providers.solscan import SolscanHolderClient

__all__ = ["DexScreenerClient", "SolscanHolderClient", "create_http_client"]


def create_http_client(transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """AsyncClient for provider calls; follows redirects like the providers' own links expect."""
    return httpx.AsyncClient(transport=transport, follow_redirects=True)
