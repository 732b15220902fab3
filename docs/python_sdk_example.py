"""
Pump.fun Token API Python client example and manual smoke test.

Uses the requests library. Points at API_URL (default http://localhost:3000).

Usage:
    from docs.python_sdk_example import PumpFunClient
    client = PumpFunClient("http://localhost:3000")
    data = client.get_token("CzLSujWBLFsSjncfkh59rUFqvafWcY5tzedWJSuypump")

Run the smoke test against a running server:
    python -m docs.python_sdk_example
"""

from __future__ import annotations

import os
import sys
from typing import Any

import requests

API_URL = os.getenv("API_URL", "http://localhost:3000")

# Popular pump.fun tokens used by the smoke test
TEST_TOKENS = [
    {"name": "GIGA", "mint": "CzLSujWBLFsSjncfkh59rUFqvafWcY5tzedWJSuypump"},
    {"name": "LOCKIN", "mint": "LocK1nWE7jNAQ1KwzxaMGfQ5u5GWWLJKwF19WwK9pump"},
]


class PumpFunClientError(Exception):
    """Raised when the API returns an error response."""

    def __init__(self, message: str, status_code: int | None = None, response: requests.Response | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class PumpFunClient:
    """Client for the Pump.fun Token API."""

    def __init__(self, base_url: str = API_URL, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()

    def _get(self, path: str) -> requests.Response:
        resp = self._session.get(f"{self.base_url}{path}", timeout=self.timeout)
        if not resp.ok:
            if resp.headers.get("content-type", "").startswith("application/json"):
                message = resp.json().get("message", resp.text)
            else:
                message = resp.text
            raise PumpFunClientError(f"API error: {message}", status_code=resp.status_code, response=resp)
        return resp

    def health(self) -> dict[str, str]:
        """Liveness probe."""
        return self._get("/health").json()

    def docs(self) -> dict[str, Any]:
        """Static API documentation payload."""
        return self._get("/").json()

    def get_token(self, mint: str) -> dict[str, Any]:
        """Aggregated market data for a mint."""
        return self._get(f"/api/pumpfun/{mint}").json()


def _fmt(value: Any) -> str:
    return f"{value:,}" if isinstance(value, (int, float)) else "N/A"


def smoke_test(client: PumpFunClient) -> int:
    print(f"Testing Pump.fun Token API at {client.base_url}\n")

    print("Test 1: Health Check")
    try:
        print("  OK:", client.health())
    except requests.RequestException as e:
        print("  FAILED:", e)
        print("  Make sure the server is running")
        return 1

    print("Test 2: Documentation Endpoint")
    try:
        client.docs()
        print("  OK")
    except (requests.RequestException, PumpFunClientError) as e:
        print("  FAILED:", e)

    for token in TEST_TOKENS:
        print(f"Test 3: Fetching data for {token['name']} ({token['mint']})")
        try:
            data = client.get_token(token["mint"])
        except (requests.RequestException, PumpFunClientError) as e:
            print("  FAILED:", e)
            continue
        print(f"  Symbol: {data['symbol']}")
        print(f"  Market Cap: ${_fmt(data['marketcap']['usd'])}")
        print(f"  24h Volume: ${_fmt(data['volume']['usd_24h'])}")
        print(f"  Holders: {_fmt(data['holders']['count'])}")
        print(f"  Price: ${data['price_usd']}")
        print(f"  24h Change: {data['price_change_24h']}%")

    print("Test 4: Invalid Mint Address")
    try:
        client.get_token("invalid")
        print("  FAILED: should have returned 400")
    except PumpFunClientError as e:
        if e.status_code == 400:
            print("  OK: rejected invalid mint address:", e)
        else:
            print("  FAILED: unexpected error:", e)
    except requests.RequestException as e:
        print("  FAILED:", e)

    print("\nAll tests completed")
    return 0


if __name__ == "__main__":
    sys.exit(smoke_test(PumpFunClient(API_URL)))
