"""
Application settings and environment configuration.

- PORT: listening port (default: 3000)
- API_HOST: bind address (default: 0.0.0.0)
- DEXSCREENER_BASE_URL: market data provider base URL
- SOLSCAN_BASE_URL: holder count provider base URL
- MARKET_TIMEOUT_SEC / HOLDERS_TIMEOUT_SEC: per-call timeouts (10 / 5 seconds)
- HOLDERS_USER_AGENT: client tag sent to the holder count provider
- LOG_LEVEL: uvicorn level name (warn -> warning; unknown -> info)
- LOG_FORMAT: json | console
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from pumpfun_api.pumpfun_logging.logger import normalize_log_level

# Project root: config is pumpfun_api/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_ROOT = _CONFIG_DIR.parent.parent
_ENV_PATH = _ROOT / ".env"

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_DEXSCREENER_BASE_URL = "https://api.dexscreener.com"
DEFAULT_SOLSCAN_BASE_URL = "https://api.solscan.io"
DEFAULT_MARKET_TIMEOUT_SEC = 10.0
DEFAULT_HOLDERS_TIMEOUT_SEC = 5.0
DEFAULT_HOLDERS_USER_AGENT = "PumpFunAPI/1.0"


@dataclass(frozen=True)
class Settings:
    """Service configuration; build with get_settings() or directly in tests."""

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    dexscreener_base_url: str = DEFAULT_DEXSCREENER_BASE_URL
    solscan_base_url: str = DEFAULT_SOLSCAN_BASE_URL
    market_timeout_sec: float = DEFAULT_MARKET_TIMEOUT_SEC
    holders_timeout_sec: float = DEFAULT_HOLDERS_TIMEOUT_SEC
    holders_user_agent: str = DEFAULT_HOLDERS_USER_AGENT
    log_level: str = "info"
    log_format: str = "json"


def load_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    load_dotenv(_ENV_PATH)


def _env_str(name: str, default: str) -> str:
    return (os.getenv(name) or "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    try:
        value = float(raw) if raw else default
    except ValueError:
        return default
    return value if value > 0 else default


def get_settings() -> Settings:
    """
    Return settings resolved from the environment.

    Invalid or non-positive numeric values fall back to defaults.
    Base URLs are returned without a trailing slash.
    """
    load_env()
    return Settings(
        port=_env_int("PORT", DEFAULT_PORT),
        host=_env_str("API_HOST", DEFAULT_HOST),
        dexscreener_base_url=_env_str("DEXSCREENER_BASE_URL", DEFAULT_DEXSCREENER_BASE_URL).rstrip("/"),
        solscan_base_url=_env_str("SOLSCAN_BASE_URL", DEFAULT_SOLSCAN_BASE_URL).rstrip("/"),
        market_timeout_sec=_env_float("MARKET_TIMEOUT_SEC", DEFAULT_MARKET_TIMEOUT_SEC),
        holders_timeout_sec=_env_float("HOLDERS_TIMEOUT_SEC", DEFAULT_HOLDERS_TIMEOUT_SEC),
        holders_user_agent=_env_str("HOLDERS_USER_AGENT", DEFAULT_HOLDERS_USER_AGENT),
        log_level=normalize_log_level(os.getenv("LOG_LEVEL")),
        log_format=_env_str("LOG_FORMAT", "json").lower(),
    )
