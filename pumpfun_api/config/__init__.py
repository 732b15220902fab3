"""
Configuration for the Pump.fun Token API.

Loads settings from environment variables (and .env at the project root).
Exposes a single source of truth for port, provider URLs and timeouts.
"""

from pumpfun_api.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
