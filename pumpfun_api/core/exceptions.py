"""
Application-level exceptions.

Each exception carries the HTTP status code, a fixed code-like `error` string
and a human-readable `message`. The API server renders them as
{"error": ..., "message": ...}; no tracebacks or upstream details are exposed.
"""

from __future__ import annotations


class TokenApiError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    error: str = "Internal server error"
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"error": self.error, "message": self.message}


class InvalidIdentifier(TokenApiError):
    """Mint address missing or outside the accepted length bounds."""

    status_code = 400
    error = "Invalid mint address format"
    default_message = "Mint address must be a valid Solana address (32-44 characters)"


class NotFound(TokenApiError):
    """Market data provider has no pairs for the mint."""

    status_code = 404
    error = "Token not found"
    default_message = "No trading pairs found for this mint address. Token may not be listed yet."


class InternalError(TokenApiError):
    """Any failure that is not the caller's fault."""


class UpstreamError(InternalError):
    """Market data provider call failed, timed out, or returned an unusable body."""

    default_message = "Failed to fetch market data from upstream provider"

    def __init__(self, provider: str, message: str | None = None):
        self.provider = provider
        super().__init__(message)
