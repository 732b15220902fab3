"""Mint address shape check, run before any network call."""

from __future__ import annotations

from pumpfun_api.core.exceptions import InvalidIdentifier

MIN_MINT_LENGTH = 32
MAX_MINT_LENGTH = 44


def validate_identifier(mint: str | None) -> str:
    """
    Return mint unchanged if its length is within [32, 44]; raise InvalidIdentifier otherwise.

    Only the length is checked: no base-58 decoding, no checksum.
    """
    if not mint or not (MIN_MINT_LENGTH <= len(mint) <= MAX_MINT_LENGTH):
        raise InvalidIdentifier()
    return mint
