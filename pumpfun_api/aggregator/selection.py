"""Pick the trading pair that represents a token."""

from __future__ import annotations

from collections.abc import Sequence

from pumpfun_api.aggregator.models import TradingPair


def select_best_pair(pairs: Sequence[TradingPair]) -> TradingPair:
    """
    Return the pair with the highest liquidity_usd.

    Linear scan from the first pair; a later pair replaces the current best only
    when its liquidity is strictly greater, so ties go to the earliest pair in
    provider order.
    """
    if not pairs:
        raise ValueError("select_best_pair requires at least one pair")
    best = pairs[0]
    for pair in pairs[1:]:
        if pair.liquidity_usd > best.liquidity_usd:
            best = pair
    return best
