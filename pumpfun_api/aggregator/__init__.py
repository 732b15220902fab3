"""
Token data aggregator — validation, pair selection, composition, orchestration.

Pure building blocks (validate_identifier, select_best_pair, compose_record)
plus TokenAggregator, which wires them to injected provider clients.
"""

from pumpfun_api.aggregator.composer import compose_record
from pumpfun_api.aggregator.models import (
    AggregatedTokenRecord,
    HolderCount,
    TradingPair,
    to_number,
)
from pumpfun_api.aggregator.selection import select_best_pair
from pumpfun_api.aggregator.service import TokenAggregator
from pumpfun_api.aggregator.validation import validate_identifier

__all__ = [
    "AggregatedTokenRecord",
    "HolderCount",
    "TokenAggregator",
    "TradingPair",
    "compose_record",
    "select_best_pair",
    "to_number",
    "validate_identifier",
]
