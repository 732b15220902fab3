"""
Pump.fun Token API — market data aggregator for pump.fun tokens.

Serves one HTTP endpoint that looks up a Solana mint on DexScreener, enriches
it with a best-effort holder count from Solscan, and returns a normalized
JSON record. Stateless; no storage and no background workers.
"""

__version__ = "1.0.0"
