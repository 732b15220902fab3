"""
API server — FastAPI application for the Pump.fun Token API.

Exposes:
- GET /api/pumpfun/{mint}: aggregated market data for a mint
- GET /health: liveness probe
- GET /: static API documentation
"""
