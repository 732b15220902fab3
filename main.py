"""
Main entrypoint: run the Pump.fun Token API under uvicorn.

Env: PORT (default 3000), API_HOST, DEXSCREENER_BASE_URL, SOLSCAN_BASE_URL,
MARKET_TIMEOUT_SEC, HOLDERS_TIMEOUT_SEC, HOLDERS_USER_AGENT, LOG_LEVEL, LOG_FORMAT.

Equivalent: uvicorn pumpfun_api.api_server.app:create_app --factory --port 3000
"""

# Configure structured JSON logging before other imports that may log
from pumpfun_api.pumpfun_logging import get_logger

logger = get_logger("main")


def main() -> None:
    from pumpfun_api.api_server.server import run

    run()


if __name__ == "__main__":
    main()
