"""
Structured logging for the Pump.fun Token API.

Use get_logger() in every module instead of the stdlib logging module and
request_context() to attach per-request fields such as the mint.
"""

from pumpfun_api.pumpfun_logging.logger import (
    configure_logging,
    get_logger,
    normalize_log_level,
    request_context,
)

__all__ = ["configure_logging", "get_logger", "normalize_log_level", "request_context"]
