"""
Structured logging: structlog with JSON or console output.

Every line carries event_type, level, logger, an ISO timestamp and whatever
request context is bound with request_context() (the mint being served).
Provider clients therefore log without passing the mint around.

Configured from the environment on first import; create_app() reconfigures it
from Settings. No other pumpfun_api imports here to avoid circular imports.
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import AbstractContextManager
from datetime import datetime, timezone
from typing import Any

import structlog

# uvicorn level names; "trace" is below DEBUG and maps to DEBUG for structlog
LOG_LEVELS = ("critical", "error", "warning", "info", "debug", "trace")
_LEVEL_ALIASES = {"warn": "warning", "fatal": "critical"}


def normalize_log_level(raw: str | None, default: str = "info") -> str:
    """Lower-case level accepted by uvicorn; aliases mapped, unknown values -> default."""
    level = (raw or "").strip().lower()
    level = _LEVEL_ALIASES.get(level, level)
    return level if level in LOG_LEVELS else default


def _level_value(level: str) -> int:
    if level == "trace":
        return logging.DEBUG
    return getattr(logging, level.upper(), logging.INFO)


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Ensure timestamp is always present (ISO 8601)."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Rename structlog 'event' to event_type; keep message if present."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    if "message" not in event_dict and "event_type" in event_dict:
        event_dict["message"] = str(event_dict["event_type"])
    return event_dict


def configure_logging(level: str = "info", log_format: str = "json") -> None:
    """(Re)configure structlog: context vars, level filter, JSON or console renderer."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
    ]
    if log_format.strip().lower() == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_level_value(normalize_log_level(level))),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )


if not structlog.is_configured():
    configure_logging(os.getenv("LOG_LEVEL", "info"), os.getenv("LOG_FORMAT", "json"))


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Return a structured logger for the given module name.

        logger = get_logger(__name__)
        logger.info("token_aggregated", pairs=3, holders_source="solscan_api")
    """
    return structlog.get_logger(name).bind(logger=name)


def request_context(**values: Any) -> AbstractContextManager[Any]:
    """
    Bind values (e.g. mint=...) to every log line emitted inside the block.

    Context vars are copied into tasks created inside the block, so concurrent
    provider calls inherit them; the binding is undone on exit.
    """
    return structlog.contextvars.bound_contextvars(**values)
