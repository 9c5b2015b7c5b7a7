"""
Structured logging для ядра Mallows модели (structlog).

Ключи событий: event_type, logger, level, timestamp + поля вызова
(alpha, alpha_prime, log_ratio, metric, n_items, ...).

Конфигурация из окружения:
- LOG_LEVEL: уровень (default WARNING — библиотека молчит, пока её не попросят)
- LOG_FORMAT: json (default) или console
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

import structlog

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
LOG_LEVEL_VALUE = getattr(logging, LOG_LEVEL, logging.WARNING)

LOG_FORMAT = os.getenv("LOG_FORMAT", "json").strip().lower()


def _add_timestamp(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """ISO 8601 timestamp, если не передан явно."""
    if "timestamp" not in event_dict:
        event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _normalize_event(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """structlog 'event' → event_type."""
    if "event" in event_dict and "event_type" not in event_dict:
        event_dict["event_type"] = event_dict.pop("event")
    return event_dict


def configure_structlog(level: int = LOG_LEVEL_VALUE, log_format: str = LOG_FORMAT) -> None:
    """Однократная конфигурация structlog: JSON или console, фильтр по уровню."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _add_timestamp,
        _normalize_event,
    ]
    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_structlog()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Structured logger для модуля.

        logger = get_logger(__name__)
        logger.debug("alpha_update_resolved", alpha=1.0, alpha_prime=1.1, accepted=True)
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_chain(chain_id: str | int) -> structlog.BoundLogger:
    """Logger с chain_id, привязанным ко всем последующим событиям (один на MCMC цепь)."""
    return get_logger("src.sampler").bind(chain_id=chain_id)
