"""Structured logging (structlog) для всех модулей ядра."""

from src.core.structured_logging.logger import bind_chain, configure_structlog, get_logger

__all__ = [
    "bind_chain",
    "configure_structlog",
    "get_logger",
]
