"""Parabond Core -- errors, logging and settings shared by every layer.

Architecture::

    errors.py      Fatal error taxonomy (ParabondError and subclasses)
    logging.py     structlog configuration, get_logger, LogContext
    settings.py    ParabondSettings (pydantic-settings, PARABOND_ prefix)
"""

from parabond.core.errors import (
    CorruptDeck,
    EmptyPortfolio,
    ErrorCategory,
    ErrorContext,
    InvalidPartition,
    MalformedDocument,
    NonPositivePrice,
    NotFound,
    ParabondError,
    TransportFailure,
)
from parabond.core.logging import LogContext, configure_logging, get_logger

__all__ = [
    "CorruptDeck",
    "EmptyPortfolio",
    "ErrorCategory",
    "ErrorContext",
    "InvalidPartition",
    "MalformedDocument",
    "NonPositivePrice",
    "NotFound",
    "ParabondError",
    "TransportFailure",
    "LogContext",
    "configure_logging",
    "get_logger",
]
