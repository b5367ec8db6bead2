"""
Structured error types for parabond runs.

Every failure a run can hit is fatal: a benchmark that silently drops a
portfolio produces timing data nobody can audit. The hierarchy below exists
so that the single place errors are handled (the CLI) can log them with
enough context to tell *which* portfolio or bond broke the run.

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────┐
        │                     ParabondError                        │
        │              (category, context, cause)                  │
        ├─────────────────────────────────────────────────────────┤
        │  InvalidPartition   CorruptDeck       EmptyPortfolio     │
        │  (VALIDATION)       (INTERNAL)        (SOURCE)           │
        │                                                          │
        │  NotFound           NonPositivePrice  TransportFailure   │
        │  (SOURCE)           (VALIDATION)      (NETWORK)          │
        │                                                          │
        │  MalformedDocument                                       │
        │  (SOURCE)                                                │
        └─────────────────────────────────────────────────────────┘

Guardrails:
    ❌ DON'T: Catch these inside a node to "skip" a portfolio
    ✅ DO: Let them propagate; the run aborts

    ❌ DON'T: Swallow the driver exception when wrapping it
    ✅ DO: Pass it as cause= for error chaining

Usage:
    from parabond.core.errors import NotFound, TransportFailure

    try:
        row = cursor.fetchone()
    except sqlite3.Error as e:
        raise TransportFailure("portfolio query failed", cause=e)
    if row is None:
        raise NotFound(f"no portfolio id={portf_id}").with_context(portf_id=portf_id)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error categories for classification in logs."""

    VALIDATION = "VALIDATION"     # Bad parameters, violated invariants
    SOURCE = "SOURCE"             # Missing or malformed documents
    NETWORK = "NETWORK"           # Driver / transport failures
    DATABASE = "DATABASE"         # Store-side failures
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Typed fields cover the identifiers a run deals with; anything else goes
    into ``metadata``. ``to_dict()`` drops unset fields so log lines stay short.

    Examples:
        >>> ctx = ErrorContext(portf_id=7, node="fine-grained")
        >>> ctx.to_dict()
        {'portf_id': 7, 'node': 'fine-grained'}
    """

    portf_id: int | None = None
    bond_id: int | None = None
    node: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["portf_id", "bond_id", "node"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class ParabondError(Exception):
    """
    Base exception for all parabond errors.

    All instances carry a category, an :class:`ErrorContext` and an optional
    chained cause. Subclasses set ``default_category``.

    Examples:
        >>> error = ParabondError("unexpected state")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(portf_id=3).context.portf_id
        3
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ParabondError:
        """
        Add context to this error (fluent API).

        Usage:
            raise EmptyPortfolio("no bond ids").with_context(portf_id=12)
        """
        for key, value in kwargs.items():
            if key != "metadata" and hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# RUN SETUP ERRORS
# =============================================================================


class InvalidPartition(ParabondError):
    """Partition parameters out of range (negative ``n``, ``begin`` < 1)."""

    default_category = ErrorCategory.VALIDATION


class CorruptDeck(ParabondError):
    """Deck violates its invariants (wrong length, non-positive ids, duplicates)."""

    default_category = ErrorCategory.INTERNAL


# =============================================================================
# DATA ERRORS
# =============================================================================


class NotFound(ParabondError):
    """Gateway lookup miss for a portfolio or bond id."""

    default_category = ErrorCategory.SOURCE


class MalformedDocument(ParabondError):
    """Stored document cannot be decoded into a portfolio or bond."""

    default_category = ErrorCategory.SOURCE


class EmptyPortfolio(ParabondError):
    """Portfolio document lists no bond ids."""

    default_category = ErrorCategory.SOURCE


class NonPositivePrice(ParabondError):
    """Valuation produced a price <= 0."""

    default_category = ErrorCategory.VALIDATION


# =============================================================================
# TRANSPORT ERRORS
# =============================================================================


class TransportFailure(ParabondError):
    """
    Gateway call failed for network or driver reasons.

    Never retried: the run aborts.
    """

    default_category = ErrorCategory.NETWORK


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ParabondError",
    "InvalidPartition",
    "CorruptDeck",
    "NotFound",
    "EmptyPortfolio",
    "NonPositivePrice",
    "TransportFailure",
    "MalformedDocument",
]
