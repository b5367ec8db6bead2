"""Run settings for parabond nodes.

Invocation parameters are read once at start and fixed for the run.
``ParabondSettings`` gives every parameter a default, reads overrides from
``PARABOND_*`` environment variables (or a ``.env`` file), and the CLI
overrides those in turn with explicit options.

Examples:
    >>> from parabond.core.settings import ParabondSettings
    >>> s = ParabondSettings(n=10, seed=42)
    >>> s.partition_end
    11
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Portfolios priced per run when ``n`` is not given
PORTF_NUM = 100

# Portfolios in a full catalog
NUM_PORTFOLIOS = 100_000

# Bonds in a full catalog
NUM_BONDS = 5_000

# Upper bound on bonds per portfolio when seeding
MAX_PORTF_SIZE = 15


class ParabondSettings(BaseSettings):
    """Settings for one benchmark run.

    Fields
    ──────
    seed                  : Deck permutation seed (0 = ascending order)
    n                     : Number of portfolios to price
    begin                 : First portfolio id
    size                  : Catalog size (portfolios in the store)
    database              : SQLite document store path
    io_concurrency        : Max in-flight gateway calls
    workers               : Processes in the pricing pool
    portfolio_concurrency : Portfolios priced at once by the fine-grained node
    check_count           : Portfolios reset and verified around a run
    log_level             : Structlog log level
    json_logs             : JSON log output (None = auto-detect)
    """

    model_config = SettingsConfigDict(
        env_prefix="PARABOND_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Workload ─────────────────────────────────────────────────
    seed: int = 0
    n: int = PORTF_NUM
    begin: int = 1
    size: int = NUM_PORTFOLIOS

    # ── Storage ──────────────────────────────────────────────────
    database: Path = Field(
        default_factory=lambda: Path.home() / ".parabond" / "parabond.db",
        description="SQLite document store path",
    )

    # ── Concurrency ──────────────────────────────────────────────
    io_concurrency: int = 64
    workers: int = Field(default_factory=lambda: os.cpu_count() or 1)
    portfolio_concurrency: int = 1
    check_count: int = 3

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool | None = None

    @field_validator("check_count")
    @classmethod
    def _non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("must be >= 0")
        return v

    @field_validator("size", "io_concurrency", "workers", "portfolio_concurrency")
    @classmethod
    def _positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v

    @property
    def partition_end(self) -> int:
        """Exclusive upper bound of the portfolio id range."""
        return self.begin + self.n


def get_settings(**overrides) -> ParabondSettings:
    """Build settings, dropping ``None`` overrides so defaults/env apply."""
    return ParabondSettings(**{k: v for k, v in overrides.items() if v is not None})
