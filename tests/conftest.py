"""
Shared pytest fixtures for parabond tests.

This module provides:
- A small fixed bond catalog and the in-memory gateway holding it
- A SQLite document store on a temporary path
- A flat yield curve for hand-checkable prices
"""

from pathlib import Path

import pytest
import structlog

from parabond.domain.bond import Bond
from parabond.domain.yield_curve import CurveNode, YieldCurve
from parabond.store.memory import InMemoryGateway
from parabond.store.sqlite import SqliteDocumentGateway


# =============================================================================
# Catalog Fixtures
# =============================================================================


@pytest.fixture
def bonds() -> list[Bond]:
    return [
        Bond(id=1, coupon=5.0, freq=2, tenor=10),
        Bond(id=2, coupon=3.0, freq=1, tenor=5),
        Bond(id=3, coupon=7.0, freq=4, tenor=20),
        Bond(id=4, coupon=1.0, freq=12, tenor=2),
    ]


@pytest.fixture
def portfolios() -> dict[int, list[int]]:
    return {
        1: [1, 2],
        2: [2, 3, 4],
        3: [4],
        4: [1, 3],
        5: [3, 2, 1],
    }


@pytest.fixture
def gateway(bonds, portfolios) -> InMemoryGateway:
    return InMemoryGateway(bonds=bonds, portfolios=portfolios)


@pytest.fixture
def flat_curve() -> YieldCurve:
    return YieldCurve([CurveNode(1.0, 0.05)])


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "parabond.db"


@pytest.fixture
def sqlite_gateway(db_path, bonds, portfolios):
    gateway = SqliteDocumentGateway(db_path)
    gateway.create_collections()
    gateway.put_bonds(bonds)
    gateway.put_portfolios(portfolios)
    yield gateway
    gateway.close()


# =============================================================================
# Logging Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo any configure_logging() a test performed."""
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
