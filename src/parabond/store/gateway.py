"""
Portfolio/bond store gateway protocol.

The nodes only ever talk to the store through this contract. Every method is
a coroutine (a suspension point) and may raise :class:`NotFound` for an
unknown id or :class:`TransportFailure` when the store cannot be reached.
Neither is retried.

Architecture:
    ::

        PortfolioGateway (protocol)
        ├── fetch_bond_ids(portf_id)       → [bond id, ...]
        ├── fetch_bonds(portf_id)          → PortfolioBonds   (bulk form)
        ├── fetch_bond(bond_id)            → Bond
        ├── update_price(portf_id, price)  → None  (idempotent overwrite)
        └── fetch_price(portf_id)          → float | None

        Implementations:
        ├── InMemoryGateway         (store/memory.py, tests and dry runs)
        └── SqliteDocumentGateway   (store/sqlite.py)

Collections:
    Portfolios  {"id": int, "instruments": [bond id, ...], "price": float}
    Bonds       {"id": int, "coupon": float, "freq": int, "tenor": int, "maturity": float}
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from parabond.domain.bond import Bond, PortfolioBonds


@runtime_checkable
class PortfolioGateway(Protocol):
    """Stateless request/response access to the Portfolios and Bonds collections."""

    async def fetch_bond_ids(self, portf_id: int) -> list[int]:
        """Bond ids listed by a portfolio, in stored order."""
        ...

    async def fetch_bonds(self, portf_id: int) -> PortfolioBonds:
        """A portfolio with every bond it lists."""
        ...

    async def fetch_bond(self, bond_id: int) -> Bond:
        """A single bond."""
        ...

    async def update_price(self, portf_id: int, price: float) -> None:
        """Overwrite a portfolio's stored valuation."""
        ...

    async def fetch_price(self, portf_id: int) -> float | None:
        """A portfolio's stored valuation, ``None`` if never priced."""
        ...


@runtime_checkable
class CatalogWriter(Protocol):
    """Write side used only by catalog seeding, never by the nodes."""

    def put_bonds(self, bonds: list[Bond]) -> None: ...

    def put_portfolios(self, portfolios: dict[int, list[int]]) -> None: ...
