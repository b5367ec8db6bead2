"""In-memory gateway.

Holds both collections in dicts. Used by the test suite and for dry runs;
behaves like the SQLite gateway including :class:`NotFound` on misses.
"""

from __future__ import annotations

import asyncio

from parabond.core.errors import NotFound
from parabond.domain.bond import Bond, PortfolioBonds


class InMemoryGateway:
    """Dict-backed :class:`~parabond.store.gateway.PortfolioGateway`."""

    def __init__(
        self,
        bonds: list[Bond] | None = None,
        portfolios: dict[int, list[int]] | None = None,
    ) -> None:
        self._bonds: dict[int, Bond] = {}
        self._portfolios: dict[int, list[int]] = {}
        self._prices: dict[int, float] = {}
        self.calls: dict[str, int] = {}
        if bonds:
            self.put_bonds(bonds)
        if portfolios:
            self.put_portfolios(portfolios)

    # -- CatalogWriter -----------------------------------------------------

    def put_bonds(self, bonds: list[Bond]) -> None:
        for bond in bonds:
            self._bonds[bond.id] = bond

    def put_portfolios(self, portfolios: dict[int, list[int]]) -> None:
        for portf_id, bond_ids in portfolios.items():
            self._portfolios[portf_id] = list(bond_ids)

    # -- PortfolioGateway --------------------------------------------------

    async def fetch_bond_ids(self, portf_id: int) -> list[int]:
        self._count("fetch_bond_ids")
        await asyncio.sleep(0)
        if portf_id not in self._portfolios:
            raise NotFound(f"no portfolio id={portf_id}").with_context(portf_id=portf_id)
        return list(self._portfolios[portf_id])

    async def fetch_bonds(self, portf_id: int) -> PortfolioBonds:
        self._count("fetch_bonds")
        bond_ids = await self.fetch_bond_ids(portf_id)
        bonds = tuple([await self.fetch_bond(bond_id) for bond_id in bond_ids])
        return PortfolioBonds(portf_id=portf_id, bonds=bonds)

    async def fetch_bond(self, bond_id: int) -> Bond:
        self._count("fetch_bond")
        await asyncio.sleep(0)
        if bond_id not in self._bonds:
            raise NotFound(f"no bond id={bond_id}").with_context(bond_id=bond_id)
        return self._bonds[bond_id]

    async def update_price(self, portf_id: int, price: float) -> None:
        self._count("update_price")
        await asyncio.sleep(0)
        if portf_id not in self._portfolios:
            raise NotFound(f"no portfolio id={portf_id}").with_context(portf_id=portf_id)
        self._prices[portf_id] = price

    async def fetch_price(self, portf_id: int) -> float | None:
        self._count("fetch_price")
        if portf_id not in self._portfolios:
            raise NotFound(f"no portfolio id={portf_id}").with_context(portf_id=portf_id)
        return self._prices.get(portf_id)

    # -- inspection --------------------------------------------------------

    @property
    def prices(self) -> dict[int, float]:
        return dict(self._prices)

    def _count(self, op: str) -> None:
        self.calls[op] = self.calls.get(op, 0) + 1
