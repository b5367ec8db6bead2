"""Fine-grained node: fan out over the bonds of each portfolio.

For every portfolio the node reads the bond id list, then fetches and prices
each bond as its own concurrent unit. Units carry nothing but a price
(:class:`PriceAccumulator`) and are summed in whatever order they finish.
One round-trip per bond buys the finest parallel granularity, which is what
this node measures against :mod:`parabond.cluster.memory_bound`.
"""

from __future__ import annotations

import operator
from functools import reduce

from parabond.cluster.jobs import Job, PriceAccumulator, Result
from parabond.cluster.node import BasicNode
from parabond.core.errors import EmptyPortfolio, NonPositivePrice
from parabond.core.logging import get_logger
from parabond.domain.valuator import value_bond

logger = get_logger(__name__)


class FineGrainedNode(BasicNode):
    """Prices one bond per worker, then rolls bond prices into the portfolio price."""

    name = "fine-grained"

    async def price(self, job: Job) -> Job:
        """Price a portfolio and persist its valuation."""
        t0 = self.clock()
        portf_id = job.portf_id

        bond_ids = await self.gateway.fetch_bond_ids(portf_id)
        if not bond_ids:
            raise EmptyPortfolio(f"bond ids empty for portf_id={portf_id}").with_context(
                portf_id=portf_id, node=self.name
            )

        async def _price_bond(bond_id: int) -> PriceAccumulator:
            bond = await self.gateway.fetch_bond(bond_id)
            price = await self.pool.run(value_bond, bond, self.curve)
            if price <= 0:
                raise NonPositivePrice(f"invalid price {price} for portf_id={portf_id}").with_context(
                    portf_id=portf_id, bond_id=bond_id, node=self.name
                )
            return PriceAccumulator(price)

        units = await self.fanout("bonds").map(_price_bond, bond_ids)
        total = reduce(operator.add, units, PriceAccumulator())

        await self.gateway.update_price(portf_id, total.price)

        t1 = self.clock()
        logger.debug("node.priced", portf_id=portf_id, bonds=len(bond_ids), price=total.price)
        return Job(portf_id, None, Result(portf_id, total.price, len(bond_ids), t0, t1))
