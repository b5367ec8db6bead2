"""Memory-bound node: load every portfolio, then price in memory.

Two phases with a barrier between them:

1. **Load**: one ``fetch_bonds`` per portfolio, all launched together; the
   phase ends only when every fetch has returned. Any failure aborts the run
   before a single portfolio is priced.
2. **Price**: a parallel map over the resident jobs: sum the bond prices,
   persist the sum, emit the result. No loads happen in this phase.

I/O latency and compute are measured apart, the opposite trade-off from
:mod:`parabond.cluster.fine_grained`.
"""

from __future__ import annotations

import time

from parabond.cluster.jobs import Job, Result
from parabond.cluster.node import Node
from parabond.cluster.partition import Partition
from parabond.core.logging import get_logger
from parabond.domain.valuator import value_bonds
from parabond.store.gateway import PortfolioGateway

logger = get_logger(__name__)


class MemoryBoundNode(Node):
    """Prices one portfolio per worker after loading all bonds into memory.

    Set ``sequential_load`` to load portfolio by portfolio and bond by bond
    instead of the concurrent bulk load; the price phase is unchanged.
    """

    name = "memory-bound"

    def __init__(self, partition: Partition, gateway: PortfolioGateway, *, sequential_load: bool = False, **kwargs) -> None:
        super().__init__(partition, gateway, **kwargs)
        self.sequential_load = sequential_load

    async def run_jobs(self, specs: list[Job]) -> list[Job]:
        t0 = time.perf_counter()
        if self.sequential_load:
            jobs = await self.load_sequential(specs)
        else:
            jobs = await self.load_parallel(specs)
        logger.info(
            "node.load.complete",
            portfolios=len(jobs),
            bonds=sum(len(job.bonds or ()) for job in jobs),
            sequential=self.sequential_load,
            elapsed_ms=round((time.perf_counter() - t0) * 1000, 3),
        )

        return await self.fanout("price").map(self.price, jobs)

    async def load_parallel(self, specs: list[Job]) -> list[Job]:
        """Fetch every portfolio's bonds concurrently and wait for all of them."""

        async def _load(spec: Job) -> Job:
            loaded = await self.gateway.fetch_bonds(spec.portf_id)
            return Job(loaded.portf_id, list(loaded.bonds), None)

        return await self.fanout("load").map(_load, specs)

    async def load_sequential(self, specs: list[Job]) -> list[Job]:
        """Fetch bond ids, then each bond, one portfolio at a time."""
        jobs = []
        for spec in specs:
            bond_ids = await self.gateway.fetch_bond_ids(spec.portf_id)
            bonds = [await self.gateway.fetch_bond(bond_id) for bond_id in bond_ids]
            jobs.append(Job(spec.portf_id, bonds, None))
        return jobs

    async def price(self, job: Job) -> Job:
        """Price a job whose bonds are already in memory."""
        t0 = self.clock()

        bonds = job.bonds or []
        value = await self.pool.run(value_bonds, bonds, self.curve)

        await self.gateway.update_price(job.portf_id, value)

        t1 = self.clock()
        return Job(job.portf_id, None, Result(job.portf_id, value, len(bonds), t0, t1))
