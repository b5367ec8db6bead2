"""Node: shared orchestration of one benchmark run.

WHY
───
Both pricing strategies run the same outer shape: clock in, build and check
the deck, make one job per portfolio, load and price, clock out. Only the
load/price part differs, so that is the single method a strategy overrides.

ARCHITECTURE
────────────
::

    Node.analyze()
      ├── clock in
      ├── get_deck()           ─ build_deck + validate_deck (CorruptDeck)
      ├── job_specs(deck)      ─ Job(portf_id) per deck entry
      ├── run_jobs(specs)      ─ strategy: load + price → jobs with results
      └── clock out → Analysis(results, t0, t1)

    BasicNode.run_jobs  ─ FanOut over price(job), one unit per portfolio
      └── FineGrainedNode.price   (fine_grained.py)
    MemoryBoundNode.run_jobs      (memory_bound.py)

Every node owns a PricingPool for the duration of ``analyze``; valuation
runs there, gateway calls stay on the event loop.

Example::

    node = MemoryBoundNode(Partition(n=100), gateway, workers=8)
    analysis = asyncio.run(node.analyze())
"""

from __future__ import annotations

import time
import uuid
from abc import ABC, abstractmethod
from collections.abc import Callable

from parabond.cluster.jobs import Analysis, Job, Result
from parabond.cluster.partition import Partition, build_deck, deck_checksum, validate_deck
from parabond.core.errors import CorruptDeck, ParabondError
from parabond.core.logging import LogContext, get_logger
from parabond.domain.yield_curve import DEFAULT_CURVE, YieldCurve
from parabond.execution.fanout import FanOut
from parabond.execution.pool import PricingPool
from parabond.store.gateway import PortfolioGateway

logger = get_logger(__name__)


class Node(ABC):
    """Prices one partition of portfolios and produces an :class:`Analysis`.

    Parameters
    ----------
    partition : Partition
        Portfolio ids to price and their deck seed.
    gateway : PortfolioGateway
        Store access; every call is awaited.
    curve : YieldCurve
        Curve shared by all valuations of the run.
    workers : int
        Worker processes in the pricing pool.
    io_concurrency : int
        Max gateway calls in flight per fan-out.
    clock : callable
        Nanosecond clock, ``time.perf_counter_ns`` by default.
    """

    name = "node"

    def __init__(
        self,
        partition: Partition,
        gateway: PortfolioGateway,
        *,
        curve: YieldCurve = DEFAULT_CURVE,
        workers: int = 4,
        io_concurrency: int = 64,
        clock: Callable[[], int] = time.perf_counter_ns,
    ) -> None:
        self.partition = partition
        self.gateway = gateway
        self.curve = curve
        self.workers = workers
        self.io_concurrency = io_concurrency
        self.clock = clock
        self._pool: PricingPool | None = None

    # ── Orchestration ───────────────────────────────────────────────

    async def analyze(self) -> Analysis:
        """Run the whole partition and return its analysis."""
        run_id = uuid.uuid4().hex[:12]
        async with LogContext(node=self.name, run_id=run_id):
            t0 = self.clock()

            deck = self.get_deck()
            specs = self.job_specs(deck)
            logger.info(
                "node.start",
                n=self.partition.n,
                begin=self.partition.begin,
                seed=self.partition.seed,
                checksum=deck_checksum(deck),
                workers=self.workers,
            )

            with PricingPool(max_workers=self.workers) as pool:
                self._pool = pool
                try:
                    jobs = await self.run_jobs(specs)
                    results = self.collect_results(jobs)
                except ParabondError as e:
                    logger.error("node.failed", **e.to_dict())
                    raise
                finally:
                    self._pool = None

            t1 = self.clock()
            analysis = Analysis(
                results=results,
                start_ns=t0,
                end_ns=t1,
            )
            logger.info(
                "node.complete",
                portfolios=len(analysis.results),
                bonds=analysis.bond_count,
                elapsed_ms=round(analysis.elapsed_ns / 1e6, 3),
            )
            return analysis

    def get_deck(self) -> list[int]:
        """Deck for this node's partition; :class:`CorruptDeck` if it is malformed."""
        deck = build_deck(self.partition)
        validate_deck(deck, self.partition)
        return deck

    def job_specs(self, deck: list[int]) -> list[Job]:
        """One data-less job per deck entry."""
        return [Job(portf_id) for portf_id in deck]

    def collect_results(self, jobs: list[Job]) -> list[Result]:
        """Results of priced jobs in deck order; :class:`CorruptDeck` if any job has none."""
        unpriced = [job.portf_id for job in jobs if job.result is None]
        if unpriced:
            raise CorruptDeck(f"{len(unpriced)} jobs finished without a result: {unpriced}").with_context(
                node=self.name, portf_id=unpriced[0]
            )
        return [job.result for job in jobs]

    @abstractmethod
    async def run_jobs(self, specs: list[Job]) -> list[Job]:
        """Load and price ``specs``; every returned job carries its result."""

    # ── Execution helpers ───────────────────────────────────────────

    @property
    def pool(self) -> PricingPool:
        if self._pool is None:
            raise RuntimeError(f"{type(self).__name__} pricing pool is only available inside analyze()")
        return self._pool

    def fanout(self, name: str, max_concurrency: int | None = None) -> FanOut:
        return FanOut(max_concurrency=max_concurrency or self.io_concurrency, name=f"{self.name}.{name}")


class BasicNode(Node):
    """Node that prices each job independently via :meth:`price`.

    Portfolios are processed ``portfolio_concurrency`` at a time; 1 means one
    after another.
    """

    name = "basic"

    def __init__(self, partition: Partition, gateway: PortfolioGateway, *, portfolio_concurrency: int = 1, **kwargs) -> None:
        super().__init__(partition, gateway, **kwargs)
        self.portfolio_concurrency = portfolio_concurrency

    async def run_jobs(self, specs: list[Job]) -> list[Job]:
        return await self.fanout("portfolios", self.portfolio_concurrency).map(self.price, specs)

    @abstractmethod
    async def price(self, job: Job) -> Job:
        """Price one portfolio and persist its valuation."""
