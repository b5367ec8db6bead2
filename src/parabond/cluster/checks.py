"""Check portfolios: reset before a run, verify after.

``check_reset`` picks a few ids from the partition, zeroes their stored
price and returns them. Once the node has run, ``verify_checks`` reads those
prices back; any check id still at zero (or never priced) was not persisted
by the run.
"""

from __future__ import annotations

import random

from parabond.cluster.partition import Partition
from parabond.core.logging import get_logger
from parabond.execution.fanout import FanOut
from parabond.store.gateway import PortfolioGateway

logger = get_logger(__name__)


def pick_check_ids(partition: Partition, count: int) -> list[int]:
    """Deterministic sample of ``count`` ids from the partition, ascending."""
    count = min(max(count, 0), partition.n)
    rng = random.Random(f"check:{partition.seed}:{partition.begin}:{partition.n}")
    return sorted(rng.sample(range(partition.begin, partition.end), count))


async def check_reset(
    gateway: PortfolioGateway,
    partition: Partition,
    count: int = 3,
    *,
    io_concurrency: int = 16,
) -> list[int]:
    """Zero the stored price of the sampled check portfolios and return their ids."""
    check_ids = pick_check_ids(partition, count)

    async def _reset(portf_id: int) -> None:
        await gateway.update_price(portf_id, 0.0)

    await FanOut(io_concurrency, name="checks.reset").map(_reset, check_ids)
    logger.info("checks.reset", check_ids=check_ids)
    return check_ids


async def verify_checks(
    gateway: PortfolioGateway,
    check_ids: list[int],
    *,
    io_concurrency: int = 16,
) -> list[int]:
    """Check ids whose stored price is missing or not positive."""
    prices = await FanOut(io_concurrency, name="checks.verify").map(gateway.fetch_price, check_ids)
    misses = [portf_id for portf_id, price in zip(check_ids, prices) if price is None or price <= 0]
    if misses:
        logger.warning("checks.missed", check_ids=check_ids, misses=misses)
    else:
        logger.info("checks.passed", check_ids=check_ids)
    return misses
