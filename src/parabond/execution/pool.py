"""Process pool for the synchronous valuator.

Gateway calls are coroutines; valuation is pure-Python CPU work that cannot
run in parallel on threads because of the GIL. ``PricingPool`` hands those
calls to a ``ProcessPoolExecutor`` through ``run_in_executor`` so pricing
spreads across cores while the event loop keeps servicing I/O.

Callables and arguments cross the process boundary, so they must be
picklable: top-level functions such as
:func:`parabond.domain.valuator.value_bond`, not closures, lambdas or bound
methods.

Example::

    with PricingPool(max_workers=8) as pool:
        price = await pool.run(value_bond, bond, curve)
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor
from typing import Any, TypeVar

from parabond.core.logging import get_logger

logger = get_logger(__name__)

R = TypeVar("R")


class PricingPool:
    """``ProcessPoolExecutor`` shared by the pricing steps of one node run.

    Parameters
    ----------
    max_workers : int
        Number of worker processes (defaults to 4).
    """

    def __init__(self, max_workers: int = 4):
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self.max_workers = max_workers
        self.pool = ProcessPoolExecutor(max_workers=max_workers)
        logger.debug("pricing_pool.started", workers=max_workers)

    async def run(self, fn: Callable[..., R], *args: Any) -> R:
        """Run ``fn(*args)`` in a worker process and await its result."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.pool, fn, *args)

    def shutdown(self, wait: bool = True) -> None:
        """Shutdown process pool.

        Args:
            wait: If True, wait for pending work to complete
        """
        self.pool.shutdown(wait=wait, cancel_futures=not wait)

    def __enter__(self) -> PricingPool:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown(wait=True)
