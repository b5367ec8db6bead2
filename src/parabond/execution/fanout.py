"""Fan-out / fan-in over asyncio tasks with bounded concurrency.

WHY
───
Both nodes launch one unit of work per portfolio or per bond and need every
unit to finish before moving on. The run is a benchmark, so a single failed
unit must abort the whole batch: there is no partial-result mode.

ARCHITECTURE
────────────
::

    FanOut(max_concurrency=64, name="load")
      └── .map(handler, items)  ─ one task per item, Semaphore-bounded
            ├── all succeed     → results in item order
            └── first failure   → cancel + drain siblings, re-raise it

Related modules:
    pool.py: process pool for the synchronous valuator

Example::

    fanout = FanOut(max_concurrency=32, name="load")
    portfolios = await fanout.map(gateway.fetch_bonds, deck)
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

from parabond.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class FanOut:
    """Runs an async handler over a batch of items, failing on the first error.

    Parameters
    ----------
    max_concurrency : int
        Maximum handlers awaiting at once (default 10).
    name : str
        Label used in log events.
    """

    def __init__(self, max_concurrency: int = 10, name: str = "fanout") -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        self._max_concurrency = max_concurrency
        self._name = name

    @property
    def max_concurrency(self) -> int:
        return self._max_concurrency

    async def map(
        self,
        handler: Callable[[T], Awaitable[R]],
        items: Iterable[T],
    ) -> list[R]:
        """Apply ``handler`` to every item concurrently.

        Returns:
            Handler results in the order of ``items``.

        Raises:
            The first exception raised by any handler. Tasks still pending at
            that point are cancelled and awaited before it propagates.
        """
        sem = asyncio.Semaphore(self._max_concurrency)

        async def _run_one(item: T) -> R:
            async with sem:
                return await handler(item)

        tasks = [asyncio.create_task(_run_one(item)) for item in items]
        if not tasks:
            return []

        t0 = time.perf_counter()
        logger.debug(
            "fanout.start",
            fanout=self._name,
            items=len(tasks),
            max_concurrency=self._max_concurrency,
        )

        done: set[asyncio.Task[R]] = set()
        try:
            done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        failed = [
            task for task in tasks
            if task in done and not task.cancelled() and task.exception() is not None
        ]
        if failed:
            error = failed[0].exception()
            logger.warning(
                "fanout.failed",
                fanout=self._name,
                items=len(tasks),
                failed=len(failed),
                cancelled=sum(1 for t in tasks if t.cancelled()),
                error=str(error),
                error_type=type(error).__name__,
            )
            raise error

        logger.debug(
            "fanout.complete",
            fanout=self._name,
            items=len(tasks),
            elapsed_ms=round((time.perf_counter() - t0) * 1000, 3),
        )
        return [task.result() for task in tasks]
