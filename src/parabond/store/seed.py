"""Deterministic catalog generation.

Fills a store with ``bonds`` bond documents and ``portfolios`` portfolio
documents. The same ``seed`` always yields the same catalog, so timings from
different runs price the same instruments.

Bond terms:
    coupon   1..10 (% of face, whole numbers)
    freq     one of 1, 2, 4, 12
    tenor    1..30 years
    maturity 1000 (face value)

Each portfolio lists 1..``max_portf_size`` distinct bond ids.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

from parabond.core.logging import get_logger
from parabond.core.settings import MAX_PORTF_SIZE
from parabond.domain.bond import Bond
from parabond.store.gateway import CatalogWriter

logger = get_logger(__name__)

FREQUENCIES = (1, 2, 4, 12)

# Rows written per put_* call
BATCH_SIZE = 5_000


@dataclass(frozen=True)
class Catalog:
    bonds: list[Bond]
    portfolios: dict[int, list[int]]


def generate_catalog(
    portfolios: int,
    bonds: int,
    seed: int = 0,
    max_portf_size: int = MAX_PORTF_SIZE,
) -> Catalog:
    """Build bond and portfolio documents in memory."""
    if portfolios < 0 or bonds < 1:
        raise ValueError("need portfolios >= 0 and bonds >= 1")
    if max_portf_size < 1:
        raise ValueError("max_portf_size must be >= 1")

    rng = random.Random(seed)
    bond_list = [
        Bond(
            id=bond_id,
            coupon=float(rng.randint(1, 10)),
            freq=rng.choice(FREQUENCIES),
            tenor=rng.randint(1, 30),
            maturity=1000.0,
        )
        for bond_id in range(1, bonds + 1)
    ]

    upper = min(max_portf_size, bonds)
    portfolio_docs = {
        portf_id: rng.sample(range(1, bonds + 1), rng.randint(1, upper))
        for portf_id in range(1, portfolios + 1)
    }
    return Catalog(bonds=bond_list, portfolios=portfolio_docs)


def seed_catalog(
    store: CatalogWriter,
    portfolios: int,
    bonds: int,
    seed: int = 0,
    max_portf_size: int = MAX_PORTF_SIZE,
) -> Catalog:
    """Generate a catalog and write it to ``store`` in batches."""
    catalog = generate_catalog(portfolios, bonds, seed=seed, max_portf_size=max_portf_size)

    for i in range(0, len(catalog.bonds), BATCH_SIZE):
        store.put_bonds(catalog.bonds[i:i + BATCH_SIZE])

    items = list(catalog.portfolios.items())
    for i in range(0, len(items), BATCH_SIZE):
        store.put_portfolios(dict(items[i:i + BATCH_SIZE]))

    logger.info(
        "store.seeded",
        portfolios=len(catalog.portfolios),
        bonds=len(catalog.bonds),
        seed=seed,
    )
    return catalog
