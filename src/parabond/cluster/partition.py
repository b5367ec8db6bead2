"""Partition and deck generation.

A :class:`Partition` names one run's workload: ``n`` consecutive portfolio
ids starting at ``begin``. The deck is the order those ids are processed in.
Seed 0 keeps the ids ascending; any other seed gives a permutation that is
reproducible run to run, so a deck can be rebuilt and checked against an
expected id set before the run starts.
"""

from __future__ import annotations

import hashlib
import random
from dataclasses import dataclass

from parabond.core.errors import CorruptDeck, InvalidPartition


@dataclass(frozen=True)
class Partition:
    """Contiguous id range ``[begin, begin + n)`` plus a permutation seed."""

    n: int
    begin: int = 1
    seed: int = 0

    def __post_init__(self) -> None:
        if self.n < 0:
            raise InvalidPartition(f"partition size must be >= 0, got n={self.n}")
        if self.begin < 1:
            raise InvalidPartition(f"portfolio ids start at 1, got begin={self.begin}")

    @property
    def end(self) -> int:
        """Exclusive upper bound of the id range."""
        return self.begin + self.n

    def __contains__(self, portf_id: int) -> bool:
        return self.begin <= portf_id < self.end


def build_deck(partition: Partition) -> list[int]:
    """Ordered portfolio ids for ``partition``.

    Raises:
        InvalidPartition: ``n`` is negative.
    """
    if partition.n < 0:
        raise InvalidPartition(f"partition size must be >= 0, got n={partition.n}")

    deck = list(range(partition.begin, partition.end))
    if partition.seed != 0:
        random.Random(partition.seed).shuffle(deck)
    return deck


def validate_deck(deck: list[int], partition: Partition) -> None:
    """Fail with :class:`CorruptDeck` unless ``deck`` is exactly the partition's ids."""
    if len(deck) != partition.n:
        raise CorruptDeck(f"deck has {len(deck)} ids, expected n={partition.n}")
    for portf_id in deck:
        if portf_id <= 0 or portf_id not in partition:
            raise CorruptDeck(f"deck id {portf_id} outside [{partition.begin}, {partition.end})")
    if len(set(deck)) != len(deck):
        raise CorruptDeck("deck contains duplicate ids")


def deck_checksum(deck: list[int]) -> str:
    """Order-independent sha256 over the deck's ids."""
    digest = hashlib.sha256()
    for portf_id in sorted(deck):
        digest.update(f"{portf_id},".encode())
    return digest.hexdigest()
