"""Values carried through a node run: jobs, results and the analysis."""

from __future__ import annotations

from dataclasses import dataclass, field

from parabond.domain.bond import Bond


@dataclass(frozen=True)
class Result:
    """Priced portfolio with the price step's start/end clock readings (ns)."""

    portf_id: int
    total_price: float
    bond_count: int
    start_ns: int
    end_ns: int

    @property
    def elapsed_ns(self) -> int:
        return self.end_ns - self.start_ns


@dataclass
class Job:
    """A portfolio in flight.

    ``bonds`` is populated while the job is loaded and priced, ``result``
    once pricing completes.
    """

    portf_id: int
    bonds: list[Bond] | None = None
    result: Result | None = None


@dataclass(frozen=True)
class Analysis:
    """All results of one node run plus the run's wall-clock bounds (ns)."""

    results: list[Result] = field(default_factory=list)
    start_ns: int = 0
    end_ns: int = 0

    @property
    def elapsed_ns(self) -> int:
        return self.end_ns - self.start_ns

    @property
    def bond_count(self) -> int:
        return sum(r.bond_count for r in self.results)

    @property
    def serial_ns(self) -> int:
        """Sum of per-job pricing time (T1)."""
        return sum(r.elapsed_ns for r in self.results)


@dataclass(frozen=True)
class PriceAccumulator:
    """Reduction carrier for per-bond prices."""

    price: float = 0.0

    def __add__(self, other: PriceAccumulator) -> PriceAccumulator:
        return PriceAccumulator(self.price + other.price)
