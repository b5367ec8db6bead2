"""Yield curve used by the valuator.

A curve is a sorted set of (tenor in years, annual rate) nodes. Rates between
nodes are interpolated linearly; outside the node range the nearest node's
rate applies.
"""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass


@dataclass(frozen=True)
class CurveNode:
    """One point on a yield curve."""

    tenor_years: float
    rate: float  # decimal, e.g. 0.0365


class YieldCurve:
    """Piecewise-linear yield curve with flat extrapolation."""

    def __init__(self, nodes: list[CurveNode]):
        if not nodes:
            raise ValueError("yield curve needs at least one node")
        ordered = sorted(nodes, key=lambda node: node.tenor_years)
        self._tenors = [node.tenor_years for node in ordered]
        self._rates = [node.rate for node in ordered]

    @classmethod
    def from_rates(cls, rates: list[float]) -> YieldCurve:
        """Build a curve from annual rates for tenors 1, 2, ... len(rates) years."""
        return cls([CurveNode(float(year), rate) for year, rate in enumerate(rates, start=1)])

    def rate(self, t: float) -> float:
        """Annual rate for time ``t`` in years."""
        if t <= self._tenors[0]:
            return self._rates[0]
        if t >= self._tenors[-1]:
            return self._rates[-1]

        i = bisect_left(self._tenors, t)
        t0, t1 = self._tenors[i - 1], self._tenors[i]
        r0, r1 = self._rates[i - 1], self._rates[i]
        return r0 + (r1 - r0) * (t - t0) / (t1 - t0)

    def __len__(self) -> int:
        return len(self._tenors)

    def __repr__(self) -> str:
        return f"YieldCurve(nodes={len(self)}, short={self._rates[0]}, long={self._rates[-1]})"


# Upward-sloping curve over 1..30 years, shared by every node in a run
DEFAULT_CURVE = YieldCurve.from_rates(
    [
        0.0500, 0.0510, 0.0520, 0.0530, 0.0540, 0.0548, 0.0556, 0.0564, 0.0572, 0.0580,
        0.0586, 0.0592, 0.0598, 0.0604, 0.0610, 0.0614, 0.0618, 0.0622, 0.0626, 0.0630,
        0.0633, 0.0636, 0.0639, 0.0642, 0.0645, 0.0647, 0.0649, 0.0651, 0.0653, 0.0655,
    ]
)
