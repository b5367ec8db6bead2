"""Simple bond valuator.

Prices a coupon bond as the present value of its cash flows::

    c     = maturity * coupon / 100 / freq
    P     = Σ_{k=1..tenor*freq} c / (1 + r(t_k)/freq)^k  +  maturity / (1 + r(T)/freq)^(tenor*freq)
    t_k   = k / freq,   T = tenor

where ``r(t)`` is the curve rate at time ``t``. Pure and synchronous.

The nodes price in worker processes, so the entry points they hand to the
pool are the top-level functions :func:`value_bond` and :func:`value_bonds`
(picklable, unlike bound methods or closures).
"""

from __future__ import annotations

from collections.abc import Iterable

from parabond.domain.bond import Bond
from parabond.domain.yield_curve import DEFAULT_CURVE, YieldCurve


class SimpleBondValuator:
    """Discounts a bond's coupons and face value along a yield curve."""

    def __init__(self, bond: Bond, curve: YieldCurve = DEFAULT_CURVE):
        self.bond = bond
        self.curve = curve

    def price(self) -> float:
        bond = self.bond
        periods = bond.tenor * bond.freq
        coupon = bond.maturity * bond.coupon / 100.0 / bond.freq

        pv = 0.0
        for k in range(1, periods + 1):
            r = self.curve.rate(k / bond.freq)
            pv += coupon / (1.0 + r / bond.freq) ** k

        r = self.curve.rate(float(bond.tenor))
        pv += bond.maturity / (1.0 + r / bond.freq) ** periods
        return pv


def value_bond(bond: Bond, curve: YieldCurve = DEFAULT_CURVE) -> float:
    """Price of one bond."""
    return SimpleBondValuator(bond, curve).price()


def value_bonds(bonds: Iterable[Bond], curve: YieldCurve = DEFAULT_CURVE) -> float:
    """Sum of bond prices, starting from 0.0."""
    total = 0.0
    for bond in bonds:
        total += SimpleBondValuator(bond, curve).price()
    return total
