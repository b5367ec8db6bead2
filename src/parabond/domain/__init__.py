"""Bond domain: instrument values, the yield curve and the valuator."""

from parabond.domain.bond import Bond, PortfolioBonds
from parabond.domain.valuator import SimpleBondValuator, value_bond, value_bonds
from parabond.domain.yield_curve import DEFAULT_CURVE, CurveNode, YieldCurve

__all__ = [
    "Bond",
    "PortfolioBonds",
    "SimpleBondValuator",
    "value_bond",
    "value_bonds",
    "DEFAULT_CURVE",
    "CurveNode",
    "YieldCurve",
]
