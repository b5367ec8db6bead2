"""Parabond execution primitives: asyncio fan-out and the pricing pool."""

from parabond.execution.fanout import FanOut
from parabond.execution.pool import PricingPool

__all__ = ["FanOut", "PricingPool"]
