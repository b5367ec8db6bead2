"""Tests for PricingPool."""

import operator
import os

import pytest

from parabond.domain.valuator import value_bond, value_bonds
from parabond.execution.pool import PricingPool


class TestPricingPool:
    @pytest.mark.asyncio
    async def test_runs_in_worker_process(self):
        with PricingPool(max_workers=2) as pool:
            pid = await pool.run(os.getpid)

        assert pid != os.getpid()

    @pytest.mark.asyncio
    async def test_passes_arguments_and_errors(self):
        with PricingPool(max_workers=1) as pool:
            assert await pool.run(operator.truediv, 6, 3) == 2
            with pytest.raises(ZeroDivisionError):
                await pool.run(operator.truediv, 1, 0)

    @pytest.mark.asyncio
    async def test_pricing_matches_direct_valuation(self, bonds, flat_curve):
        with PricingPool(max_workers=2) as pool:
            total = await pool.run(value_bonds, bonds, flat_curve)
            single = await pool.run(value_bond, bonds[2], flat_curve)

        assert total == pytest.approx(value_bonds(bonds, flat_curve), abs=1e-9)
        assert single == pytest.approx(value_bond(bonds[2], flat_curve), abs=1e-9)

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            PricingPool(max_workers=0)
