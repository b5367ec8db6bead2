"""Tests for FineGrainedNode."""

import pytest

from parabond.cluster.fine_grained import FineGrainedNode
from parabond.cluster.partition import Partition
from parabond.core.errors import EmptyPortfolio, NonPositivePrice, NotFound
from parabond.domain.bond import Bond
from parabond.domain.valuator import value_bond
from parabond.store.memory import InMemoryGateway


class TestPricing:
    @pytest.mark.asyncio
    async def test_prices_every_portfolio(self, gateway, bonds, portfolios, flat_curve):
        node = FineGrainedNode(Partition(n=3), gateway, curve=flat_curve, workers=2)

        analysis = await node.analyze()

        by_id = {b.id: b for b in bonds}
        for result in analysis.results:
            expected = sum(value_bond(by_id[i], flat_curve) for i in portfolios[result.portf_id])
            assert result.total_price == pytest.approx(expected)
            assert result.bond_count == len(portfolios[result.portf_id])
            assert gateway.prices[result.portf_id] == result.total_price

    @pytest.mark.asyncio
    async def test_one_fetch_per_bond(self, gateway):
        await FineGrainedNode(Partition(n=2), gateway).analyze()

        assert gateway.calls["fetch_bond_ids"] == 2
        assert gateway.calls["fetch_bond"] == 5
        assert gateway.calls["update_price"] == 2
        assert "fetch_bonds" not in gateway.calls

    @pytest.mark.asyncio
    async def test_concurrent_portfolios(self, gateway):
        node = FineGrainedNode(Partition(n=5, seed=3), gateway, portfolio_concurrency=4)

        analysis = await node.analyze()

        assert [r.portf_id for r in analysis.results] == node.get_deck()
        assert len(gateway.prices) == 5


class TestFailures:
    @pytest.mark.asyncio
    async def test_empty_portfolio(self, bonds):
        gateway = InMemoryGateway(bonds, {1: []})

        with pytest.raises(EmptyPortfolio) as exc_info:
            await FineGrainedNode(Partition(n=1), gateway).analyze()

        assert exc_info.value.context.portf_id == 1
        assert "fetch_bond" not in gateway.calls
        assert gateway.prices == {}

    @pytest.mark.asyncio
    async def test_non_positive_price_not_persisted(self, bonds):
        worthless = Bond(id=9, coupon=0.0, freq=1, tenor=1, maturity=0.0)
        gateway = InMemoryGateway([*bonds, worthless], {1: [1, 9]})

        with pytest.raises(NonPositivePrice) as exc_info:
            await FineGrainedNode(Partition(n=1), gateway).analyze()

        assert exc_info.value.context.bond_id == 9
        assert gateway.prices == {}

    @pytest.mark.asyncio
    async def test_missing_bond(self, bonds):
        gateway = InMemoryGateway(bonds, {1: [1, 42]})

        with pytest.raises(NotFound):
            await FineGrainedNode(Partition(n=1), gateway).analyze()

        assert gateway.prices == {}

    @pytest.mark.asyncio
    async def test_missing_portfolio(self, gateway):
        with pytest.raises(NotFound):
            await FineGrainedNode(Partition(n=1, begin=99), gateway).analyze()
