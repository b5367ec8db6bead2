"""Both strategies price the same partition to the same values."""

import pytest

from parabond.cluster.fine_grained import FineGrainedNode
from parabond.cluster.memory_bound import MemoryBoundNode
from parabond.cluster.partition import Partition
from parabond.store.memory import InMemoryGateway

NODES = [MemoryBoundNode, FineGrainedNode]


class TestStrategyAgreement:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("seed", [0, 5])
    async def test_strategies_agree(self, bonds, portfolios, seed):
        memory = InMemoryGateway(bonds, portfolios)
        fine = InMemoryGateway(bonds, portfolios)

        await MemoryBoundNode(Partition(n=5, seed=seed), memory, workers=3).analyze()
        await FineGrainedNode(Partition(n=5, seed=seed), fine, workers=3).analyze()

        assert memory.prices.keys() == fine.prices.keys()
        for portf_id, price in memory.prices.items():
            assert fine.prices[portf_id] == pytest.approx(price, abs=1e-9)


@pytest.mark.parametrize("node_cls", NODES)
class TestRerun:
    @pytest.mark.asyncio
    async def test_rerun_is_idempotent(self, gateway, node_cls):
        await node_cls(Partition(n=4), gateway).analyze()
        first = gateway.prices

        await node_cls(Partition(n=4), gateway).analyze()

        for portf_id, price in gateway.prices.items():
            assert price == pytest.approx(first[portf_id], abs=1e-9)

    @pytest.mark.asyncio
    async def test_sub_partition(self, gateway, node_cls):
        analysis = await node_cls(Partition(n=2, begin=3), gateway).analyze()

        assert sorted(r.portf_id for r in analysis.results) == [3, 4]
        assert set(gateway.prices) == {3, 4}
