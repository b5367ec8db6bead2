"""Tests for the shared Node orchestration."""

import pytest

from parabond.cluster.jobs import Job, Result
from parabond.cluster.node import BasicNode
from parabond.cluster.partition import Partition
from parabond.core.errors import CorruptDeck


class StubNode(BasicNode):
    """Prices every portfolio at 1.0 except those listed in ``skip``."""

    name = "stub"

    def __init__(self, *args, skip=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.skip = set(skip)

    async def price(self, job):
        if job.portf_id in self.skip:
            return Job(job.portf_id)
        t = self.clock()
        return Job(job.portf_id, None, Result(job.portf_id, 1.0, 1, t, t))


class TestAnalyze:
    @pytest.mark.asyncio
    async def test_collects_every_result(self, gateway):
        analysis = await StubNode(Partition(n=4, seed=2), gateway, workers=1).analyze()

        assert sorted(r.portf_id for r in analysis.results) == [1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_job_without_result_fails_run(self, gateway):
        node = StubNode(Partition(n=4), gateway, workers=1, skip={3})

        with pytest.raises(CorruptDeck) as exc_info:
            await node.analyze()

        assert exc_info.value.context.portf_id == 3
        assert exc_info.value.context.node == "stub"


class TestCollectResults:
    def test_in_job_order(self, gateway):
        node = StubNode(Partition(n=2), gateway)
        jobs = [Job(2, None, Result(2, 5.0, 1, 0, 1)), Job(1, None, Result(1, 3.0, 1, 0, 1))]

        assert [r.portf_id for r in node.collect_results(jobs)] == [2, 1]

    def test_missing_result(self, gateway):
        node = StubNode(Partition(n=2), gateway)

        with pytest.raises(CorruptDeck):
            node.collect_results([Job(1, None, Result(1, 3.0, 1, 0, 1)), Job(2)])
