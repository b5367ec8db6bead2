"""Tests for check portfolios and the run report."""

import pytest

from parabond.cluster.checks import check_reset, pick_check_ids, verify_checks
from parabond.cluster.jobs import Analysis, Result
from parabond.cluster.partition import Partition
from parabond.cluster.report import build_report


class TestPickCheckIds:
    def test_within_partition(self):
        partition = Partition(n=20, begin=10, seed=4)
        ids = pick_check_ids(partition, 3)
        assert len(ids) == 3
        assert ids == sorted(set(ids))
        assert all(i in partition for i in ids)

    def test_deterministic(self):
        partition = Partition(n=20, seed=4)
        assert pick_check_ids(partition, 3) == pick_check_ids(Partition(n=20, seed=4), 3)

    def test_capped_by_partition(self):
        assert pick_check_ids(Partition(n=2), 5) == [1, 2]
        assert pick_check_ids(Partition(n=0), 3) == []


class TestCheckReset:
    @pytest.mark.asyncio
    async def test_reset_then_verify(self, gateway):
        await gateway.update_price(1, 10.0)
        await gateway.update_price(2, 20.0)

        check_ids = await check_reset(gateway, Partition(n=2), count=2)

        assert check_ids == [1, 2]
        assert gateway.prices == {1: 0.0, 2: 0.0}
        assert await verify_checks(gateway, check_ids) == [1, 2]

        await gateway.update_price(1, 12.5)
        assert await verify_checks(gateway, check_ids) == [2]

    @pytest.mark.asyncio
    async def test_verify_never_priced(self, gateway):
        assert await verify_checks(gateway, [3]) == [3]


class TestBuildReport:
    def test_speedup_and_efficiency(self):
        analysis = Analysis(
            results=[
                Result(1, 100.0, 2, 0, 2_000_000_000),
                Result(2, 50.0, 3, 0, 2_000_000_000),
            ],
            start_ns=0,
            end_ns=1_000_000_000,
        )

        report = build_report("memory-bound", analysis, workers=4, check_ids=[1], check_misses=[])

        assert report.portfolios == 2
        assert report.bonds == 5
        assert report.t1_seconds == pytest.approx(4.0)
        assert report.tn_seconds == pytest.approx(1.0)
        assert report.speedup == pytest.approx(4.0)
        assert report.efficiency == pytest.approx(1.0)
        assert report.total_price == 150.0
        assert report.checks_passed

    def test_zero_elapsed(self):
        report = build_report("fine-grained", Analysis(), workers=1)
        assert report.speedup == 0.0
        assert report.portfolios == 0

    def test_misses_fail_checks(self):
        report = build_report("fine-grained", Analysis(), workers=1, check_ids=[3], check_misses=[3])
        assert not report.checks_passed
