"""Run report derived from an :class:`Analysis`.

    T1          sum of per-portfolio pricing times (serial estimate)
    TN          wall-clock time of the whole run
    speedup     T1 / TN
    efficiency  speedup / workers
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from parabond.cluster.jobs import Analysis
from parabond.core.logging import get_logger

logger = get_logger(__name__)


class RunReport(BaseModel):
    """Summary of one node run, ready for logging or JSON output."""

    node: str
    portfolios: int = Field(..., ge=0)
    bonds: int = Field(..., ge=0)
    workers: int = Field(..., ge=1)
    t1_seconds: float = Field(..., ge=0)
    tn_seconds: float = Field(..., ge=0)
    speedup: float = Field(..., ge=0)
    efficiency: float = Field(..., ge=0)
    total_price: float
    check_ids: list[int] = Field(default_factory=list)
    check_misses: list[int] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def checks_passed(self) -> bool:
        return not self.check_misses


def build_report(
    node: str,
    analysis: Analysis,
    workers: int,
    check_ids: list[int] | None = None,
    check_misses: list[int] | None = None,
) -> RunReport:
    t1 = analysis.serial_ns / 1e9
    tn = analysis.elapsed_ns / 1e9
    speedup = t1 / tn if tn > 0 else 0.0
    return RunReport(
        node=node,
        portfolios=len(analysis.results),
        bonds=analysis.bond_count,
        workers=workers,
        t1_seconds=t1,
        tn_seconds=tn,
        speedup=speedup,
        efficiency=speedup / workers,
        total_price=sum(r.total_price for r in analysis.results),
        check_ids=list(check_ids or []),
        check_misses=list(check_misses or []),
    )


def log_report(report: RunReport) -> None:
    logger.info("node.report", **report.model_dump())
