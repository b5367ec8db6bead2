"""
CLI: ``parabond memory-bound`` / ``parabond fine-grained``: node runs.

Both commands reset the check portfolios, run the node over the partition,
verify the checks and print the run report. Any run error exits with 1.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer

from parabond.cli.utils import fail, load_settings, output_report
from parabond.cluster.checks import check_reset, verify_checks
from parabond.cluster.fine_grained import FineGrainedNode
from parabond.cluster.memory_bound import MemoryBoundNode
from parabond.cluster.node import Node
from parabond.cluster.partition import Partition
from parabond.cluster.report import RunReport, build_report, log_report
from parabond.core.errors import InvalidPartition, ParabondError
from parabond.core.settings import ParabondSettings
from parabond.store.sqlite import SqliteDocumentGateway


def memory_bound(
    seed: int | None = typer.Option(None, "--seed", help="Deck seed (0 = ascending)."),
    n: int | None = typer.Option(None, "--n", "-n", help="Number of portfolios."),
    begin: int | None = typer.Option(None, "--begin", "-b", help="First portfolio id."),
    size: int | None = typer.Option(None, "--size", help="Portfolios in the catalog."),
    database: Path | None = typer.Option(None, "--database", "-d", help="Document store path."),
    workers: int | None = typer.Option(None, "--workers", "-w", help="Pricing worker processes."),
    io_concurrency: int | None = typer.Option(None, "--io-concurrency", help="Max in-flight store calls."),
    sequential_load: bool = typer.Option(False, "--sequential-load", help="Load portfolios one at a time."),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Price a partition with the memory-bound node."""
    settings = load_settings(
        seed=seed, n=n, begin=begin, size=size, database=database,
        workers=workers, io_concurrency=io_concurrency,
    )
    report = _run(MemoryBoundNode, settings, sequential_load=sequential_load)
    output_report(report, as_json=json_out)


def fine_grained(
    seed: int | None = typer.Option(None, "--seed", help="Deck seed (0 = ascending)."),
    n: int | None = typer.Option(None, "--n", "-n", help="Number of portfolios."),
    begin: int | None = typer.Option(None, "--begin", "-b", help="First portfolio id."),
    size: int | None = typer.Option(None, "--size", help="Portfolios in the catalog."),
    database: Path | None = typer.Option(None, "--database", "-d", help="Document store path."),
    workers: int | None = typer.Option(None, "--workers", "-w", help="Pricing worker processes."),
    io_concurrency: int | None = typer.Option(None, "--io-concurrency", help="Max in-flight store calls."),
    portfolio_concurrency: int | None = typer.Option(
        None, "--portfolio-concurrency", help="Portfolios priced at once."
    ),
    json_out: bool = typer.Option(False, "--json"),
) -> None:
    """Price a partition with the fine-grained node."""
    settings = load_settings(
        seed=seed, n=n, begin=begin, size=size, database=database,
        workers=workers, io_concurrency=io_concurrency,
        portfolio_concurrency=portfolio_concurrency,
    )
    report = _run(FineGrainedNode, settings, portfolio_concurrency=settings.portfolio_concurrency)
    output_report(report, as_json=json_out)


# ── Helpers ──────────────────────────────────────────────────────────────


def _run(node_cls: type[Node], settings: ParabondSettings, **node_kwargs) -> RunReport:
    try:
        partition = Partition(n=settings.n, begin=settings.begin, seed=settings.seed)
        if partition.end - 1 > settings.size:
            raise InvalidPartition(
                f"partition [{partition.begin}, {partition.end}) exceeds catalog size {settings.size}"
            )
        return asyncio.run(_execute(node_cls, partition, settings, **node_kwargs))
    except ParabondError as e:
        fail(e)


async def _execute(
    node_cls: type[Node],
    partition: Partition,
    settings: ParabondSettings,
    **node_kwargs,
) -> RunReport:
    with SqliteDocumentGateway(settings.database) as gateway:
        check_ids = await check_reset(gateway, partition, settings.check_count)

        node = node_cls(
            partition,
            gateway,
            workers=settings.workers,
            io_concurrency=settings.io_concurrency,
            **node_kwargs,
        )
        analysis = await node.analyze()

        misses = await verify_checks(gateway, check_ids)

    report = build_report(node.name, analysis, settings.workers, check_ids, misses)
    log_report(report)
    return report
