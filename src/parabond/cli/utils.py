"""
CLI utility helpers: logging bootstrap and report output.
"""

from __future__ import annotations

import json
import sys
from typing import NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from parabond.cluster.report import RunReport
from parabond.core.errors import ParabondError
from parabond.core.logging import DEFAULT_QUIET, configure_logging, get_logger
from parabond.core.settings import ParabondSettings, get_settings

console = Console()
err_console = Console(stderr=True)

logger = get_logger(__name__)


def setup_logging(settings: ParabondSettings) -> None:
    """Configure logging once per command; logs go to stderr, results to stdout."""
    configure_logging(
        level=settings.log_level,
        json_format=settings.json_logs,
        quiet=[*DEFAULT_QUIET, "sqlite3"],
        stream=sys.stderr,
    )


def fail(error: ParabondError) -> NoReturn:
    """Log a fatal run error and exit non-zero."""
    logger.error("run.aborted", **error.to_dict())
    err_console.print(f"[bold red]Error[/bold red] ({type(error).__name__}): {error.message}")
    raise typer.Exit(code=1)


def output_report(report: RunReport, *, as_json: bool = False) -> None:
    """Render a ``RunReport`` to the terminal."""
    if as_json:
        console.print_json(json.dumps(report.model_dump(), default=str))
        return

    table = Table(title=f"{report.node} node", show_lines=False, pad_edge=False)
    table.add_column("metric", style="cyan")
    table.add_column("value", justify="right")
    table.add_row("portfolios", str(report.portfolios))
    table.add_row("bonds", str(report.bonds))
    table.add_row("workers", str(report.workers))
    table.add_row("T1 (s)", f"{report.t1_seconds:.4f}")
    table.add_row("TN (s)", f"{report.tn_seconds:.4f}")
    table.add_row("speedup", f"{report.speedup:.2f}")
    table.add_row("efficiency", f"{report.efficiency:.2f}")
    table.add_row("total price", f"{report.total_price:,.2f}")
    checks = "passed" if report.checks_passed else f"missed {report.check_misses}"
    table.add_row("checks", f"{report.check_ids} {checks}")
    console.print(table)


def load_settings(**overrides) -> ParabondSettings:
    """Settings from env/.env with CLI overrides; configures logging."""
    try:
        settings = get_settings(**overrides)
    except ValidationError as e:
        err_console.print(f"[bold red]Invalid settings[/bold red]: {e}")
        raise typer.Exit(code=2) from e
    setup_logging(settings)
    return settings
