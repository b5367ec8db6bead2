"""
Root Typer application for the parabond CLI.
"""

from __future__ import annotations

import typer
from typer import Typer

app = Typer(
    name="parabond",
    help="parabond: portfolio pricing benchmark nodes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError
        from importlib.metadata import version as pkg_version

        try:
            v = pkg_version("parabond")
        except PackageNotFoundError:
            from parabond import __version__ as v
        typer.echo(f"parabond {v}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """parabond CLI: seed a document store and run pricing nodes against it."""


# ── Command registration ─────────────────────────────────────────────────

from parabond.cli.run import fine_grained, memory_bound  # noqa: E402
from parabond.cli.store import seed  # noqa: E402

app.command("memory-bound", help="Bulk-load all portfolios, then price in memory.")(memory_bound)
app.command("fine-grained", help="Fetch and price each bond of a portfolio concurrently.")(fine_grained)
app.command("seed", help="Generate a deterministic bond/portfolio catalog.")(seed)
