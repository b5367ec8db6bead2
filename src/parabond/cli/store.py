"""
CLI: ``parabond seed``: catalog generation.
"""

from __future__ import annotations

from pathlib import Path

import typer

from parabond.cli.utils import console, fail, load_settings
from parabond.core.errors import ParabondError
from parabond.core.settings import MAX_PORTF_SIZE, NUM_BONDS
from parabond.store.seed import seed_catalog
from parabond.store.sqlite import SqliteDocumentGateway


def seed(
    portfolios: int | None = typer.Option(None, "--portfolios", "-p", help="Portfolios to create (default: catalog size)."),
    bonds: int = typer.Option(NUM_BONDS, "--bonds", help="Bonds to create."),
    max_size: int = typer.Option(MAX_PORTF_SIZE, "--max-size", help="Max bonds per portfolio."),
    seed_value: int = typer.Option(0, "--seed", help="Catalog generator seed."),
    database: Path | None = typer.Option(None, "--database", "-d", help="Document store path."),
) -> None:
    """Write a deterministic catalog into the document store."""
    settings = load_settings(database=database)
    count = settings.size if portfolios is None else portfolios

    try:
        with SqliteDocumentGateway(settings.database) as gateway:
            gateway.create_collections()
            seed_catalog(gateway, count, bonds, seed=seed_value, max_portf_size=max_size)
            stored = (gateway.count("portfolios"), gateway.count("bonds"))
    except ParabondError as e:
        fail(e)
    except ValueError as e:
        console.print(f"[bold red]Error[/bold red]: {e}")
        raise typer.Exit(code=2) from e

    console.print(
        f"Seeded [cyan]{settings.database}[/cyan]: {stored[0]} portfolios, {stored[1]} bonds"
    )
