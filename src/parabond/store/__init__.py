"""Document store access for the nodes.

Architecture::

    gateway.py   PortfolioGateway protocol (+ CatalogWriter for seeding)
    memory.py    InMemoryGateway
    sqlite.py    SqliteDocumentGateway (JSON documents in SQLite)
    seed.py      deterministic catalog generation
"""

from parabond.store.gateway import CatalogWriter, PortfolioGateway
from parabond.store.memory import InMemoryGateway
from parabond.store.sqlite import SqliteDocumentGateway

__all__ = [
    "CatalogWriter",
    "InMemoryGateway",
    "PortfolioGateway",
    "SqliteDocumentGateway",
]
