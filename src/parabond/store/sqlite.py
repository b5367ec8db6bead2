"""SQLite document store gateway.

Stores the Portfolios and Bonds collections as JSON documents, one row per
document keyed by ``id``::

    CREATE TABLE portfolios (id INTEGER PRIMARY KEY, doc TEXT NOT NULL)
    CREATE TABLE bonds      (id INTEGER PRIMARY KEY, doc TEXT NOT NULL)

Blocking ``sqlite3`` calls run on worker threads through
``asyncio.to_thread`` so each gateway method is a real suspension point. A
lock serializes access to the single connection. Every ``sqlite3.Error`` is
re-raised as :class:`TransportFailure` with the driver error chained; a
document that does not decode into a portfolio or bond raises
:class:`MalformedDocument`.

Usage::

    gateway = SqliteDocumentGateway("~/.parabond/parabond.db")
    gateway.create_collections()
    bonds = await gateway.fetch_bonds(42)
    gateway.close()
"""

from __future__ import annotations

import asyncio
import json
import sqlite3
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from parabond.core.errors import MalformedDocument, NotFound, TransportFailure
from parabond.core.logging import get_logger
from parabond.domain.bond import Bond, PortfolioBonds

logger = get_logger(__name__)

R = TypeVar("R")

_SCHEMA = (
    "CREATE TABLE IF NOT EXISTS portfolios (id INTEGER PRIMARY KEY, doc TEXT NOT NULL)",
    "CREATE TABLE IF NOT EXISTS bonds (id INTEGER PRIMARY KEY, doc TEXT NOT NULL)",
)


class SqliteDocumentGateway:
    """:class:`~parabond.store.gateway.PortfolioGateway` over a SQLite file."""

    def __init__(self, path: str | Path = ":memory:", *, timeout: float = 5.0) -> None:
        self.path = str(path)
        if self.path != ":memory:":
            Path(self.path).expanduser().parent.mkdir(parents=True, exist_ok=True)
            self.path = str(Path(self.path).expanduser())
        try:
            self._conn = sqlite3.connect(self.path, timeout=timeout, check_same_thread=False)
        except sqlite3.Error as e:
            raise TransportFailure(f"cannot open document store {self.path}", cause=e) from e
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()

    # -- lifecycle ---------------------------------------------------------

    def create_collections(self) -> None:
        """Create both collections if missing."""
        self._execute_sync(lambda conn: [conn.execute(ddl) for ddl in _SCHEMA], commit=True)

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def __enter__(self) -> SqliteDocumentGateway:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    # -- CatalogWriter -----------------------------------------------------

    def put_bonds(self, bonds: list[Bond]) -> None:
        rows = [(bond.id, json.dumps(bond.to_document())) for bond in bonds]
        self._execute_sync(
            lambda conn: conn.executemany("INSERT OR REPLACE INTO bonds (id, doc) VALUES (?, ?)", rows),
            commit=True,
        )

    def put_portfolios(self, portfolios: dict[int, list[int]]) -> None:
        rows = [
            (portf_id, json.dumps({"id": portf_id, "instruments": list(bond_ids), "price": 0.0}))
            for portf_id, bond_ids in portfolios.items()
        ]
        self._execute_sync(
            lambda conn: conn.executemany(
                "INSERT OR REPLACE INTO portfolios (id, doc) VALUES (?, ?)", rows
            ),
            commit=True,
        )

    def count(self, collection: str) -> int:
        if collection not in ("portfolios", "bonds"):
            raise ValueError(f"unknown collection {collection!r}")
        row = self._execute_sync(
            lambda conn: conn.execute(f"SELECT COUNT(*) FROM {collection}").fetchone()
        )
        return int(row[0])

    # -- PortfolioGateway --------------------------------------------------

    async def fetch_bond_ids(self, portf_id: int) -> list[int]:
        doc = await self._run(self._portfolio_doc, portf_id)
        return _instruments(doc, portf_id)

    async def fetch_bonds(self, portf_id: int) -> PortfolioBonds:
        return await self._run(self._fetch_bonds_sync, portf_id)

    async def fetch_bond(self, bond_id: int) -> Bond:
        return await self._run(self._bond_sync, bond_id)

    async def update_price(self, portf_id: int, price: float) -> None:
        await self._run(self._update_price_sync, portf_id, price)

    async def fetch_price(self, portf_id: int) -> float | None:
        doc = await self._run(self._portfolio_doc, portf_id)
        price = doc.get("price")
        return None if price is None else float(price)

    # -- sync bodies (run on worker threads) -------------------------------

    def _portfolio_doc(self, portf_id: int) -> dict[str, Any]:
        row = self._execute_sync(
            lambda conn: conn.execute("SELECT doc FROM portfolios WHERE id = ?", (portf_id,)).fetchone()
        )
        if row is None:
            raise NotFound(f"no portfolio id={portf_id}").with_context(portf_id=portf_id)
        return _decode(row["doc"], f"portfolio id={portf_id}", portf_id=portf_id)

    def _bond_sync(self, bond_id: int) -> Bond:
        row = self._execute_sync(
            lambda conn: conn.execute("SELECT doc FROM bonds WHERE id = ?", (bond_id,)).fetchone()
        )
        if row is None:
            raise NotFound(f"no bond id={bond_id}").with_context(bond_id=bond_id)
        return _decode_bond(row["doc"], bond_id)

    def _fetch_bonds_sync(self, portf_id: int) -> PortfolioBonds:
        bond_ids = _instruments(self._portfolio_doc(portf_id), portf_id)
        if not bond_ids:
            return PortfolioBonds(portf_id=portf_id, bonds=())

        placeholders = ",".join("?" for _ in bond_ids)
        rows = self._execute_sync(
            lambda conn: conn.execute(
                f"SELECT id, doc FROM bonds WHERE id IN ({placeholders})", tuple(bond_ids)
            ).fetchall()
        )
        by_id = {int(row["id"]): _decode_bond(row["doc"], int(row["id"])) for row in rows}

        missing = [bond_id for bond_id in bond_ids if bond_id not in by_id]
        if missing:
            raise NotFound(f"portfolio id={portf_id} lists unknown bonds {missing}").with_context(
                portf_id=portf_id, bond_id=missing[0]
            )
        return PortfolioBonds(portf_id=portf_id, bonds=tuple(by_id[b] for b in bond_ids))

    def _update_price_sync(self, portf_id: int, price: float) -> None:
        cursor = self._execute_sync(
            lambda conn: conn.execute(
                "UPDATE portfolios SET doc = json_set(doc, '$.price', ?) WHERE id = ?",
                (price, portf_id),
            ),
            commit=True,
        )
        if cursor.rowcount == 0:
            raise NotFound(f"no portfolio id={portf_id}").with_context(portf_id=portf_id)

    # -- plumbing ----------------------------------------------------------

    async def _run(self, fn: Callable[..., R], *args: Any) -> R:
        return await asyncio.to_thread(fn, *args)

    def _execute_sync(self, op: Callable[[sqlite3.Connection], R], *, commit: bool = False) -> R:
        with self._lock:
            try:
                result = op(self._conn)
                if commit:
                    self._conn.commit()
                return result
            except sqlite3.Error as e:
                if commit:
                    self._conn.rollback()
                logger.error("store.sqlite.failed", path=self.path, error=str(e))
                raise TransportFailure(f"document store call failed: {e}", cause=e) from e

    def __repr__(self) -> str:
        return f"SqliteDocumentGateway({self.path!r})"


# -- document decoding -----------------------------------------------------


def _decode(raw: str, label: str, **context: Any) -> dict[str, Any]:
    try:
        doc = json.loads(raw)
    except ValueError as e:
        raise MalformedDocument(f"{label} is not valid JSON", cause=e).with_context(**context) from e
    if not isinstance(doc, dict):
        raise MalformedDocument(f"{label} is not a JSON object").with_context(**context)
    return doc


def _decode_bond(raw: str, bond_id: int) -> Bond:
    doc = _decode(raw, f"bond id={bond_id}", bond_id=bond_id)
    try:
        return Bond.from_document(doc)
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedDocument(f"bond id={bond_id} has invalid terms: {e}", cause=e).with_context(
            bond_id=bond_id
        ) from e


def _instruments(doc: dict[str, Any], portf_id: int) -> list[int]:
    try:
        return [int(bond_id) for bond_id in doc.get("instruments", [])]
    except (TypeError, ValueError) as e:
        raise MalformedDocument(f"portfolio id={portf_id} has invalid instruments", cause=e).with_context(
            portf_id=portf_id
        ) from e
