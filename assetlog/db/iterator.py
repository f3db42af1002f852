"""Forward-only, single-pass cursor over inventory rows."""

from __future__ import annotations

import re
import sqlite3
from typing import Any, Optional

from assetlog.db.errors import IteratorScanError, QueryError
from assetlog.db.schema import ITEM_COLUMNS
from assetlog.models.item import Item

_WHERE = re.compile(r"^\s*where\b", re.IGNORECASE)


class ItemIterator:
    """
    Lazily yields ``Item`` objects ordered by id.

    Not restartable and not safe for concurrent use. ``close()`` releases the
    cursor and may be called any number of times; exhaustion closes it too.

        with ItemIterator(conn, "status = ?", "Operational") as it:
            for item in it:
                ...
    """

    def __init__(self, conn: sqlite3.Connection, where: str = "", *args: Any):
        query = f"SELECT {ITEM_COLUMNS} FROM inventory"
        if where.strip():
            clause = where.strip()
            if not _WHERE.match(clause):
                clause = f"WHERE {clause}"
            query += f" {clause}"
        query += " ORDER BY id"
        try:
            self._cursor: Optional[sqlite3.Cursor] = conn.execute(query, args)
        except sqlite3.Error as exc:
            raise QueryError("iterate items", str(exc)) from exc

    def __iter__(self) -> "ItemIterator":
        return self

    def __next__(self) -> Item:
        if self._cursor is None:
            raise StopIteration
        try:
            row = self._cursor.fetchone()
        except sqlite3.Error as exc:
            raise IteratorScanError("iterate items", str(exc)) from exc
        if row is None:
            self.close()
            raise StopIteration
        try:
            return Item.from_row(row)
        except (TypeError, ValueError) as exc:
            raise IteratorScanError("iterate items", f"bad row: {exc}") from exc

    def next_item(self) -> tuple[Optional[Item], bool]:
        """Advance one row: ``(item, True)``, or ``(None, False)`` once exhausted."""
        try:
            return next(self), True
        except StopIteration:
            return None, False

    def close(self) -> None:
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None

    @property
    def closed(self) -> bool:
        return self._cursor is None

    def __enter__(self) -> "ItemIterator":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
