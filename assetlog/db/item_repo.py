"""Record operations for the ``inventory`` table.

Writes take an ``Executor`` (an open transaction or the bare connection);
reads take the connection. Transaction boundaries belong to the caller.
"""

from __future__ import annotations

import sqlite3
from typing import Iterable, Optional

from assetlog.db.database import Executor
from assetlog.db.errors import ItemNotFoundError, QueryError, WriteError
from assetlog.db.schema import INDEX_START, ITEM_COLUMNS, TABLE_NAME
from assetlog.models.item import Clock, Item, SystemClock, format_remarks

# New entry goes on its own line; an empty log just takes the entry.
_APPEND_REMARKS = """
    CASE WHEN remarks IS NULL OR remarks = ''
         THEN ?
         ELSE remarks || char(10) || ?
    END
"""


def _clock(clock: Optional[Clock]) -> Clock:
    return clock if clock is not None else SystemClock()


def _one_line(message: Optional[str]) -> str:
    """Fold a multi-line message so it stays a single log entry."""
    return " ".join(line.strip() for line in (message or "").splitlines() if line.strip())


# -- Create ----------------------------------------------------------------


def add_item(executor: Executor, item: Item, clock: Optional[Clock] = None) -> int:
    """Insert *item* with a store-assigned id and return that id."""
    try:
        cursor = executor.execute(
            """INSERT INTO inventory (description, location, status, remarks)
               VALUES (?, ?, ?, ?)""",
            (item.description, item.location, item.status,
             format_remarks(item.remarks, _clock(clock))),
        )
    except sqlite3.Error as exc:
        raise WriteError("add item", str(exc)) from exc
    return cursor.lastrowid


def append_item(executor: Executor, item: Item, clock: Optional[Clock] = None) -> None:
    """Insert-or-replace keyed by ``item.id``; a replace overwrites the remarks."""
    if not isinstance(item.id, int) or item.id <= 0:
        raise WriteError("append item", f"id must be a positive integer, got {item.id!r}")
    try:
        executor.execute(
            """INSERT OR REPLACE INTO inventory (id, description, location, status, remarks)
               VALUES (?, ?, ?, ?, ?)""",
            (item.id, item.description, item.location, item.status,
             format_remarks(item.remarks, _clock(clock))),
        )
    except sqlite3.Error as exc:
        raise WriteError("append item", str(exc), item_id=item.id) from exc


def import_items(executor: Executor, items: Iterable[Item], clock: Optional[Clock] = None) -> int:
    """Write every item: replace by id where one is set, add otherwise."""
    clock = _clock(clock)
    count = 0
    for item in items:
        if item.id:
            append_item(executor, item, clock)
        else:
            add_item(executor, item, clock)
        count += 1
    return count


# -- Update ----------------------------------------------------------------


def edit_item(executor: Executor, item: Item, clock: Optional[Clock] = None) -> bool:
    """Replace description/location/status and append ``item.remarks`` to the log.

    A missing id is not an error; the return value says whether a row changed.
    """
    entry = format_remarks(_one_line(item.remarks), _clock(clock))
    try:
        cursor = executor.execute(
            f"""UPDATE inventory
                SET description = ?, location = ?, status = ?,
                    remarks = {_APPEND_REMARKS}
                WHERE id = ?""",
            (item.description, item.location, item.status, entry, entry, item.id),
        )
    except sqlite3.Error as exc:
        raise WriteError("edit item", str(exc), item_id=item.id) from exc
    return cursor.rowcount > 0


def append_remarks_entry(
    executor: Executor, item_id: int, message: str, clock: Optional[Clock] = None
) -> None:
    """Append one timestamped line to the item's remarks; other fields are untouched.

    Raises ``ItemNotFoundError`` when no row has *item_id*.
    """
    entry = format_remarks(_one_line(message), _clock(clock))
    try:
        cursor = executor.execute(
            f"UPDATE inventory SET remarks = {_APPEND_REMARKS} WHERE id = ?",
            (entry, entry, item_id),
        )
    except sqlite3.Error as exc:
        raise WriteError("append remarks", str(exc), item_id=item_id) from exc
    if cursor.rowcount == 0:
        raise ItemNotFoundError("append remarks", item_id)


# -- Delete ----------------------------------------------------------------


def delete_item(executor: Executor, item_id: int) -> bool:
    try:
        cursor = executor.execute("DELETE FROM inventory WHERE id = ?", (item_id,))
    except sqlite3.Error as exc:
        raise WriteError("delete item", str(exc), item_id=item_id) from exc
    return cursor.rowcount > 0


def reset_sequence(executor: Executor, index_start: int = INDEX_START) -> None:
    """Set the id counter back to *index_start*, creating its row if needed."""
    try:
        cursor = executor.execute(
            "UPDATE sqlite_sequence SET seq = ? WHERE name = ?", (index_start, TABLE_NAME)
        )
        if cursor.rowcount == 0:
            executor.execute(
                "INSERT INTO sqlite_sequence (name, seq) VALUES (?, ?)",
                (TABLE_NAME, index_start),
            )
    except sqlite3.Error as exc:
        raise WriteError("reset sequence", str(exc)) from exc


# -- Read ------------------------------------------------------------------


def get_item_by_id(conn: sqlite3.Connection, item_id: int) -> Item:
    try:
        row = conn.execute(
            f"SELECT {ITEM_COLUMNS} FROM inventory WHERE id = ?", (item_id,)
        ).fetchone()
    except sqlite3.Error as exc:
        raise QueryError("get item", str(exc), item_id=item_id) from exc
    if row is None:
        raise ItemNotFoundError("get item", item_id)
    return Item.from_row(row)


def list_all(conn: sqlite3.Connection) -> list[Item]:
    try:
        rows = conn.execute(f"SELECT {ITEM_COLUMNS} FROM inventory ORDER BY id").fetchall()
    except sqlite3.Error as exc:
        raise QueryError("list items", str(exc)) from exc
    return [Item.from_row(r) for r in rows]


def list_items_paged(conn: sqlite3.Connection, after_id: int, limit: int) -> list[Item]:
    """Up to *limit* items with id greater than *after_id*, ascending."""
    try:
        rows = conn.execute(
            f"""SELECT {ITEM_COLUMNS} FROM inventory
                WHERE id > ?
                ORDER BY id
                LIMIT ?""",
            (after_id, limit),
        ).fetchall()
    except sqlite3.Error as exc:
        raise QueryError("list items page", str(exc)) from exc
    return [Item.from_row(r) for r in rows]
