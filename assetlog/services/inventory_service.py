"""
Inventory service: record operations bound to one owned store.
Every mutating call runs in its own transaction.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Optional

from assetlog.codecs import csv_codec, json_codec
from assetlog.db import item_repo
from assetlog.db.database import Database
from assetlog.db.iterator import ItemIterator
from assetlog.models.item import Clock, Item, SystemClock

logger = logging.getLogger(__name__)


class InventoryService:
    """Facade over ``item_repo`` and ``ItemIterator`` for one ``Database``."""

    def __init__(self, db: Database, clock: Optional[Clock] = None):
        self._db = db
        self._clock = clock or SystemClock()

    @property
    def db(self) -> Database:
        return self._db

    def close(self) -> None:
        self._db.close()

    def __enter__(self) -> "InventoryService":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # -- writes ----------------------------------------------------------------

    def add_item(self, item: Item) -> int:
        with self._db.transaction() as conn:
            item_id = item_repo.add_item(conn, item, self._clock)
        logger.info(f"Added item {item_id}: {item.description}")
        return item_id

    def append_item(self, item: Item) -> None:
        with self._db.transaction() as conn:
            item_repo.append_item(conn, item, self._clock)
        logger.info(f"Stored item {item.id}: {item.description}")

    def edit_item(self, item: Item) -> bool:
        with self._db.transaction() as conn:
            changed = item_repo.edit_item(conn, item, self._clock)
        if changed:
            logger.info(f"Edited item {item.id}")
        else:
            logger.info(f"Edit skipped, no item {item.id}")
        return changed

    def append_remarks_entry(self, item_id: int, message: str) -> None:
        with self._db.transaction() as conn:
            item_repo.append_remarks_entry(conn, item_id, message, self._clock)
        logger.info(f"Logged remark on item {item_id}")

    def delete_item(self, item_id: int) -> bool:
        with self._db.transaction() as conn:
            deleted = item_repo.delete_item(conn, item_id)
        if deleted:
            logger.info(f"Deleted item {item_id}")
        return deleted

    def reset_sequence(self) -> None:
        with self._db.transaction() as conn:
            item_repo.reset_sequence(conn, self._db.index_start)
        logger.info(f"Reset id sequence to {self._db.index_start}")

    def import_items(self, items: Iterable[Item]) -> int:
        """All-or-nothing: either every item is written or none is."""
        with self._db.transaction() as conn:
            count = item_repo.import_items(conn, items, self._clock)
        logger.info(f"Imported {count} items")
        return count

    # -- reads -----------------------------------------------------------------

    def get_item_by_id(self, item_id: int) -> Item:
        return item_repo.get_item_by_id(self._db.connection(), item_id)

    def list_all(self) -> list[Item]:
        return item_repo.list_all(self._db.connection())

    def list_items_paged(self, after_id: int, limit: int) -> list[Item]:
        return item_repo.list_items_paged(self._db.connection(), after_id, limit)

    def iterate(self, where: str = "", *args: Any) -> ItemIterator:
        return ItemIterator(self._db.connection(), where, *args)

    # -- interchange -----------------------------------------------------------

    def export_csv(self, path: Path | str) -> int:
        return csv_codec.export_csv(self._db.connection(), path)

    def import_csv(self, path: Path | str) -> int:
        return self.import_items(csv_codec.read_csv(path))

    def export_json(self, path: Path | str) -> int:
        return json_codec.export_json(self._db.connection(), path)

    def export_json_string(self) -> str:
        return json_codec.export_json_string(self._db.connection())

    def import_json(self, path: Path | str) -> int:
        return self.import_items(json_codec.read_json(path))

    def import_json_string(self, raw: str) -> int:
        return self.import_items(json_codec.parse_items(raw))
