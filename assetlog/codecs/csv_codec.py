"""CSV interchange with header ``id,description,location,status,remarks``."""

from __future__ import annotations

import csv
import logging
import sqlite3
from pathlib import Path

from assetlog.db.errors import ImportFormatError, WriteError
from assetlog.db.item_repo import list_all
from assetlog.models.item import FIELDS, Item

logger = logging.getLogger(__name__)

HEADER = list(FIELDS)


def export_csv(conn: sqlite3.Connection, path: Path | str) -> int:
    """Write every item to *path*, ordered by id. Returns the row count."""
    items = list_all(conn)
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(HEADER)
            for item in items:
                writer.writerow([str(item.id), item.description, item.location,
                                 item.status, item.remarks])
    except OSError as exc:
        raise WriteError("export csv", f"{path}: {exc}") from exc
    logger.info(f"Exported {len(items)} rows to {path}")
    return len(items)


def read_csv(path: Path | str) -> list[Item]:
    """Parse an export file. Any malformed row rejects the whole file."""
    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            rows = list(csv.reader(f))
    except (OSError, csv.Error, UnicodeDecodeError) as exc:
        raise ImportFormatError("read csv", f"{path}: {exc}") from exc

    if not rows:
        raise ImportFormatError("read csv", f"{path}: empty file, header row missing")
    if [h.strip().lower() for h in rows[0]] != HEADER:
        raise ImportFormatError("read csv", f"{path}: expected header {','.join(HEADER)}")

    items: list[Item] = []
    for line_no, row in enumerate(rows[1:], start=2):
        if not row:
            continue
        if len(row) != len(HEADER):
            raise ImportFormatError(
                "read csv", f"line {line_no}: expected {len(HEADER)} columns, got {len(row)}"
            )
        raw_id = row[0].strip()
        try:
            item_id = int(raw_id) if raw_id else 0
        except ValueError as exc:
            raise ImportFormatError("read csv", f"line {line_no}: bad id {raw_id!r}") from exc
        if item_id < 0:
            raise ImportFormatError("read csv", f"line {line_no}: negative id {item_id}")
        items.append(Item(id=item_id, description=row[1], location=row[2],
                          status=row[3], remarks=row[4]))
    return items
